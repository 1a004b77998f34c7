from tortoise import BaseDBAsyncClient


async def upgrade(db: BaseDBAsyncClient) -> str:
    return """
    -- Retrieval scans the most recent chunks first
    CREATE INDEX IF NOT EXISTS idx_knowledge_base_created_at ON knowledge_base (created_at DESC);
    """


async def downgrade(db: BaseDBAsyncClient) -> str:
    return """
    DROP INDEX IF EXISTS idx_knowledge_base_created_at;
    """
