from tortoise import BaseDBAsyncClient


async def upgrade(db: BaseDBAsyncClient) -> str:
    return """
        CREATE TABLE IF NOT EXISTS "knowledge_base" (
            "id" UUID NOT NULL PRIMARY KEY,
            "content" TEXT NOT NULL,
            "metadata" JSONB NOT NULL,
            "created_at" TIMESTAMPTZ NOT NULL DEFAULT CURRENT_TIMESTAMP
        );
        COMMENT ON TABLE "knowledge_base" IS 'Knowledge chunks used as chat context';
        CREATE TABLE IF NOT EXISTS "scholarships" (
            "id" UUID NOT NULL PRIMARY KEY,
            "created_at" TIMESTAMPTZ NOT NULL DEFAULT CURRENT_TIMESTAMP,
            "updated_at" TIMESTAMPTZ NOT NULL DEFAULT CURRENT_TIMESTAMP,
            "name" VARCHAR(255) NOT NULL,
            "deadline" VARCHAR(100),
            "amount" VARCHAR(100),
            "description" TEXT,
            "eligibility" TEXT,
            "link" VARCHAR(500),
            "category" VARCHAR(50)
        );
        CREATE TABLE IF NOT EXISTS "resources" (
            "id" UUID NOT NULL PRIMARY KEY,
            "created_at" TIMESTAMPTZ NOT NULL DEFAULT CURRENT_TIMESTAMP,
            "updated_at" TIMESTAMPTZ NOT NULL DEFAULT CURRENT_TIMESTAMP,
            "title" VARCHAR(255) NOT NULL,
            "type" VARCHAR(50) NOT NULL,
            "link" VARCHAR(500) NOT NULL,
            "description" TEXT
        );
        CREATE TABLE IF NOT EXISTS "aerich" (
            "id" SERIAL NOT NULL PRIMARY KEY,
            "version" VARCHAR(255) NOT NULL,
            "app" VARCHAR(100) NOT NULL,
            "content" JSONB NOT NULL
        );
    """


async def downgrade(db: BaseDBAsyncClient) -> str:
    return """
        """
