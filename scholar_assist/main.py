import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from tortoise import Tortoise

from scholar_assist.api import chat, facts, knowledge
from scholar_assist.core.config import TORTOISE_ORM, Settings

settings = Settings()

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """Open ORM connections for the app's lifetime and report the chat configuration."""
    logger.info(f"Starting {settings.CLUB_NAME} assistant ({settings.APP_ENV})")

    await Tortoise.init(config=TORTOISE_ORM)
    logger.info("Database connections opened")

    if settings.COMPLETION_API_KEY:
        logger.info(f"Chat completions use {settings.COMPLETION_MODEL}")
    elif settings.CHAT_REQUIRE_COMPLETION_PROVIDER:
        logger.error("COMPLETION_API_KEY is not set and a completion provider is required; chat will return 500")
    else:
        logger.warning("COMPLETION_API_KEY is not set; chat replies will be built from stored facts only")

    try:
        yield
    finally:
        await Tortoise.close_connections()
        logger.info("Database connections closed")


def create_app() -> FastAPI:
    app = FastAPI(
        title="Scholar Assist",
        description="Scholarship club assistant: knowledge base ingestion, keyword retrieval and chat.",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.include_router(knowledge.router, prefix=API_PREFIX, tags=["Knowledge"])
    app.include_router(chat.router, prefix=API_PREFIX, tags=["Chat"])
    app.include_router(facts.router, prefix=API_PREFIX, tags=["Scholarships & Resources"])

    @app.get("/health", tags=["Health"])
    async def health_check():
        return {"status": "ok"}

    return app


app = create_app()
