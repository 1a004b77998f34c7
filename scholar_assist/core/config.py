from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Server
    APP_ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    # Database
    DATABASE_URL: str

    # Task queue
    REDIS_URL: str = "redis://localhost:6379/0"

    # Completion provider
    COMPLETION_API_URL: str = "https://api.mistral.ai/v1/chat/completions"
    COMPLETION_API_KEY: str | None = None
    COMPLETION_MODEL: str = "mistral-large-latest"
    COMPLETION_TEMPERATURE: float = 0.7
    COMPLETION_MAX_TOKENS: int = 1000
    COMPLETION_TIMEOUT_SECONDS: float = 30.0
    CHAT_REQUIRE_COMPLETION_PROVIDER: bool = False

    # Knowledge base
    CHUNK_MAX_CHARS: int = 1000
    RETRIEVAL_MATCH_COUNT: int = 5
    RETRIEVAL_CANDIDATE_LIMIT: int = 50  # Scan ceiling, see DESIGN.md

    # Club facts
    CLUB_NAME: str = "McRoberts Scholars"
    MEETING_SCHEDULE: str = "every Wednesday from 3:00 PM to 4:30 PM in the Student Center, Room 204"
    CONTACT_LINK: str = "https://linktr.ee/McrobertsScholars"


TORTOISE_ORM = {
    "connections": {"default": Settings().DATABASE_URL},
    "apps": {
        "models": {
            "models": ["scholar_assist.models", "aerich.models"],
            "default_connection": "default",
        },
    },
}
