from functools import lru_cache

from fastapi import Depends

from scholar_assist.core.config import Settings
from scholar_assist.rag.completion import CompletionClient
from scholar_assist.services.chat_service import ChatService
from scholar_assist.services.facts_service import FactsService
from scholar_assist.services.ingestion_service import IngestionService
from scholar_assist.services.knowledge_store import KnowledgeStore


@lru_cache
def get_settings() -> Settings:
    return Settings()


def get_knowledge_store() -> KnowledgeStore:
    return KnowledgeStore()


def get_facts_service() -> FactsService:
    return FactsService()


def get_completion_client(settings: Settings = Depends(get_settings)) -> CompletionClient:
    return CompletionClient(settings)


def get_ingestion_service(
    store: KnowledgeStore = Depends(get_knowledge_store),
    settings: Settings = Depends(get_settings),
) -> IngestionService:
    return IngestionService(store, max_chunk_size=settings.CHUNK_MAX_CHARS)


def get_chat_service(
    store: KnowledgeStore = Depends(get_knowledge_store),
    facts: FactsService = Depends(get_facts_service),
    client: CompletionClient = Depends(get_completion_client),
    settings: Settings = Depends(get_settings),
) -> ChatService:
    return ChatService(store, facts, client, settings)
