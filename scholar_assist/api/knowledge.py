import logging

from fastapi import APIRouter, Depends, HTTPException

from scholar_assist.api.deps import get_ingestion_service, get_knowledge_store, get_settings
from scholar_assist.core.config import Settings
from scholar_assist.core.errors import InvalidInputError
from scholar_assist.core.text import extract_keywords, preview
from scholar_assist.rag.retriever import rank_chunks
from scholar_assist.schemas.knowledge import (
    ChunkError,
    KnowledgeAddRequest,
    KnowledgeAddResponse,
    KnowledgeEntryOut,
    KnowledgeMatch,
    KnowledgeSample,
    KnowledgeSearchResponse,
    KnowledgeStatusResponse,
    VerificationResponse,
)
from scholar_assist.services.ingestion_service import IngestionService
from scholar_assist.services.knowledge_store import KnowledgeStore

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/knowledge")


@router.post("/add", response_model=KnowledgeAddResponse, response_model_exclude_none=True)
async def add_knowledge(
    payload: KnowledgeAddRequest,
    service: IngestionService = Depends(get_ingestion_service),
) -> KnowledgeAddResponse:
    """
    Splits content into chunks and stores each one in the knowledge base.

    Chunks that fail to store are listed under `errors`; the request still
    succeeds as long as at least one chunk was stored.
    """
    try:
        report = await service.ingest(payload.content, payload.metadata)
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except Exception as e:
        logger.error(f"Error adding knowledge: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Failed to add knowledge: {e}") from e

    return KnowledgeAddResponse(
        success=report.success,
        chunks_processed=report.chunks_processed,
        chunks_stored=report.chunks_stored,
        errors=[ChunkError(chunk_index=f.chunk_index, error=f.error) for f in report.errors] or None,
        stored_data=[
            KnowledgeEntryOut(id=e.id, content=e.content, metadata=e.metadata or {}, created_at=e.created_at)
            for e in report.stored
        ],
    )


@router.get("/search", response_model=KnowledgeSearchResponse, response_model_exclude_none=True)
async def search_knowledge_base(
    q: str = "meeting",
    store: KnowledgeStore = Depends(get_knowledge_store),
    settings: Settings = Depends(get_settings),
) -> KnowledgeSearchResponse:
    """Shows which stored chunks the chat retrieval would pick for a query."""
    keywords = extract_keywords(q)
    try:
        candidates = await store.query(settings.RETRIEVAL_CANDIDATE_LIMIT)
    except Exception as e:
        logger.error(f"Search test error: {e}")
        return KnowledgeSearchResponse(success=False, query=q, keywords=keywords, error=str(e))

    hits = rank_chunks(candidates, keywords, match_count=len(candidates))
    return KnowledgeSearchResponse(
        success=True,
        query=q,
        keywords=keywords,
        total_records=len(candidates),
        matching_records=len(hits),
        matches=[
            KnowledgeMatch(id=hit.chunk_id, content=hit.content, metadata=hit.metadata or {}, score=hit.score)
            for hit in hits
        ],
    )


@router.get("/status", response_model=KnowledgeStatusResponse, response_model_exclude_none=True)
async def knowledge_status(store: KnowledgeStore = Depends(get_knowledge_store)) -> KnowledgeStatusResponse:
    """Reports how many chunks are stored, with a small sample."""
    try:
        total = await store.count()
        sample = await store.query(5)
    except Exception as e:
        logger.error(f"Knowledge base status check failed: {e}")
        return KnowledgeStatusResponse(success=False, error=str(e))

    return KnowledgeStatusResponse(
        success=True,
        total_records=total,
        sample_data=[
            KnowledgeSample(id=entry.id, content_preview=preview(entry.content), metadata=entry.metadata or {})
            for entry in sample
        ],
    )


@router.post("/verify", response_model=VerificationResponse, response_model_exclude_none=True)
async def verify_knowledge_base(store: KnowledgeStore = Depends(get_knowledge_store)) -> VerificationResponse:
    """Checks the knowledge base table is writable with a throwaway probe record."""
    result = await store.verify()
    return VerificationResponse(success=result.success, message=result.message, error=result.error)
