import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from scholar_assist.core.config import Settings
from scholar_assist.core.errors import InvalidInputError
from scholar_assist.models import KnowledgeEntry
from scholar_assist.rag import chunker, metadata
from scholar_assist.services.knowledge_store import KnowledgeStore

logger = logging.getLogger(__name__)
settings = Settings()


@dataclass
class ChunkFailure:
    """A chunk that could not be persisted."""

    chunk_index: int
    error: str


@dataclass
class IngestionReport:
    """Result of ingesting one content blob."""

    chunks_processed: int
    stored: list[KnowledgeEntry] = field(default_factory=list)
    errors: list[ChunkFailure] = field(default_factory=list)

    @property
    def chunks_stored(self) -> int:
        return len(self.stored)

    @property
    def success(self) -> bool:
        return self.chunks_stored > 0


class IngestionService:
    """
    Service for turning free text into stored knowledge chunks.
    Handles validation, chunking, metadata extraction, and persistence.
    """

    def __init__(self, store: KnowledgeStore, max_chunk_size: int | None = None):
        self.store = store
        self.max_chunk_size = max_chunk_size or settings.CHUNK_MAX_CHARS

    def build_chunk_metadata(self, chunk: str, index: int, caller_metadata: dict[str, Any]) -> dict[str, Any]:
        """
        Merge caller metadata, extracted tags and structural fields for one chunk.

        Extracted tags override caller keys of the same name, and the
        structural fields override both.
        """
        return {
            **caller_metadata,
            **metadata.extract_metadata(chunk),
            "chunk_size": len(chunk),
            "chunk_index": index,
            "ingested_at": datetime.now(timezone.utc).isoformat(),
        }

    async def ingest(self, content: str, caller_metadata: dict[str, Any] | None = None) -> IngestionReport:
        """
        Chunk content and store each chunk with its metadata.

        Chunks are inserted one at a time. A failed insert is recorded in the
        report and the remaining chunks are still processed.

        Args:
            content: Free text to ingest
            caller_metadata: Fields merged into every chunk's metadata (e.g. source)

        Returns:
            IngestionReport with stored entries and per-chunk failures

        Raises:
            InvalidInputError: If content is empty or whitespace only
        """
        if not content or not content.strip():
            raise InvalidInputError("Content is required")

        caller_metadata = caller_metadata or {}

        # 1. Chunk the content
        chunks = chunker.chunk_text(content, max_chunk_size=self.max_chunk_size)
        logger.info(f"Generated {len(chunks)} chunks from {len(content)} characters")

        report = IngestionReport(chunks_processed=len(chunks))

        # 2. Store each chunk independently
        for index, chunk in enumerate(chunks):
            try:
                chunk_metadata = self.build_chunk_metadata(chunk, index, caller_metadata)
                entry = await self.store.insert(chunk, chunk_metadata)
            except Exception as e:
                logger.error(f"Error inserting chunk {index + 1}/{len(chunks)}: {e}")
                report.errors.append(ChunkFailure(chunk_index=index, error=str(e)))
                continue

            logger.debug(f"Stored chunk {index + 1}/{len(chunks)} as {entry.id}")
            report.stored.append(entry)

        if report.errors:
            logger.warning(f"Ingestion stored {report.chunks_stored} of {report.chunks_processed} chunks")
        else:
            logger.info(f"Ingestion stored all {report.chunks_stored} chunks")

        return report
