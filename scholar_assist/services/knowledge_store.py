import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any
from uuid import UUID

from scholar_assist.models import KnowledgeEntry

logger = logging.getLogger(__name__)

PROBE_CONTENT = "Test content for table verification"


@dataclass
class VerificationResult:
    """Outcome of the insert-then-delete store self-test."""

    success: bool
    message: str
    error: str | None = None


class KnowledgeStore:
    """
    Gateway to the `knowledge_base` table.

    Instances are cheap and are created per request; the ORM connection itself
    is opened and closed by the application lifespan (or the worker job).
    Every method lets store errors propagate so callers decide how to degrade.
    """

    async def insert(self, content: str, metadata: dict[str, Any]) -> KnowledgeEntry:
        return await KnowledgeEntry.create(content=content, metadata=metadata)

    async def query(self, limit: int) -> list[KnowledgeEntry]:
        """Return up to `limit` entries, most recent first."""
        return await KnowledgeEntry.all().order_by("-created_at").limit(limit)

    async def delete(self, entry_id: UUID | str) -> bool:
        deleted = await KnowledgeEntry.filter(id=entry_id).delete()
        return deleted > 0

    async def count(self) -> int:
        return await KnowledgeEntry.all().count()

    async def verify(self) -> VerificationResult:
        """
        Check the table is writable by inserting a probe record and deleting it.

        Returns:
            VerificationResult describing which step, if any, failed
        """
        probe_metadata = {"test": True, "created_at": datetime.now(timezone.utc).isoformat()}

        try:
            probe = await self.insert(PROBE_CONTENT, probe_metadata)
        except Exception as e:
            logger.error(f"Knowledge base probe insert failed: {e}")
            return VerificationResult(
                success=False,
                message="Knowledge base table is missing or not writable.",
                error=str(e),
            )

        try:
            removed = await self.delete(probe.id)
        except Exception as e:
            logger.error(f"Knowledge base probe {probe.id} could not be removed: {e}")
            return VerificationResult(
                success=False,
                message="Probe record was written but could not be removed.",
                error=str(e),
            )

        if not removed:
            return VerificationResult(success=False, message="Probe record disappeared before cleanup.")

        logger.info("Knowledge base verification succeeded")
        return VerificationResult(success=True, message="Knowledge base table exists and is working correctly!")
