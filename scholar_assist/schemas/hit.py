"""Data schemas for the retrieval pipeline."""

from typing import Any, NamedTuple


class ScoredChunk(NamedTuple):
    """A knowledge chunk paired with its keyword score for one query."""

    content: str
    score: int = 0
    metadata: dict[str, Any] | None = None
    chunk_id: str = ""
