"""Keyword retrieval over a bounded scan of the knowledge base."""

import logging
from collections.abc import Iterable
from typing import Protocol

from ..core.text import extract_keywords
from ..schemas.hit import ScoredChunk

logger = logging.getLogger(__name__)

DEFAULT_MATCH_COUNT = 5
# Only this many recent chunks are scored per query; older ones are never seen.
DEFAULT_CANDIDATE_LIMIT = 50


class ChunkSource(Protocol):
    async def query(self, limit: int) -> list: ...


def score_content(content: str, keywords: list[str]) -> int:
    """
    Count the keywords found as substrings of the lower-cased content.

    A keyword repeated in the list is counted once per repetition.
    """
    content_lower = content.lower()
    return sum(1 for keyword in keywords if keyword in content_lower)


def rank_chunks(candidates: Iterable, keywords: list[str], match_count: int = DEFAULT_MATCH_COUNT) -> list[ScoredChunk]:
    """
    Score candidates against keywords and keep the best `match_count`.

    Candidates only need a `content` attribute; `metadata` and `id` are
    carried through when present. Zero scores are dropped and ties keep
    their retrieval order.

    Args:
        candidates: Chunks in retrieval order
        keywords: Query keywords from `extract_keywords`
        match_count: Maximum number of chunks to return

    Returns:
        List of scored chunks sorted by score (highest first)
    """
    if not keywords or match_count <= 0:
        return []

    scored = []
    for candidate in candidates:
        score = score_content(candidate.content, keywords)
        if score > 0:
            scored.append(
                ScoredChunk(
                    content=candidate.content,
                    score=score,
                    metadata=getattr(candidate, "metadata", None) or {},
                    chunk_id=str(getattr(candidate, "id", "")),
                )
            )

    # sort() is stable, so equal scores stay in retrieval order
    scored.sort(key=lambda hit: hit.score, reverse=True)
    return scored[:match_count]


async def search_knowledge(
    store: ChunkSource,
    query: str,
    match_count: int = DEFAULT_MATCH_COUNT,
    candidate_limit: int = DEFAULT_CANDIDATE_LIMIT,
) -> str:
    """
    Return the best matching knowledge chunks for a query as context text.

    This is a relevance heuristic, not a search index: it scans at most
    `candidate_limit` chunks and counts keyword containment.

    Args:
        store: Knowledge store gateway
        query: The user's query
        match_count: Number of chunks to include
        candidate_limit: Number of chunks fetched from the store

    Returns:
        Matching chunk contents joined by a blank line, or "" when nothing
        matches or the store is unavailable
    """
    keywords = extract_keywords(query)
    if not keywords:
        logger.debug(f"No keywords in query: '{query}'")
        return ""

    try:
        candidates = await store.query(candidate_limit)
    except Exception as e:
        logger.error(f"Error searching knowledge base: {e}")
        return ""

    hits = rank_chunks(candidates, keywords, match_count)
    logger.debug(f"Knowledge search matched {len(hits)} of {len(candidates)} chunks for keywords {keywords}")

    return "\n\n".join(hit.content for hit in hits)
