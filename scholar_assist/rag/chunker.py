"""
Chunking functionality for knowledge ingestion.

This module splits free text into size-bounded chunks that always end on a
sentence boundary.
"""

import re

DEFAULT_MAX_CHUNK_SIZE = 1000

# Splits on whitespace that follows sentence-ending punctuation
SENTENCE_BOUNDARY = re.compile(r"(?<=[.!?])\s+")


def split_sentences(text: str) -> list[str]:
    """
    Split text into sentences on `.`, `!` or `?` followed by whitespace.

    Args:
        text: Input text to split

    Returns:
        List of non-empty sentences in their original order
    """
    if not text or not isinstance(text, str):
        return []

    return [s for s in SENTENCE_BOUNDARY.split(text.strip()) if s]


def chunk_text(text: str, max_chunk_size: int = DEFAULT_MAX_CHUNK_SIZE) -> list[str]:
    """
    Pack consecutive sentences into chunks of at most `max_chunk_size` characters.

    Sentences are joined with a single space. A sentence is moved to a new
    chunk when appending it would overflow the current one. A single sentence
    longer than `max_chunk_size` is never split and becomes its own chunk.

    Args:
        text: Input text to chunk
        max_chunk_size: Maximum number of characters per chunk (default: 1000)

    Returns:
        List of text chunks (strings)

    Test:
        "A. B. C." with a large max size yields exactly one chunk.
    """
    chunks = []
    current = ""

    for sentence in split_sentences(text):
        if current and len(current) + 1 + len(sentence) > max_chunk_size:
            chunks.append(current.strip())
            current = sentence
        else:
            current = f"{current} {sentence}" if current else sentence

    if current.strip():
        chunks.append(current.strip())

    return chunks
