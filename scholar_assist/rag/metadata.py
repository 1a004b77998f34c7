"""Heuristic metadata extraction for knowledge chunks."""

import re
from typing import Any

DATE_PATTERN = re.compile(r"\b(\d{1,2}/\d{1,2}/\d{4}|\d{4}-\d{2}-\d{2})\b")
AWARD_PATTERN = re.compile(r"\b[A-Z][A-Za-z\s]+(?:Scholarship|Grant|Award|Competition)\b")
AMOUNT_PATTERN = re.compile(r"\$[\d,]+(?:\.\d{2})?")

# (trigger substring, topic tag); checked against the lower-cased chunk
TOPIC_TRIGGERS = (
    ("stem", "STEM"),
    ("essay", "Essay"),
    ("leadership", "Leadership"),
    ("community", "Community Service"),
    ("art", "Arts"),
)


def extract_metadata(chunk: str) -> dict[str, Any]:
    """
    Derive best-effort tags from a chunk of text.

    Keys are only present when something was found:
    - date: first `MM/DD/YYYY` or `YYYY-MM-DD` date
    - scholarships: capitalized phrases ending in Scholarship, Grant, Award or Competition
    - amounts: dollar amounts such as `$1,500` or `$20.00`
    - topics: tags from a fixed vocabulary, matched by substring

    Args:
        chunk: Chunk text

    Returns:
        Metadata dictionary, possibly empty
    """
    metadata: dict[str, Any] = {}
    if not chunk:
        return metadata

    date_match = DATE_PATTERN.search(chunk)
    if date_match:
        metadata["date"] = date_match.group(0)

    scholarships = AWARD_PATTERN.findall(chunk)
    if scholarships:
        metadata["scholarships"] = scholarships

    amounts = AMOUNT_PATTERN.findall(chunk)
    if amounts:
        metadata["amounts"] = amounts

    lowered = chunk.lower()
    topics = [tag for trigger, tag in TOPIC_TRIGGERS if trigger in lowered]
    if topics:
        metadata["topics"] = topics

    return metadata
