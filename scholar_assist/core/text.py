"""Text utilities for query keywords and content previews."""

# Punctuation removed from query tokens before they are matched against content.
KEYWORD_PUNCTUATION = ".,?!;:()"
MIN_KEYWORD_TOKEN_LENGTH = 4

_STRIP_TABLE = str.maketrans("", "", KEYWORD_PUNCTUATION)


def extract_keywords(query: str) -> list[str]:
    """
    Extract salient keywords from a user query.

    The query is lower-cased and split on whitespace. Tokens shorter than
    four characters are dropped before punctuation is stripped, so "why?"
    survives as "why". Repeated words are kept: each occurrence counts
    towards a chunk's score.

    Args:
        query: Raw user query

    Returns:
        List of keywords in query order
    """
    if not query or not isinstance(query, str):
        return []

    keywords = []
    for token in query.lower().split():
        if len(token) < MIN_KEYWORD_TOKEN_LENGTH:
            continue
        keyword = token.translate(_STRIP_TABLE)
        # A token made only of punctuation would match every chunk
        if keyword:
            keywords.append(keyword)

    return keywords


def preview(text: str, limit: int = 100) -> str:
    """Return the first `limit` characters of text, with an ellipsis if truncated."""
    if not text:
        return ""
    return text[:limit] + "..." if len(text) > limit else text
