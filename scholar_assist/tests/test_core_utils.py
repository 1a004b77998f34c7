"""Tests for core utilities: keyword extraction and previews."""

from scholar_assist.core.text import extract_keywords, preview


class TestExtractKeywords:
    """Test query keyword extraction."""

    def test_lowercases_and_drops_short_tokens(self):
        result = extract_keywords("Tell me about the STEM essay")
        assert result == ["tell", "about", "stem", "essay"]

    def test_strips_punctuation(self):
        result = extract_keywords("When is the (next) meeting? Deadlines, please!")
        assert result == ["when", "next", "meeting", "deadlines", "please"]

    def test_length_checked_before_stripping(self):
        """'why?' has four characters, so it survives as 'why'; 'is?' does not."""
        assert extract_keywords("why? is?") == ["why"]

    def test_repeated_words_are_kept(self):
        assert extract_keywords("essay essay essay") == ["essay", "essay", "essay"]

    def test_punctuation_only_tokens_are_dropped(self):
        assert extract_keywords("???? ....") == []

    def test_all_short_tokens_yield_nothing(self):
        assert extract_keywords("is it ok to go") == []

    def test_empty_and_none(self):
        assert extract_keywords("") == []
        assert extract_keywords(None) == []

    def test_splits_on_any_whitespace(self):
        assert extract_keywords("grant\tessay\nmeeting") == ["grant", "essay", "meeting"]


class TestPreview:
    """Test content previews."""

    def test_short_text_unchanged(self):
        assert preview("short text") == "short text"

    def test_long_text_truncated_with_ellipsis(self):
        result = preview("a" * 150)
        assert result == "a" * 100 + "..."

    def test_custom_limit(self):
        assert preview("abcdef", limit=3) == "abc..."

    def test_empty(self):
        assert preview("") == ""
