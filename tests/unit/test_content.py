"""Tests for hashtag and media extraction."""

from note_search.core.notes.content import extract_hashtags, extract_youtube_urls, strip_directives


def test_extract_hashtags_unique_in_order() -> None:
    text = "Buy #milk and #café, #milk again #tag_1"
    assert extract_hashtags(text) == ["milk", "café", "tag_1"]


def test_extract_hashtags_empty() -> None:
    assert extract_hashtags("") == []
    assert extract_hashtags(None) == []
    assert extract_hashtags("no tags # here") == []


def test_extract_youtube_urls_deduplicates_video_ids() -> None:
    text = "see https://www.youtube.com/watch?v=dQw4w9WgXcQ and youtu.be/dQw4w9WgXcQ"
    assert extract_youtube_urls(text) == ["https://www.youtube.com/embed/dQw4w9WgXcQ"]


def test_extract_youtube_urls_none() -> None:
    assert extract_youtube_urls("https://example.com/watch?v=dQw4w9WgXcQ") == []
    assert extract_youtube_urls(None) == []


def test_strip_directives() -> None:
    assert strip_directives("a [[img]] b [[c]]") == "a  b "
    assert strip_directives("nothing") == "nothing"
    assert strip_directives(None) == ""
