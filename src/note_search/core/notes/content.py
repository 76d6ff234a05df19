"""Extract hashtags and media links from note content."""

import re

# A hashtag is '#' followed by letters (Latin-1 and Latin Extended-A), digits or '_'.
_HASHTAG_RE = re.compile(r"#([a-zA-Z0-9_À-ſ]+)")
_YOUTUBE_RE = re.compile(
    r"(?:https?://)?(?:www\.)?(?:youtube\.com/watch\?v=|youtu\.be/)([a-zA-Z0-9_-]{11})"
)
_DIRECTIVE_RE = re.compile(r"\[\[.*?\]\]")


def extract_hashtags(content: str | None) -> list[str]:
    """Return hashtags found in ``content`` without the leading '#', first occurrence order."""
    if not content:
        return []
    return list(dict.fromkeys(_HASHTAG_RE.findall(content)))


def extract_youtube_urls(content: str | None) -> list[str]:
    """Return unique embeddable URLs for YouTube links in ``content``."""
    if not content:
        return []
    return list(
        dict.fromkeys(f"https://www.youtube.com/embed/{video_id}" for video_id in _YOUTUBE_RE.findall(content))
    )


def strip_directives(content: str | None) -> str:
    """Remove ``[[...]]`` spans, which are kept in raw content but never displayed."""
    if not content:
        return ""
    return _DIRECTIVE_RE.sub("", content)
