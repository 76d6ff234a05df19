"""HTML escaping for highlighted output."""

_HTML_ESCAPES = str.maketrans(
    {"&": "&amp;", "<": "&lt;", ">": "&gt;", '"': "&quot;", "'": "&#39;"}
)


def escape_html(text: str) -> str:
    return text.translate(_HTML_ESCAPES)
