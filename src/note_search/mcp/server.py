"""MCP server exposing note search, revisit and category tools."""

import os
from collections import Counter
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass
from datetime import date
from typing import Any

from loguru import logger
from mcp.server.fastmcp import Context, FastMCP

from note_search.config import resolve_notes_file
from note_search.core.importer.loader import JsonNoteStore
from note_search.core.revisit import revisit_sections
from note_search.core.search.highlight import excerpt, highlight, highlight_tags
from note_search.core.search.searcher import perform_search, search
from note_search.core.tree.categories import build_category_tree, collect_categories, render_category_tree
from note_search.models.note import Note, SearchOptions, SearchResult
from note_search.protocols import NoteSourceProtocol


def _note_summary(note: Note) -> dict[str, Any]:
    return {
        "note_id": note.id,
        "title": note.title or "",
        "excerpt": excerpt(note.content),
        "categories": list(note.categories),
        "hashtags": list(note.hashtags),
        "created_at": note.created_at.isoformat() if note.created_at else None,
        "updated_at": note.updated_at.isoformat() if note.updated_at else None,
    }


def _serialize_result(result: SearchResult, *, with_highlights: bool) -> dict[str, Any]:
    entry = _note_summary(result.note)
    entry["score"] = result.score
    if with_highlights:
        entry["highlighted_title"] = highlight(result.note.title or "", result.terms)
        entry["highlighted_excerpt"] = highlight(excerpt(result.note.content), result.terms)
        entry["highlighted_tags"] = [
            tag.markup for tag in highlight_tags((*result.note.categories, *result.note.hashtags), result.terms)
        ]
    return entry


# --- Core functions (testable without MCP context) ---


def notes_search(
    notes: list[Note],
    *,
    query: str = "",
    category: str | None = None,
    recent_only: bool = False,
    fields: list[str] | None = None,
    limit: int = 20,
    quick: bool = False,
    include_highlights: bool = True,
) -> dict[str, Any]:
    """Search notes by relevance.

    Args:
        query: Search text.
        category: Only notes tagged with this exact category.
        recent_only: Only notes created in the last 30 days.
        fields: Fields eligible for matching ("title", "content", "categories",
            "hashtags"); all when omitted.
        limit: Max results (1-100, default 20).
        quick: Use the strict-then-fuzzy lookup (tolerates typos, ignores filters).
        include_highlights: Add HTML-highlighted title, excerpt and tags.
    """
    if not query.strip():
        return {"error": "No search query provided.", "results": [], "count": 0, "total": 0}

    limit = max(1, min(limit, 100))

    if quick:
        results = perform_search(notes, query)
    else:
        enabled = set(fields) if fields else {"title", "content", "categories", "hashtags"}
        unknown = enabled - {"title", "content", "categories", "hashtags"}
        if unknown:
            return {
                "error": f"Unknown fields: {sorted(unknown)!r}",
                "results": [],
                "count": 0,
                "total": 0,
            }
        options = SearchOptions(
            search_in_title="title" in enabled,
            search_in_content="content" in enabled,
            search_in_categories="categories" in enabled,
            search_in_hashtags="hashtags" in enabled,
            filter_by_category=category,
            only_recent_notes=recent_only,
        )
        results = search(notes, query, options)

    serialized = [_serialize_result(r, with_highlights=include_highlights) for r in results[:limit]]
    return {
        "results": serialized,
        "count": len(serialized),
        "total": len(results),
        "terms": list(results[0].terms) if results else [],
    }


def notes_revisit(
    notes: list[Note],
    *,
    today: date | None = None,
    section1: int = 7,
    section2: int = 14,
) -> dict[str, Any]:
    """List notes created today, ``section1`` days ago and ``section2`` days ago."""
    try:
        sections = revisit_sections(notes, today=today, section1=section1, section2=section2)
    except ValueError as e:
        return {"error": str(e)}
    return {
        "sections": [
            {
                "key": s.key,
                "label": s.label,
                "date": s.day.isoformat(),
                "count": len(s.notes),
                "has_more": s.has_more,
                "notes": [_note_summary(n) for n in s.notes],
            }
            for s in sections
        ]
    }


def notes_list_categories(notes: list[Note]) -> dict[str, Any]:
    """List category paths with note counts and a markdown tree."""
    categories = collect_categories(notes)
    counts = Counter(c for note in notes for c in note.categories)
    return {
        "categories": [{"path": c, "count": counts[c]} for c in categories],
        "count": len(categories),
        "tree": render_category_tree(build_category_tree(categories), notes),
    }


def notes_list_hashtags(notes: list[Note]) -> dict[str, Any]:
    """List hashtags by usage, most used first."""
    counts = Counter(tag for note in notes for tag in note.hashtags)
    ordered = sorted(counts.items(), key=lambda item: (-item[1], item[0]))
    return {
        "hashtags": [{"tag": tag, "count": count} for tag, count in ordered],
        "count": len(ordered),
    }


def notes_read(notes: list[Note], *, note_id: str) -> dict[str, Any]:
    """Return a note's full content and metadata."""
    note = next((n for n in notes if n.id == note_id), None)
    if note is None:
        return {"error": f"Note '{note_id}' not found."}
    entry = _note_summary(note)
    entry["content"] = note.content
    entry["video_urls"] = list(note.video_urls)
    return entry


# --- MCP Server Setup ---


@dataclass
class ServerContext:
    """Shared resources for the MCP server lifetime."""

    source: NoteSourceProtocol | None


def _resolve_source() -> NoteSourceProtocol | None:
    if os.environ.get("NOTE_SEARCH_REMOTE"):
        from note_search.api import SupabaseApi

        return SupabaseApi()
    notes_file = resolve_notes_file()
    if notes_file is None:
        logger.warning("No notes file found; set NOTE_SEARCH_NOTES_FILE")
        return None
    return JsonNoteStore(notes_file)


@asynccontextmanager
async def server_lifespan(_server: FastMCP) -> AsyncIterator[ServerContext]:
    """Resolve the notes source on startup."""
    yield ServerContext(source=_resolve_source())


mcp_server = FastMCP(
    "note-search",
    instructions="""\
Personal notes with titles, free-text content, hierarchical categories
("work/projects/alpha") and hashtags.

## Tips
- notes_search_tool ranks by relevance; use quick=true when the query may
  contain typos (falls back to fuzzy matching).
- Results carry only an excerpt. Call notes_read_tool for the full content.
- notes_list_categories_tool shows the category tree for use as a filter.
""",
    lifespan=server_lifespan,
)


def _ctx(mcp_ctx: Context) -> ServerContext:
    return mcp_ctx.request_context.lifespan_context  # type: ignore[return-value]


def _load(ctx: ServerContext) -> list[Note] | dict[str, Any]:
    """Load a fresh snapshot, or return an error payload."""
    if ctx.source is None:
        return {"error": "No notes source configured."}
    try:
        return ctx.source.load_notes()
    except (OSError, ValueError, RuntimeError) as e:
        logger.warning("Loading notes failed: {}", e)
        return {"error": f"Loading notes failed: {e}"}


# --- MCP Tool Wrappers ---


@mcp_server.tool()
async def notes_search_tool(
    ctx: Context,
    query: str = "",
    category: str | None = None,
    recent_only: bool = False,
    fields: list[str] | None = None,
    limit: int = 20,
    quick: bool = False,
) -> dict[str, Any]:
    """Search notes by relevance across title, content, categories and hashtags.

    Args:
        query: Search text.
        category: Only notes tagged with this exact category path.
        recent_only: Only notes created in the last 30 days.
        fields: Restrict matching to these fields.
        limit: Max results (1-100, default 20).
        quick: Strict-then-fuzzy lookup that tolerates typos.
    """
    notes = _load(_ctx(ctx))
    if isinstance(notes, dict):
        return notes
    return notes_search(
        notes,
        query=query,
        category=category,
        recent_only=recent_only,
        fields=fields,
        limit=limit,
        quick=quick,
    )


@mcp_server.tool()
async def notes_revisit_tool(ctx: Context, section1: int = 7, section2: int = 14) -> dict[str, Any]:
    """Notes to revisit: created today, ``section1`` and ``section2`` days ago."""
    notes = _load(_ctx(ctx))
    if isinstance(notes, dict):
        return notes
    return notes_revisit(notes, section1=section1, section2=section2)


@mcp_server.tool()
async def notes_list_categories_tool(ctx: Context) -> dict[str, Any]:
    """List all categories with counts and the category tree."""
    notes = _load(_ctx(ctx))
    if isinstance(notes, dict):
        return notes
    return notes_list_categories(notes)


@mcp_server.tool()
async def notes_list_hashtags_tool(ctx: Context) -> dict[str, Any]:
    """List all hashtags by usage."""
    notes = _load(_ctx(ctx))
    if isinstance(notes, dict):
        return notes
    return notes_list_hashtags(notes)


@mcp_server.tool()
async def notes_read_tool(ctx: Context, note_id: str) -> dict[str, Any]:
    """Read a note's full content.

    Args:
        note_id: Note ID from search results.
    """
    notes = _load(_ctx(ctx))
    if isinstance(notes, dict):
        return notes
    return notes_read(notes, note_id=note_id)


def run_mcp_server() -> None:
    """Run the MCP server with stdio transport."""
    from note_search.logging_config import configure_logging

    configure_logging(verbose=False)
    mcp_server.run(transport="stdio")
