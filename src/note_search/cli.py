"""CLI for note-search (search, revisit, categories, import, MCP server)."""

import json
from datetime import date
from pathlib import Path
from typing import Annotated

import typer
from loguru import logger

from note_search.config import NOTES_FILES, resolve_notes_file
from note_search.core.importer.loader import load_notes_file, merge_notes, save_notes_file
from note_search.core.notes.content import strip_directives
from note_search.logging_config import configure_logging
from note_search.mcp.server import (
    notes_list_categories,
    notes_list_hashtags,
    notes_read,
    notes_revisit,
    notes_search,
)
from note_search.models.note import Note

app = typer.Typer(help="note-search: search and browse your personal notes.")

NotesFileOption = Annotated[
    Path | None,
    typer.Option("--notes-file", "-f", help="Notes export file (JSON array)"),
]
RemoteOption = Annotated[
    bool,
    typer.Option("--remote", "-r", help="Read notes from Supabase (SUPABASE_URL/SUPABASE_KEY)"),
]
JsonOption = Annotated[bool, typer.Option("--json", "-j", help="Output as JSON")]


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    configure_logging(verbose=verbose)


def _load_notes(notes_file: Path | None, remote: bool) -> list[Note]:
    """Load the notes snapshot, exiting with an error if none is available."""
    if remote:
        from note_search.api import SupabaseApi

        try:
            return SupabaseApi().load_notes()
        except (OSError, RuntimeError) as e:
            logger.error("Cannot load remote notes: {}", e)
            raise typer.Exit(1) from e

    path = notes_file or resolve_notes_file()
    if path is None:
        logger.error("No notes file found. Pass --notes-file or set NOTE_SEARCH_NOTES_FILE.")
        raise typer.Exit(1)
    try:
        return load_notes_file(path)
    except (OSError, ValueError) as e:
        logger.error("Cannot load notes from {}: {}", path, e)
        raise typer.Exit(1) from e


@app.command()
def search(
    query: str = typer.Argument(..., help="Search query"),
    category: Annotated[
        str | None,
        typer.Option("--category", "-c", help="Only notes with this exact category"),
    ] = None,
    recent: bool = typer.Option(False, "--recent", help="Only notes created in the last 30 days"),
    limit: int = typer.Option(10, "--limit", "-n", help="Max results"),
    fuzzy: bool = typer.Option(False, "--fuzzy", help="Strict-then-fuzzy lookup (typo tolerant)"),
    notes_file: NotesFileOption = None,
    remote: RemoteOption = False,
    output_json: JsonOption = False,
) -> None:
    """Search notes by relevance."""
    notes = _load_notes(notes_file, remote)
    data = notes_search(
        notes,
        query=query,
        category=category,
        recent_only=recent,
        limit=limit,
        quick=fuzzy,
        include_highlights=output_json,
    )
    if "error" in data:
        typer.echo(data["error"])
        raise typer.Exit(1)

    if output_json:
        typer.echo(json.dumps(data, indent=2, ensure_ascii=False))
        return

    typer.echo(f"Found {data['total']} results (showing {data['count']}):\n")
    for r in data["results"]:
        typer.echo(f"  [{r['score']:g}] {r['title'] or '(untitled)'}")
        if r["excerpt"]:
            typer.echo(f"    {r['excerpt'][:80]}")
        tags = [*r["categories"], *(f"#{h}" for h in r["hashtags"])]
        if tags:
            typer.echo(f"    {' '.join(tags)}")
        typer.echo(f"    id={r['note_id']}")
        typer.echo()


@app.command()
def revisit(
    section1: int = typer.Option(7, "--section1", help="Days back for the first section"),
    section2: int = typer.Option(14, "--section2", help="Days back for the second section"),
    day: Annotated[
        str | None,
        typer.Option("--date", help="Reference date (YYYY-MM-DD), default today"),
    ] = None,
    notes_file: NotesFileOption = None,
    remote: RemoteOption = False,
    output_json: JsonOption = False,
) -> None:
    """Show notes created today and some days ago."""
    today: date | None = None
    if day:
        try:
            today = date.fromisoformat(day)
        except ValueError as e:
            logger.error("Invalid date {!r}, expected YYYY-MM-DD", day)
            raise typer.Exit(1) from e

    notes = _load_notes(notes_file, remote)
    data = notes_revisit(notes, today=today, section1=section1, section2=section2)
    if "error" in data:
        typer.echo(data["error"])
        raise typer.Exit(1)

    if output_json:
        typer.echo(json.dumps(data, indent=2, ensure_ascii=False))
        return

    for section in data["sections"]:
        typer.echo(f"{section['label']} ({section['date']}): {section['count']} notes")
        for n in section["notes"]:
            typer.echo(f"  - {n['title'] or n['excerpt'][:40]}  id={n['note_id']}")
        typer.echo()


@app.command()
def categories(
    notes_file: NotesFileOption = None,
    remote: RemoteOption = False,
    output_json: JsonOption = False,
) -> None:
    """Show the category tree."""
    data = notes_list_categories(_load_notes(notes_file, remote))
    if output_json:
        typer.echo(json.dumps(data, indent=2, ensure_ascii=False))
        return
    typer.echo(f"{data['count']} categories:\n")
    typer.echo(data["tree"], nl=False)


@app.command()
def hashtags(
    notes_file: NotesFileOption = None,
    remote: RemoteOption = False,
    output_json: JsonOption = False,
) -> None:
    """List hashtags by usage."""
    data = notes_list_hashtags(_load_notes(notes_file, remote))
    if output_json:
        typer.echo(json.dumps(data, indent=2, ensure_ascii=False))
        return
    typer.echo(f"{data['count']} hashtags:\n")
    for entry in data["hashtags"]:
        typer.echo(f"  #{entry['tag']} ({entry['count']})")


@app.command()
def show(
    note_id: str = typer.Argument(..., help="Note ID"),
    notes_file: NotesFileOption = None,
    remote: RemoteOption = False,
    output_json: JsonOption = False,
) -> None:
    """Show a note."""
    data = notes_read(_load_notes(notes_file, remote), note_id=note_id)
    if "error" in data:
        typer.echo(data["error"])
        raise typer.Exit(1)
    if output_json:
        typer.echo(json.dumps(data, indent=2, ensure_ascii=False))
        return
    typer.echo(f"# {data['title'] or '(untitled)'}\n")
    typer.echo(strip_directives(data["content"]).strip())
    tags = [*data["categories"], *(f"#{h}" for h in data["hashtags"])]
    if tags:
        typer.echo(f"\n{' '.join(tags)}")


@app.command("import")
def import_notes(
    export_file: Path = typer.Argument(..., help="Notes export to merge (JSON array)"),
    notes_file: NotesFileOption = None,
    output_json: JsonOption = False,
) -> None:
    """Merge an export into the notes file (same id replaces, new ids are appended)."""
    target = notes_file or resolve_notes_file() or NOTES_FILES[0]
    try:
        imported = load_notes_file(export_file)
        existing = load_notes_file(target) if target.exists() else []
    except (OSError, ValueError) as e:
        logger.error("Cannot import {}: {}", export_file, e)
        raise typer.Exit(1) from e

    merged, stats = merge_notes(existing, imported)
    save_notes_file(target, merged)

    data = {
        "notes_file": str(target),
        "imported": len(imported),
        "new": stats.new_count,
        "updated": stats.updated_count,
        "total": len(merged),
    }
    if output_json:
        typer.echo(json.dumps(data, indent=2, ensure_ascii=False))
        return
    typer.echo(
        f"Imported {data['imported']} notes into {target}: "
        f"{data['new']} new, {data['updated']} updated ({data['total']} total)"
    )


@app.command()
def serve() -> None:
    """Start the MCP server (stdio transport)."""
    from note_search.mcp.server import run_mcp_server

    run_mcp_server()
