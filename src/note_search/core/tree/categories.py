"""Hierarchical category tree built from "a/b/c" category paths."""

import io
from collections.abc import Iterable

from note_search.models.note import CategoryNode, Note


def collect_categories(notes: Iterable[Note]) -> list[str]:
    """Return every distinct category path used by ``notes``, sorted."""
    return sorted({category for note in notes for category in note.categories})


def build_category_tree(categories: Iterable[str]) -> tuple[CategoryNode, ...]:
    """Turn category paths into a tree; intermediate segments are created implicitly.

    Empty segments (from "a//b" or a trailing "/") are ignored.
    """
    nested: dict[str, dict] = {}
    for category in categories:
        current = nested
        for part in category.split("/"):
            if part:
                current = current.setdefault(part, {})

    def to_nodes(level: dict[str, dict], prefix: str) -> tuple[CategoryNode, ...]:
        nodes = []
        for name in sorted(level):
            path = f"{prefix}/{name}" if prefix else name
            nodes.append(CategoryNode(name=name, path=path, children=to_nodes(level[name], path)))
        return tuple(nodes)

    return to_nodes(nested, "")


def _in_category(note: Note, path: str, include_subcategories: bool) -> bool:
    if include_subcategories:
        return any(c == path or c.startswith(f"{path}/") for c in note.categories)
    return path in note.categories


def notes_in_category(
    notes: Iterable[Note], path: str, *, include_subcategories: bool = False
) -> list[Note]:
    """Notes tagged with ``path`` (and with any ``path/...`` descendant if requested)."""
    return [n for n in notes if _in_category(n, path, include_subcategories)]


def count_notes_in_category(
    notes: Iterable[Note], path: str, *, include_subcategories: bool = False
) -> int:
    return len(notes_in_category(notes, path, include_subcategories=include_subcategories))


def render_category_tree(nodes: Iterable[CategoryNode], notes: list[Note]) -> str:
    """Render the tree as an indented markdown list with note counts.

    Each line shows notes tagged exactly with the path, then the total
    including subcategories when it differs.
    """
    out = io.StringIO()

    def walk(level: Iterable[CategoryNode], depth: int) -> None:
        for node in level:
            own = count_notes_in_category(notes, node.path)
            total = count_notes_in_category(notes, node.path, include_subcategories=True)
            counts = f"{own}" if own == total else f"{own}, {total} with subcategories"
            out.write(f"{'    ' * depth}- {node.name} ({counts})\n")
            walk(node.children, depth + 1)

    walk(nodes, 0)
    return out.getvalue()
