"""Read-only Supabase (PostgREST) client for the remote notes table."""

import logging
import os
from typing import Any

import requests

from note_search.config import SUPABASE_KEY_FILES, SUPABASE_NOTES_TABLE
from note_search.core.importer.json_reader import parse_note_data
from note_search.models.note import Note


class SupabaseApi:
    """Fetch notes from a Supabase project's REST endpoint."""

    def __init__(self, url: str | None = None, *, key: str | None = None) -> None:
        self.sess = requests.Session()
        self.logger = logging.getLogger("api")

        self.url = (url or os.environ.get("SUPABASE_URL") or "").rstrip("/")
        if not self.url:
            msg = "Supabase URL not configured: pass url or set SUPABASE_URL"
            raise RuntimeError(msg)

        key_name: str | None = None
        self.api_key = key or os.environ.get("SUPABASE_KEY") or ""
        if self.api_key:
            key_name = "argument/environment"
        else:
            for key_path in SUPABASE_KEY_FILES:
                try:
                    self.api_key = key_path.read_text(encoding="utf-8").strip()
                    key_name = str(key_path)
                    break
                except FileNotFoundError:
                    pass
            else:
                msg = f"Cannot find Supabase key, set SUPABASE_KEY or create one of {SUPABASE_KEY_FILES!r}"
                raise RuntimeError(msg)

        self.sess.headers.update(
            {
                "apikey": self.api_key,
                "Authorization": f"Bearer {self.api_key}",
                "Accept": "application/json",
            }
        )
        self.logger.debug(f"API ready: url {self.url!r}, key from {key_name!r}")

    def call(self, table: str, params: dict[str, Any]) -> list[dict[str, Any]]:
        """GET rows from a table, return the decoded JSON array."""
        self.logger.debug(f"Making request: {table!r} {repr(params)[:32]}")

        r = self.sess.get(f"{self.url}/rest/v1/{table}", params=params)
        r.raise_for_status()
        rv = r.json()
        if not isinstance(rv, list):
            msg = f"API call failed: ({table!r}, {params!r}) -> unexpected payload {rv!r}"
            raise RuntimeError(msg)
        return rv

    def load_notes(self) -> list[Note]:
        """Fetch the whole notes table as a snapshot."""
        rows = self.call(SUPABASE_NOTES_TABLE, {"select": "*"})
        notes = [parse_note_data(row) for row in rows if isinstance(row, dict)]
        self.logger.debug(f"Fetched {len(notes)} notes")
        return notes
