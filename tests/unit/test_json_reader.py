"""Tests for parsing raw note records into domain models."""

from datetime import UTC, datetime, timedelta, timezone

from note_search.core.importer.json_reader import coerce_note, parse_note_data, parse_timestamp
from note_search.models.note import Note

EXPORT_RECORD = {
    "id": "n1",
    "title": "Trip",
    "content": "Pack #bags",
    "categories": ["travel", "travel", "", 7],
    "hashtags": ["bags"],
    "videoUrls": ["https://www.youtube.com/embed/dQw4w9WgXcQ"],
    "createdAt": "2026-10-01T08:30:00Z",
    "updatedAt": "2026-10-02T09:00:00.000Z",
}


def test_parse_export_record() -> None:
    note = parse_note_data(EXPORT_RECORD)
    assert note.id == "n1"
    assert note.title == "Trip"
    assert note.content == "Pack #bags"
    assert note.categories == ("travel",)
    assert note.hashtags == ("bags",)
    assert note.video_urls == ("https://www.youtube.com/embed/dQw4w9WgXcQ",)
    assert note.created_at == datetime(2026, 10, 1, 8, 30, tzinfo=UTC)
    assert note.updated_at == datetime(2026, 10, 2, 9, 0, tzinfo=UTC)


def test_parse_table_row_with_json_encoded_lists() -> None:
    row = {
        "id": 17,
        "title": None,
        "content": None,
        "categories": '["work/dev", "work"]',
        "hashtags": "[]",
        "created_at": "2026-10-01T10:00:00+02:00",
        "video_urls": None,
    }
    note = parse_note_data(row)
    assert note.id == "17"
    assert note.title is None
    assert note.content == ""
    assert note.categories == ("work/dev", "work")
    assert note.hashtags == ()
    assert note.created_at == datetime(2026, 10, 1, 8, 0, tzinfo=UTC)
    assert note.updated_at is None
    assert note.video_urls == ()


def test_parse_minimal_record_falls_back_to_defaults() -> None:
    assert parse_note_data({}) == Note(id="")


def test_parse_timestamp_formats() -> None:
    assert parse_timestamp(0) == datetime(1970, 1, 1, tzinfo=UTC)
    assert parse_timestamp(1_000) == datetime(1970, 1, 1, 0, 0, 1, tzinfo=UTC)
    assert parse_timestamp("2026-10-18") == datetime(2026, 10, 18, tzinfo=UTC)
    naive = datetime(2026, 10, 18, 12, 0)
    assert parse_timestamp(naive) == naive.replace(tzinfo=UTC)
    paris = datetime(2026, 10, 18, 12, 0, tzinfo=timezone(timedelta(hours=2)))
    assert parse_timestamp(paris) == paris


def test_parse_timestamp_garbage_is_none() -> None:
    assert parse_timestamp(None) is None
    assert parse_timestamp(True) is None
    assert parse_timestamp("") is None
    assert parse_timestamp("yesterday") is None
    assert parse_timestamp(["2026-10-18"]) is None


def test_coerce_note() -> None:
    note = Note(id="a")
    assert coerce_note(note) is note
    assert coerce_note({"id": "b"}) == Note(id="b")
    assert coerce_note("b") is None
    assert coerce_note(None) is None


def test_note_round_trips_through_export_format() -> None:
    note = parse_note_data(EXPORT_RECORD)
    assert parse_note_data(note.to_dict()) == note


def test_parse_record_without_tag_fields_extracts_them_from_content() -> None:
    note = parse_note_data(
        {"id": "c", "content": "Watch https://youtu.be/dQw4w9WgXcQ #music #music #été"}
    )
    assert note.hashtags == ("music", "été")
    assert note.video_urls == ("https://www.youtube.com/embed/dQw4w9WgXcQ",)


def test_parse_record_with_empty_tag_fields_keeps_them_empty() -> None:
    note = parse_note_data({"id": "c", "content": "#music", "hashtags": [], "videoUrls": []})
    assert note.hashtags == ()
    assert note.video_urls == ()


def test_accepts_camel_and_snake_case_keys() -> None:
    camel = parse_note_data({"id": "1", "createdAt": "2026-10-18T00:00:00Z"})
    snake = parse_note_data({"id": "1", "created_at": "2026-10-18T00:00:00Z"})
    assert camel == snake
    assert camel.created_at is not None
