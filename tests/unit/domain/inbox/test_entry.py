"""Tests for the Entry entity."""

from datetime import UTC, datetime, timedelta, timezone

import pytest

from flashinbox.domain.common.exceptions import BusinessRuleViolationError, ValidationError
from flashinbox.domain.common.value_objects import EntryId
from flashinbox.domain.inbox.entities import ContentType, Entry
from flashinbox.domain.inbox.entities.entry import MAX_EXTRACTED_TEXT_LENGTH


def _entry(**fields: object) -> Entry:
    entry = Entry.create(ContentType.URL, "https://example.com/article")
    for name, value in fields.items():
        setattr(entry, name, value)
    return entry


class TestEntry:
    def test_create_generates_id_and_utc_timestamp(self) -> None:
        entry = Entry.create(ContentType.TEXT, "hello")
        assert entry.id.value
        assert entry.created_at.tzinfo is not None
        assert entry.preview == "hello"
        assert entry.is_locked is False

    def test_empty_content_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Entry.create(ContentType.TEXT, "  ")

    def test_blank_id_rejected(self) -> None:
        with pytest.raises(ValidationError):
            EntryId("")

    def test_lock_is_idempotent(self) -> None:
        entry = _entry()
        entry.lock()
        entry.lock()
        assert entry.is_locked is True

    def test_deck_name_is_trimmed(self) -> None:
        entry = _entry()
        entry.update_deck_name("  Biology  ")
        assert entry.deck_name == "Biology"

    def test_blank_deck_name_rejected(self) -> None:
        with pytest.raises(ValidationError):
            _entry().update_deck_name(" ")

    def test_deck_name_frozen_once_locked(self) -> None:
        entry = _entry(deck_name="Biology")
        entry.lock()
        with pytest.raises(BusinessRuleViolationError):
            entry.update_deck_name("Chemistry")
        assert entry.deck_name == "Biology"

    def test_extracted_text_is_capped(self) -> None:
        entry = _entry()
        entry.update_extracted_content("Title", "x" * (MAX_EXTRACTED_TEXT_LENGTH + 500))
        assert entry.title == "Title"
        assert len(entry.extracted_text or "") == MAX_EXTRACTED_TEXT_LENGTH

    def test_missing_title_keeps_existing_one(self) -> None:
        entry = _entry(title="Original")
        entry.update_extracted_content(None, "text")
        assert entry.title == "Original"

    def test_backing_file_only_for_pdf(self) -> None:
        pdf = Entry.create(ContentType.PDF, "pdfs/pdf_abc.pdf")
        assert pdf.backing_file == "pdfs/pdf_abc.pdf"
        assert _entry().backing_file is None

    def test_naive_and_offset_timestamps_normalized_to_utc(self) -> None:
        naive = datetime(2024, 5, 1, 12, 0)
        offset = datetime(2024, 5, 1, 14, 0, tzinfo=timezone(timedelta(hours=2)))
        for created_at in (naive, offset):
            entry = Entry.create_with_id(
                id=EntryId("e1"),
                content_type=ContentType.TEXT,
                content="hello",
                preview="hello",
                created_at=created_at,
            )
            assert entry.created_at == datetime(2024, 5, 1, 12, 0, tzinfo=UTC)
            assert entry.created_at.utcoffset() == timedelta(0)

    def test_equality_by_id(self) -> None:
        a = Entry.create(ContentType.TEXT, "one", id=EntryId("same"))
        b = Entry.create(ContentType.TEXT, "two", id=EntryId("same"))
        assert a == b
        assert len({a, b}) == 1
