"""Tests for ContentClassifier domain service."""

import pytest

from flashinbox.domain.common.exceptions import ValidationError
from flashinbox.domain.inbox.entities import ContentType
from flashinbox.domain.inbox.services import ContentClassifier


class TestClassifyText:
    def test_plain_text_is_trimmed(self) -> None:
        draft = ContentClassifier().classify_text("  Hello world \n")
        assert draft.content_type == ContentType.TEXT
        assert draft.content == "Hello world"
        assert draft.preview == "Hello world"
        assert draft.title is None

    @pytest.mark.parametrize(
        "payload",
        ["https://example.com/a", "http://example.com", "HTTPS://EXAMPLE.COM", "  https://x.io  "],
    )
    def test_urls(self, payload: str) -> None:
        draft = ContentClassifier().classify_text(payload)
        assert draft.content_type == ContentType.URL
        assert draft.content == payload.strip()

    @pytest.mark.parametrize(
        "payload",
        ["ftp://example.com", "see https://example.com", "https:/broken", "example.com"],
    )
    def test_non_urls_are_text(self, payload: str) -> None:
        assert ContentClassifier().classify_text(payload).content_type == ContentType.TEXT

    @pytest.mark.parametrize("payload", ["", "   ", "\n\t"])
    def test_empty_payload_rejected(self, payload: str) -> None:
        with pytest.raises(ValidationError):
            ContentClassifier().classify_text(payload)

    def test_preview_of_exactly_100_chars_is_not_truncated(self) -> None:
        text = "a" * 100
        assert ContentClassifier().classify_text(text).preview == text

    def test_preview_truncated_after_100_chars(self) -> None:
        text = "b" * 150
        draft = ContentClassifier().classify_text(text)
        assert draft.preview == "b" * 100 + "..."
        assert draft.content == text


class TestClassifyPdf:
    def test_title_from_filename(self) -> None:
        draft = ContentClassifier().classify_pdf("pdfs/pdf_1.pdf", "notes.pdf")
        assert draft.content_type == ContentType.PDF
        assert draft.content == "pdfs/pdf_1.pdf"
        assert draft.title == "notes.pdf"
        assert draft.preview == "PDF: notes.pdf"

    @pytest.mark.parametrize("filename", [None, "", "   "])
    def test_placeholder_title(self, filename: str | None) -> None:
        draft = ContentClassifier().classify_pdf("pdfs/pdf_1.pdf", filename)
        assert draft.title == "document.pdf"
        assert draft.preview == "PDF: document.pdf"

    def test_directory_components_are_dropped(self) -> None:
        draft = ContentClassifier().classify_pdf("pdfs/pdf_1.pdf", "C:\\Users\\me\\paper.pdf")
        assert draft.title == "paper.pdf"
