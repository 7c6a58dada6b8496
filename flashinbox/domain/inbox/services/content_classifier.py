"""
Classification of shared payloads into inbox entry drafts.

Pure domain logic: no I/O happens here. PDF bytes are stored by the
ingestion use case first and only the resulting storage reference is
classified.
"""

import re
from dataclasses import dataclass
from pathlib import PurePath

from flashinbox.domain.common.exceptions import ValidationError
from flashinbox.domain.inbox.entities.entry import ContentType, make_preview

URL_PATTERN = re.compile(r"^https?://", re.IGNORECASE)
DEFAULT_PDF_TITLE = "document.pdf"
PDF_PREVIEW_PREFIX = "PDF: "


@dataclass(frozen=True)
class EntryDraft:
    """Normalized content ready to become an Entry."""

    content_type: ContentType
    content: str
    preview: str
    title: str | None = None


class ContentClassifier:
    """Turns raw share payloads into entry drafts."""

    @staticmethod
    def is_url(text: str) -> bool:
        return URL_PATTERN.match(text) is not None

    def classify_text(self, payload: str) -> EntryDraft:
        """
        Classify a shared text payload.

        Args:
            payload: Raw text as shared by the user

        Returns:
            A url draft if the trimmed text starts with http:// or https://,
            a text draft otherwise

        Raises:
            ValidationError: If the payload is empty or whitespace only
        """
        content = (payload or "").strip()
        if not content:
            raise ValidationError("Shared text cannot be empty", field="text")

        content_type = ContentType.URL if self.is_url(content) else ContentType.TEXT
        return EntryDraft(
            content_type=content_type,
            content=content,
            preview=make_preview(content),
        )

    def classify_pdf(self, reference: str, filename: str | None = None) -> EntryDraft:
        """
        Build the draft for a PDF that is already stored.

        Args:
            reference: Storage-relative reference of the stored copy
            filename: Original file name, when the client provided one

        Returns:
            A pdf draft titled after the original file name
        """
        title = DEFAULT_PDF_TITLE
        if filename and filename.strip():
            # Clients sometimes send a full path; keep only the last component.
            title = PurePath(filename.strip().replace("\\", "/")).name or DEFAULT_PDF_TITLE
        return EntryDraft(
            content_type=ContentType.PDF,
            content=reference,
            preview=PDF_PREVIEW_PREFIX + title,
            title=title,
        )
