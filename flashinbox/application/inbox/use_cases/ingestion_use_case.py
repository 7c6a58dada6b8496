"""Use case for turning shared payloads into inbox entries."""

from typing import BinaryIO

import structlog

from flashinbox.application.common.result import returns_result
from flashinbox.application.inbox.protocols import (
    EntryRepositoryProtocol,
    FileRepositoryProtocol,
)
from flashinbox.domain.common.value_objects import EntryId
from flashinbox.domain.inbox.entities import Entry
from flashinbox.domain.inbox.services import ContentClassifier, EntryDraft

logger = structlog.get_logger(__name__)


class IngestionUseCase:
    """Creates entries from shared text, links and PDF uploads."""

    def __init__(
        self,
        entry_repository: EntryRepositoryProtocol,
        file_repository: FileRepositoryProtocol,
        classifier: ContentClassifier,
        max_upload_bytes: int | None = None,
    ) -> None:
        self.entry_repository = entry_repository
        self.file_repository = file_repository
        self.classifier = classifier
        self.max_upload_bytes = max_upload_bytes

    def _create_entry(self, draft: EntryDraft, entry_id: EntryId | None = None) -> Entry:
        entry = Entry.create(
            content_type=draft.content_type,
            content=draft.content,
            preview=draft.preview,
            title=draft.title,
            id=entry_id,
        )
        return self.entry_repository.save(entry)

    @returns_result
    def ingest_text(self, payload: str) -> Entry:
        """
        Create a text or url entry from shared text.

        Raises:
            ValidationError: If the payload is empty
        """
        entry = self._create_entry(self.classifier.classify_text(payload))
        logger.info(
            "ingested_text",
            entry_id=entry.id.value,
            content_type=entry.content_type.value,
        )
        return entry

    @returns_result
    def ingest_pdf(self, stream: BinaryIO, filename: str | None = None) -> Entry:
        """
        Store a PDF and create the entry that owns it.

        The file is durably in place before the entry row is written. If the
        row cannot be written the stored file is removed again.

        Args:
            stream: Readable binary stream with the PDF bytes
            filename: Original file name, used as the entry title

        Raises:
            ValidationError: If the payload is empty or too large
            StorageError: If the file cannot be stored
        """
        entry_id = EntryId.generate()
        reference = self.file_repository.save_pdf(
            stream, entry_id, max_bytes=self.max_upload_bytes
        )
        try:
            entry = self._create_entry(
                self.classifier.classify_pdf(reference, filename), entry_id=entry_id
            )
        except Exception:
            self.file_repository.delete_file(reference)
            raise

        logger.info("ingested_pdf", entry_id=entry.id.value, reference=reference)
        return entry
