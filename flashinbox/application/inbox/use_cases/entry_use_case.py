"""Use case for inbox entry operations."""

from datetime import UTC, datetime

import structlog

from flashinbox.application.common.result import returns_result
from flashinbox.application.inbox.protocols import (
    CardRepositoryProtocol,
    EntryRepositoryProtocol,
    FileRepositoryProtocol,
)
from flashinbox.application.inbox.use_cases.dtos import EntryData, EntryWithCards
from flashinbox.domain.common.exceptions import BusinessRuleViolationError, EntityNotFoundError
from flashinbox.domain.common.value_objects import EntryId
from flashinbox.domain.inbox.entities import ContentType, Entry
from flashinbox.domain.inbox.entities.entry import make_preview, parse_content_type

logger = structlog.get_logger(__name__)


class EntryUseCase:
    """Use case for listing, saving, locking and deleting entries."""

    def __init__(
        self,
        entry_repository: EntryRepositoryProtocol,
        card_repository: CardRepositoryProtocol,
        file_repository: FileRepositoryProtocol,
    ) -> None:
        self.entry_repository = entry_repository
        self.card_repository = card_repository
        self.file_repository = file_repository

    def _require_entry(self, entry_id: EntryId) -> Entry:
        entry = self.entry_repository.find_by_id(entry_id)
        if entry is None:
            raise EntityNotFoundError("Entry", entry_id.value)
        return entry

    @returns_result
    def list_entries(self) -> list[Entry]:
        """Get every entry, newest first."""
        return self.entry_repository.find_all()

    @returns_result
    def get_entry(self, entry_id: str) -> EntryWithCards:
        """
        Get an entry with its cards.

        Raises:
            EntityNotFoundError: If the entry does not exist
        """
        entry_id_vo = EntryId(entry_id)
        entry = self._require_entry(entry_id_vo)
        return EntryWithCards(entry=entry, cards=self.card_repository.find_by_entry(entry_id_vo))

    @returns_result
    def save_entry(self, data: EntryData) -> Entry:
        """
        Insert or replace an entry.

        A locked entry is frozen: saving any copy of it leaves the stored
        entry unchanged and returns it. PDF entries are only created by
        upload, and an upsert never changes the file reference of one.

        Args:
            data: Full entry state sent by the client

        Returns:
            The saved entry

        Raises:
            ValidationError: If a field is invalid
            BusinessRuleViolationError: If the upsert would create a pdf entry
                or change the content or type of one
        """
        content_type = parse_content_type(data.content_type)
        entry_id = EntryId(data.id) if data.id is not None else EntryId.generate()
        existing = self.entry_repository.find_by_id(entry_id)

        backing_file = existing.backing_file if existing is not None else None
        if content_type == ContentType.PDF or backing_file is not None:
            if content_type != ContentType.PDF or backing_file != data.content:
                raise BusinessRuleViolationError(
                    "pdf_content_fixed",
                    "PDF entries are created by upload and their file reference cannot change",
                )
        if existing is not None and existing.is_locked:
            logger.info("kept_locked_entry", entry_id=entry_id.value)
            return existing

        if data.created_at is not None:
            created_at = data.created_at
        elif existing is not None:
            created_at = existing.created_at
        else:
            created_at = datetime.now(UTC)

        entry = Entry.create_with_id(
            id=entry_id,
            content_type=content_type,
            content=data.content,
            preview=data.preview if data.preview is not None else make_preview(data.content),
            created_at=created_at,
            title=data.title,
            extracted_text=data.extracted_text,
            deck_name=data.deck_name,
            is_locked=data.is_locked,
        )
        entry = self.entry_repository.save(entry)
        logger.info("saved_entry", entry_id=entry.id.value, created=existing is None)
        return entry

    @returns_result
    def delete_entry(self, entry_id: str) -> None:
        """
        Delete an entry, its cards and its stored PDF.

        The file is removed after the database delete commits; a failure to
        remove it is logged and does not fail the operation.

        Raises:
            EntityNotFoundError: If the entry does not exist
        """
        entry_id_vo = EntryId(entry_id)
        entry = self._require_entry(entry_id_vo)
        if not self.entry_repository.delete(entry_id_vo):
            raise EntityNotFoundError("Entry", entry_id)
        if entry.backing_file:
            self.file_repository.delete_file(entry.backing_file)
        logger.info("deleted_entry", entry_id=entry_id)

    @returns_result
    def lock_entry(self, entry_id: str) -> Entry:
        """Lock an entry. Locking an already locked entry succeeds."""
        entry = self._require_entry(EntryId(entry_id))
        if entry.is_locked:
            return entry
        entry.lock()
        entry = self.entry_repository.save(entry)
        logger.info("locked_entry", entry_id=entry_id)
        return entry

    @returns_result
    def update_deck_name(self, entry_id: str, deck_name: str) -> Entry:
        """
        Change the target deck of an unlocked entry.

        Raises:
            EntityNotFoundError: If the entry does not exist
            ValidationError: If the name is blank or the entry is locked
        """
        entry = self._require_entry(EntryId(entry_id))
        entry.update_deck_name(deck_name)
        return self.entry_repository.save(entry)

    @returns_result
    def update_extracted_content(
        self, entry_id: str, title: str | None, extracted_text: str
    ) -> Entry:
        """
        Store text extracted from the entry's source (OCR, clipping, PDF text).

        Raises:
            EntityNotFoundError: If the entry does not exist
            ValidationError: If the entry is locked
        """
        entry = self._require_entry(EntryId(entry_id))
        entry.update_extracted_content(title, extracted_text)
        entry = self.entry_repository.save(entry)
        logger.info(
            "updated_extracted_content",
            entry_id=entry_id,
            length=len(entry.extracted_text or ""),
        )
        return entry
