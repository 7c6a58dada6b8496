"""Use case for purging entries whose cards all reached the flashcard app."""

import structlog

from flashinbox.application.common.result import returns_result
from flashinbox.application.inbox.protocols import (
    EntryRepositoryProtocol,
    FileRepositoryProtocol,
)
from flashinbox.domain.common.exceptions import EntityNotFoundError
from flashinbox.domain.common.value_objects import EntryId

logger = structlog.get_logger(__name__)


class ReconciliationUseCase:
    """Removes fully resolved entries together with their stored files."""

    def __init__(
        self,
        entry_repository: EntryRepositoryProtocol,
        file_repository: FileRepositoryProtocol,
    ) -> None:
        self.entry_repository = entry_repository
        self.file_repository = file_repository

    def remove_if_resolved(self, entry_id: EntryId) -> bool:
        """
        Delete the entry if it has cards and all of them are added.

        The stored PDF is deleted afterwards on a best-effort basis.

        Returns:
            True if the entry was removed

        Raises:
            EntityNotFoundError: If the entry does not exist
        """
        entry = self.entry_repository.find_by_id(entry_id)
        if entry is None:
            raise EntityNotFoundError("Entry", entry_id.value)

        if not self.entry_repository.delete_if_fully_resolved(entry_id):
            return False

        if entry.backing_file:
            self.file_repository.delete_file(entry.backing_file)
        logger.info("auto_removed_entry", entry_id=entry_id.value)
        return True

    @returns_result
    def check_auto_remove(self, entry_id: str) -> bool:
        """Remove the entry if fully resolved; returns whether it was removed."""
        return self.remove_if_resolved(EntryId(entry_id))
