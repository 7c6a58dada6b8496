"""Protocol for Entry repository."""

from typing import Protocol

from flashinbox.domain.common.value_objects import EntryId
from flashinbox.domain.inbox.entities import Card, Entry


class EntryRepositoryProtocol(Protocol):
    """Protocol for Entry persistence operations."""

    def find_all(self) -> list[Entry]:
        """
        Get every entry.

        Returns:
            Entries ordered by created_at, newest first
        """
        ...

    def find_by_id(self, entry_id: EntryId) -> Entry | None:
        """
        Find an entry by ID.

        Args:
            entry_id: The entry ID

        Returns:
            Entry entity if found, None otherwise
        """
        ...

    def save(self, entry: Entry) -> Entry:
        """
        Insert or replace an entry (last write wins).

        Args:
            entry: The entry to persist

        Returns:
            The saved entry
        """
        ...

    def save_with_cards(self, entry: Entry, cards: list[Card]) -> Entry:
        """
        Save an entry and a batch of its cards in a single transaction.

        Args:
            entry: The entry to persist
            cards: Cards belonging to the entry

        Returns:
            The saved entry
        """
        ...

    def delete(self, entry_id: EntryId) -> bool:
        """
        Delete an entry and all of its cards in one transaction.

        Args:
            entry_id: The entry ID

        Returns:
            True if the entry existed and was removed
        """
        ...

    def delete_if_fully_resolved(self, entry_id: EntryId) -> bool:
        """
        Delete the entry only if it has cards and every one of them is added.

        The check and the delete happen in one transaction.

        Args:
            entry_id: The entry ID

        Returns:
            True if the entry was removed
        """
        ...
