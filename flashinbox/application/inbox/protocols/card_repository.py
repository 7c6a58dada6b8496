"""Protocol for Card repository."""

from typing import Protocol

from flashinbox.domain.common.value_objects import CardId, EntryId
from flashinbox.domain.inbox.entities import Card


class CardRepositoryProtocol(Protocol):
    """Protocol for Card persistence operations."""

    def find_by_id(self, card_id: CardId) -> Card | None:
        """
        Find a card by ID.

        Args:
            card_id: The card ID

        Returns:
            Card entity if found, None otherwise
        """
        ...

    def find_by_entry(self, entry_id: EntryId) -> list[Card]:
        """
        Get all cards of an entry.

        Args:
            entry_id: The entry ID

        Returns:
            Cards ordered by their position in the generated batch
        """
        ...

    def save(self, card: Card) -> Card:
        """Insert or replace a single card."""
        ...

    def save_all(self, cards: list[Card]) -> list[Card]:
        """Insert or replace a batch of cards in one transaction."""
        ...

    def count_pending(self, entry_id: EntryId) -> int:
        """Count cards of the entry whose status is not added."""
        ...

    def count_total(self, entry_id: EntryId) -> int:
        """Count all cards of the entry."""
        ...
