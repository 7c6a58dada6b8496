"""Use case for generated card operations."""

import structlog

from flashinbox.application.common.result import returns_result
from flashinbox.application.inbox.protocols import (
    CardRepositoryProtocol,
    EntryRepositoryProtocol,
)
from flashinbox.application.inbox.use_cases.dtos import CardDraft
from flashinbox.domain.common.exceptions import (
    BusinessRuleViolationError,
    EntityNotFoundError,
    ValidationError,
)
from flashinbox.domain.common.value_objects import CardId, EntryId
from flashinbox.domain.inbox.entities import Card, CardStatus, Entry
from flashinbox.domain.inbox.entities.card import parse_card_status

logger = structlog.get_logger(__name__)


class CardUseCase:
    """Use case for saving, committing and editing cards."""

    def __init__(
        self,
        entry_repository: EntryRepositoryProtocol,
        card_repository: CardRepositoryProtocol,
        default_deck_name: str,
    ) -> None:
        self.entry_repository = entry_repository
        self.card_repository = card_repository
        self.default_deck_name = default_deck_name

    def _require_entry(self, entry_id: EntryId) -> Entry:
        entry = self.entry_repository.find_by_id(entry_id)
        if entry is None:
            raise EntityNotFoundError("Entry", entry_id.value)
        return entry

    def _require_card(self, card_id: CardId) -> Card:
        card = self.card_repository.find_by_id(card_id)
        if card is None:
            raise EntityNotFoundError("Card", card_id.value)
        return card

    def _build_cards(
        self, entry_id: EntryId, drafts: list[CardDraft], keep_outcome: bool
    ) -> list[Card]:
        """
        Turn drafts into cards of the entry, checked against the stored ones.

        A draft reusing a stored card id keeps that card's position; new cards
        are numbered after the last stored card. With keep_outcome False every
        card starts pending.

        Raises:
            ValidationError: If a draft is invalid
            BusinessRuleViolationError: If a draft id belongs to another
                entry, or would change a card that was already added
        """
        stored = {card.id: card for card in self.card_repository.find_by_entry(entry_id)}
        next_position = max((card.position for card in stored.values()), default=-1) + 1

        cards = []
        for draft in drafts:
            card_id = CardId(draft.id) if draft.id is not None else CardId.generate()
            existing = stored.get(card_id)
            if existing is None and draft.id is not None:
                if self.card_repository.find_by_id(card_id) is not None:
                    raise BusinessRuleViolationError(
                        "card_owned_by_other_entry",
                        f"Card {draft.id} belongs to another entry",
                    )

            if existing is not None:
                position = existing.position
            else:
                position = next_position
                next_position += 1

            card = Card.create_with_id(
                id=card_id,
                entry_id=entry_id,
                front=draft.front,
                back=draft.back,
                tags=draft.tags,
                status=parse_card_status(draft.status) if keep_outcome else CardStatus.PENDING,
                external_note_id=draft.external_note_id if keep_outcome else None,
                position=position,
            )
            if existing is not None and existing.is_added:
                if not existing.has_same_state(card):
                    raise BusinessRuleViolationError(
                        "card_already_added", f"Card {draft.id} was already added"
                    )
                card = existing
            cards.append(card)
        return cards

    @returns_result
    def save_cards(self, entry_id: str, drafts: list[CardDraft]) -> list[Card]:
        """
        Insert or replace cards of an unlocked entry.

        Args:
            entry_id: ID of the owning entry
            drafts: Cards to save; a draft without id gets a new one

        Returns:
            The saved cards

        Raises:
            EntityNotFoundError: If the entry does not exist
            ValidationError: If a draft is invalid or the entry is locked
            BusinessRuleViolationError: If a draft id belongs to another entry
                or would change a card that was already added
        """
        entry_id_vo = EntryId(entry_id)
        entry = self._require_entry(entry_id_vo)
        if entry.is_locked:
            raise BusinessRuleViolationError(
                "entry_locked", f"Entry {entry_id} is locked; its cards were already committed"
            )

        cards = self._build_cards(entry_id_vo, drafts, keep_outcome=True)
        saved = self.card_repository.save_all(cards)
        logger.info("saved_cards", entry_id=entry_id, count=len(saved))
        return saved

    @returns_result
    def commit_generated_cards(
        self, entry_id: str, drafts: list[CardDraft], deck_name: str | None = None
    ) -> list[Card]:
        """
        Store a freshly generated batch and lock the entry.

        Cards are saved as pending, the deck name is recorded and the entry is
        locked, all in one transaction.

        Args:
            entry_id: ID of the entry the cards were generated from
            drafts: The generated cards, at least one
            deck_name: Target deck; falls back to the entry's deck or the default

        Raises:
            EntityNotFoundError: If the entry does not exist
            ValidationError: If the batch is empty or the entry is locked
            BusinessRuleViolationError: If a draft id belongs to another entry
                or to a card that was already added
        """
        entry_id_vo = EntryId(entry_id)
        entry = self._require_entry(entry_id_vo)
        if entry.is_locked:
            raise BusinessRuleViolationError(
                "entry_locked", f"Entry {entry_id} is locked; cards cannot be regenerated"
            )
        if not drafts:
            raise ValidationError("At least one card is required", field="cards")

        cards = self._build_cards(entry_id_vo, drafts, keep_outcome=False)
        if deck_name and deck_name.strip():
            entry.update_deck_name(deck_name)
        elif not entry.deck_name:
            entry.update_deck_name(self.default_deck_name)
        entry.lock()

        self.entry_repository.save_with_cards(entry, cards)
        logger.info(
            "committed_generated_cards",
            entry_id=entry_id,
            count=len(cards),
            deck_name=entry.deck_name,
        )
        return cards

    @returns_result
    def update_card_status(
        self, card_id: str, status: str, external_note_id: int | None = None
    ) -> Card:
        """
        Record the outcome of sending a card to the flashcard application.

        Raises:
            EntityNotFoundError: If the card does not exist
            ValidationError: If the note id does not fit the status, or the
                card was already added
        """
        card = self._require_card(CardId(card_id))
        card.transition_to(parse_card_status(status), external_note_id)
        card = self.card_repository.save(card)
        logger.info("updated_card_status", card_id=card_id, status=card.status.value)
        return card

    @returns_result
    def update_card_content(self, card_id: str, front: str, back: str) -> Card:
        """
        Edit the text of a card that has not been added yet.

        Raises:
            EntityNotFoundError: If the card does not exist
            ValidationError: If the text is empty or the card was already added
        """
        card = self._require_card(CardId(card_id))
        card.update_content(front, back)
        return self.card_repository.save(card)
