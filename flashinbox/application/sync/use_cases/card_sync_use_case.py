"""Use case for sending pending cards to the flashcard application."""

from dataclasses import dataclass, field

import structlog

from flashinbox.application.common.result import returns_result
from flashinbox.application.inbox.protocols import (
    CardRepositoryProtocol,
    EntryRepositoryProtocol,
)
from flashinbox.application.inbox.use_cases.reconciliation_use_case import (
    ReconciliationUseCase,
)
from flashinbox.application.sync.protocols import PermissionState
from flashinbox.application.sync.services import AnkiSyncBridge
from flashinbox.domain.common.exceptions import (
    BusinessRuleViolationError,
    EntityNotFoundError,
    ExternalSystemError,
)
from flashinbox.domain.common.value_objects import CardId, EntryId
from flashinbox.domain.inbox.entities import Card, CardStatus, Entry

logger = structlog.get_logger(__name__)


@dataclass
class CardSyncOutcome:
    """Result of sending one card."""

    card: Card
    entry_removed: bool


@dataclass
class EntrySyncOutcome:
    """Per-card result of sending every pending card of an entry."""

    entry_id: str
    added: list[Card] = field(default_factory=list)
    failed: dict[str, str] = field(default_factory=dict)
    entry_removed: bool = False


class CardSyncUseCase:
    """Sends cards through the sync bridge and records the outcome."""

    def __init__(
        self,
        entry_repository: EntryRepositoryProtocol,
        card_repository: CardRepositoryProtocol,
        bridge: AnkiSyncBridge,
        reconciliation: ReconciliationUseCase,
        model_name: str,
        default_deck_name: str,
    ) -> None:
        self.entry_repository = entry_repository
        self.card_repository = card_repository
        self.bridge = bridge
        self.reconciliation = reconciliation
        self.model_name = model_name
        self.default_deck_name = default_deck_name

    def _require_entry(self, entry_id: EntryId) -> Entry:
        entry = self.entry_repository.find_by_id(entry_id)
        if entry is None:
            raise EntityNotFoundError("Entry", entry_id.value)
        return entry

    def _ensure_ready(self) -> None:
        if not self.bridge.is_available():
            raise ExternalSystemError("Anki is not reachable")
        state = self.bridge.permission_state()
        if state == PermissionState.PROMPT:
            granted = self.bridge.request_permission()
        else:
            granted = state == PermissionState.GRANTED
        if not granted:
            raise ExternalSystemError("Permission to add cards to Anki was denied")

    def _send(self, entry: Entry, card: Card) -> Card:
        """Add one card and mark it added. On failure the card is left untouched."""
        note_id = self.bridge.add_card(
            deck_name=entry.deck_name or self.default_deck_name,
            model_name=self.model_name,
            front=card.front,
            back=card.back,
            tags=card.tags,
        )
        card.mark_added(note_id)
        card = self.card_repository.save(card)
        logger.info("added_card_to_anki", card_id=card.id.value, note_id=note_id)
        return card

    @returns_result
    def add_card_to_store(self, card_id: str) -> CardSyncOutcome:
        """
        Send one card and reconcile its entry.

        Raises:
            EntityNotFoundError: If the card or its entry does not exist
            ValidationError: If the card was already added
            ExternalSystemError: If Anki is unavailable, refuses access or
                rejects the note; the card stays as it was
        """
        card = self.card_repository.find_by_id(CardId(card_id))
        if card is None:
            raise EntityNotFoundError("Card", card_id)
        if card.status == CardStatus.ADDED:
            raise BusinessRuleViolationError(
                "card_already_added", f"Card {card_id} was already added"
            )
        entry = self._require_entry(card.entry_id)

        self._ensure_ready()
        try:
            card = self._send(entry, card)
        except ExternalSystemError as e:
            logger.warning("add_card_to_anki_failed", card_id=card_id, error=e.message)
            raise

        removed = self.reconciliation.remove_if_resolved(entry.id)
        return CardSyncOutcome(card=card, entry_removed=removed)

    @returns_result
    def add_all_pending(self, entry_id: str) -> EntrySyncOutcome:
        """
        Send every card of the entry that is not added yet.

        A card that fails stays as it was and is listed in the outcome;
        the remaining cards are still attempted.

        Raises:
            EntityNotFoundError: If the entry does not exist
            ExternalSystemError: If Anki is unavailable or refuses access
        """
        entry_id_vo = EntryId(entry_id)
        entry = self._require_entry(entry_id_vo)
        pending = [
            card
            for card in self.card_repository.find_by_entry(entry_id_vo)
            if card.status != CardStatus.ADDED
        ]
        outcome = EntrySyncOutcome(entry_id=entry_id)

        if pending:
            self._ensure_ready()
        for card in pending:
            try:
                outcome.added.append(self._send(entry, card))
            except ExternalSystemError as e:
                logger.warning("add_card_to_anki_failed", card_id=card.id.value, error=e.message)
                outcome.failed[card.id.value] = e.message

        outcome.entry_removed = self.reconciliation.remove_if_resolved(entry_id_vo)
        logger.info(
            "synced_entry",
            entry_id=entry_id,
            added=len(outcome.added),
            failed=len(outcome.failed),
            removed=outcome.entry_removed,
        )
        return outcome
