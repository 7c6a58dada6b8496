"""
Bridge between inbox cards and the external flashcard application.

Decks and note models are looked up by exact name and created when missing.
Resolution runs under one lock per bridge, and the container wires a single
bridge per process, so concurrent requests never create the same deck twice.
Two separate processes can still both miss a name and each create it; the
store then holds a duplicate container which the user can merge by hand.
"""

import logging
import threading
from collections.abc import Callable, Iterable

from flashinbox.application.sync.protocols import (
    ExternalCardStoreProtocol,
    ExternalContainer,
    PermissionState,
)
from flashinbox.domain.common.exceptions import ValidationError

logger = logging.getLogger(__name__)


class AnkiSyncBridge:
    """Resolves decks and models and creates notes in the external store."""

    def __init__(self, store: ExternalCardStoreProtocol) -> None:
        self.store = store
        self._resolve_lock = threading.Lock()

    def is_available(self) -> bool:
        return self.store.is_available()

    def permission_state(self) -> PermissionState:
        return self.store.permission_state()

    def has_permission(self) -> bool:
        return self.store.permission_state() == PermissionState.GRANTED

    def request_permission(self, callback: Callable[[bool], None] | None = None) -> bool:
        """
        Ask the store for access.

        Args:
            callback: Optional function receiving whether access was granted

        Returns:
            True if access was granted
        """
        granted = self.store.request_permission() == PermissionState.GRANTED
        logger.info(f"Permission request answered: granted={granted}")
        if callback is not None:
            callback(granted)
        return granted

    def _get_or_create(
        self,
        name: str,
        list_existing: Callable[[], list[ExternalContainer]],
        create: Callable[[str], ExternalContainer],
        kind: str,
    ) -> ExternalContainer:
        for container in list_existing():
            if container.name == name:
                return container
        container = create(name)
        logger.info(f"Created {kind} '{name}' with id {container.id}")
        return container

    def resolve_deck(self, deck_name: str) -> ExternalContainer:
        with self._resolve_lock:
            return self._get_or_create(
                deck_name, self.store.list_decks, self.store.create_deck, "deck"
            )

    def resolve_model(self, model_name: str) -> ExternalContainer:
        with self._resolve_lock:
            return self._get_or_create(
                model_name, self.store.list_models, self.store.create_basic_model, "model"
            )

    def add_card(
        self,
        deck_name: str,
        model_name: str,
        front: str,
        back: str,
        tags: Iterable[str],
    ) -> int:
        """
        Create one note in the named deck using the named model.

        Args:
            deck_name: Deck to add to, created if missing
            model_name: Two-field model to use, created if missing
            front: Front field value
            back: Back field value
            tags: Tags to attach

        Returns:
            The id of the created note

        Raises:
            ValidationError: If the deck or model name is blank
            ExternalSystemError: If the store fails at any step; nothing is retried
        """
        if not deck_name or not deck_name.strip():
            raise ValidationError("Deck name cannot be empty", field="deck_name")
        if not model_name or not model_name.strip():
            raise ValidationError("Model name cannot be empty", field="model_name")

        deck = self.resolve_deck(deck_name)
        model = self.resolve_model(model_name)
        return self.store.add_note(deck, model, (front, back), sorted(tags))
