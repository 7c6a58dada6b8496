"""Protocol for the external flashcard application."""

from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum
from typing import Protocol


class PermissionState(StrEnum):
    GRANTED = "granted"
    DENIED = "denied"
    PROMPT = "prompt"


@dataclass(frozen=True)
class ExternalContainer:
    """A deck or note model as known by the external store."""

    id: int
    name: str


class ExternalCardStoreProtocol(Protocol):
    """
    Low-level operations of the flashcard application.

    Every method except is_available raises ExternalSystemError when the
    store is unreachable or rejects the request.
    """

    def is_available(self) -> bool:
        """Whether the store answers at all."""
        ...

    def permission_state(self) -> PermissionState:
        """Last known permission outcome, PROMPT until one was requested."""
        ...

    def request_permission(self) -> PermissionState:
        """Ask the store for access and remember the outcome."""
        ...

    def list_decks(self) -> list[ExternalContainer]:
        ...

    def create_deck(self, name: str) -> ExternalContainer:
        ...

    def list_models(self) -> list[ExternalContainer]:
        ...

    def create_basic_model(self, name: str) -> ExternalContainer:
        """Create a two-field (front, back) note model."""
        ...

    def add_note(
        self,
        deck: ExternalContainer,
        model: ExternalContainer,
        fields: tuple[str, str],
        tags: Iterable[str],
    ) -> int:
        """
        Create a note and return its id.

        Args:
            deck: Target deck
            model: Note model; fields are filled in model order
            fields: Field values, front first
            tags: Tags to attach
        """
        ...
