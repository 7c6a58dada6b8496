"""
Generated question/answer card belonging to an inbox entry.
"""

from dataclasses import dataclass, field
from enum import StrEnum

from flashinbox.domain.common.entity import Entity
from flashinbox.domain.common.exceptions import BusinessRuleViolationError, ValidationError
from flashinbox.domain.common.value_objects import CardId, EntryId


class CardStatus(StrEnum):
    PENDING = "pending"
    ADDED = "added"
    ERROR = "error"


def parse_card_status(value: str) -> CardStatus:
    try:
        return CardStatus(value)
    except ValueError:
        raise ValidationError(f"Unknown card status '{value}'", field="status", value=value) from None


def normalize_tags(tags: object) -> frozenset[str]:
    """Turn a tag collection into a set of trimmed, non-empty strings."""
    if tags is None:
        return frozenset()
    if isinstance(tags, str) or not hasattr(tags, "__iter__"):
        raise ValidationError("Tags must be a list of strings", field="tags", value=tags)
    result = set()
    for tag in tags:
        if not isinstance(tag, str):
            raise ValidationError("Tags must be a list of strings", field="tags", value=tag)
        if tag.strip():
            result.add(tag.strip())
    return frozenset(result)


@dataclass(eq=False)
class Card(Entity[CardId]):
    """
    One front/back card destined for the flashcard application.

    Business Rules:
    - Front and back cannot be empty
    - external_note_id is set exactly when the card is added
    - An added card is final: its status and content cannot change
    - An errored card may be resubmitted by moving it back to pending
    """

    id: CardId
    entry_id: EntryId
    front: str
    back: str
    tags: frozenset[str] = field(default_factory=frozenset)
    status: CardStatus = CardStatus.PENDING
    external_note_id: int | None = None
    position: int = 0

    def __post_init__(self) -> None:
        """Validate invariants."""
        if not self.front or not self.front.strip():
            raise ValidationError("Card front cannot be empty", field="front")
        if not self.back or not self.back.strip():
            raise ValidationError("Card back cannot be empty", field="back")
        self._check_note_id(self.status, self.external_note_id)

    @property
    def is_added(self) -> bool:
        return self.status == CardStatus.ADDED

    def has_same_state(self, other: "Card") -> bool:
        """Whether other carries the same owner, text, tags and sync outcome."""
        return (
            self.entry_id == other.entry_id
            and self.front == other.front
            and self.back == other.back
            and self.tags == other.tags
            and self.status == other.status
            and self.external_note_id == other.external_note_id
        )

    @staticmethod
    def _check_note_id(status: CardStatus, external_note_id: int | None) -> None:
        if status == CardStatus.ADDED and external_note_id is None:
            raise ValidationError(
                "An added card needs the external note id", field="external_note_id"
            )
        if status != CardStatus.ADDED and external_note_id is not None:
            raise ValidationError(
                "Only added cards carry an external note id",
                field="external_note_id",
                value=external_note_id,
            )

    def transition_to(self, status: CardStatus, external_note_id: int | None = None) -> None:
        """
        Move the card to a new status.

        Repeating the transition that already happened is accepted so clients
        can safely retry.

        Raises:
            ValidationError: If the note id does not match the target status
            BusinessRuleViolationError: If the card was already added
        """
        self._check_note_id(status, external_note_id)
        if self.is_added:
            if status == CardStatus.ADDED and external_note_id == self.external_note_id:
                return
            raise BusinessRuleViolationError(
                "card_already_added", f"Card {self.id} was already added"
            )
        self.status = status
        self.external_note_id = external_note_id

    def mark_added(self, external_note_id: int) -> None:
        self.transition_to(CardStatus.ADDED, external_note_id)

    def update_content(self, front: str, back: str) -> None:
        """
        Edit the card text.

        Raises:
            ValidationError: If front or back is empty
            BusinessRuleViolationError: If the card was already added
        """
        if self.is_added:
            raise BusinessRuleViolationError(
                "card_already_added", f"Card {self.id} was already added and cannot be edited"
            )
        if not front or not front.strip():
            raise ValidationError("Card front cannot be empty", field="front")
        if not back or not back.strip():
            raise ValidationError("Card back cannot be empty", field="back")
        self.front = front
        self.back = back

    @classmethod
    def create(
        cls,
        entry_id: EntryId,
        front: str,
        back: str,
        tags: object = None,
        id: CardId | None = None,
        position: int = 0,
    ) -> "Card":
        """Create a new pending card."""
        return cls(
            id=id or CardId.generate(),
            entry_id=entry_id,
            front=front,
            back=back,
            tags=normalize_tags(tags),
            position=position,
        )

    @classmethod
    def create_with_id(
        cls,
        id: CardId,
        entry_id: EntryId,
        front: str,
        back: str,
        tags: object,
        status: CardStatus,
        external_note_id: int | None,
        position: int = 0,
    ) -> "Card":
        """Reconstitute a card from persistence or a client upsert."""
        return cls(
            id=id,
            entry_id=entry_id,
            front=front,
            back=back,
            tags=normalize_tags(tags),
            status=status,
            external_note_id=external_note_id,
            position=position,
        )
