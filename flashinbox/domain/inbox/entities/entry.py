"""
Inbox entry captured from shared text, a link or a PDF.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum

from flashinbox.domain.common.entity import Entity
from flashinbox.domain.common.exceptions import BusinessRuleViolationError, ValidationError
from flashinbox.domain.common.value_objects import EntryId

PREVIEW_LENGTH = 100
PREVIEW_ELLIPSIS = "..."
MAX_EXTRACTED_TEXT_LENGTH = 25_000


class ContentType(StrEnum):
    TEXT = "text"
    URL = "url"
    PDF = "pdf"


def make_preview(content: str) -> str:
    """First PREVIEW_LENGTH characters of content, with an ellipsis when truncated."""
    if len(content) <= PREVIEW_LENGTH:
        return content
    return content[:PREVIEW_LENGTH] + PREVIEW_ELLIPSIS


def parse_content_type(value: str) -> ContentType:
    try:
        return ContentType(value)
    except ValueError:
        raise ValidationError(
            f"Unknown content type '{value}'", field="content_type", value=value
        ) from None


@dataclass(eq=False)
class Entry(Entity[EntryId]):
    """
    A single captured item waiting to be turned into cards.

    Business Rules:
    - Content cannot be empty
    - Once locked an entry stays locked
    - Title, extracted text and deck name can only change while unlocked
    - For pdf entries, content is the storage reference of the backing file
    """

    id: EntryId
    content_type: ContentType
    content: str
    preview: str
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    title: str | None = None
    extracted_text: str | None = None
    deck_name: str | None = None
    is_locked: bool = False

    def __post_init__(self) -> None:
        """Validate invariants."""
        if not self.content or not self.content.strip():
            raise ValidationError("Entry content cannot be empty", field="content")

    @property
    def backing_file(self) -> str | None:
        """Storage reference of the PDF this entry owns, if any."""
        return self.content if self.content_type == ContentType.PDF else None

    def lock(self) -> None:
        """Mark the entry as locked. Locking twice is a no-op."""
        self.is_locked = True

    def update_deck_name(self, deck_name: str) -> None:
        """
        Set the deck that cards from this entry are sent to.

        Raises:
            ValidationError: If the name is blank
            BusinessRuleViolationError: If the entry is locked
        """
        if not deck_name or not deck_name.strip():
            raise ValidationError("Deck name cannot be empty", field="deck_name")
        self._ensure_unlocked("deck name")
        self.deck_name = deck_name.strip()

    def update_extracted_content(self, title: str | None, extracted_text: str) -> None:
        """
        Store text pulled out of the entry's source.

        Text beyond MAX_EXTRACTED_TEXT_LENGTH characters is dropped.

        Raises:
            BusinessRuleViolationError: If the entry is locked
        """
        self._ensure_unlocked("extracted content")
        self.title = title.strip() if title and title.strip() else self.title
        self.extracted_text = extracted_text[:MAX_EXTRACTED_TEXT_LENGTH]

    def _ensure_unlocked(self, what: str) -> None:
        if self.is_locked:
            raise BusinessRuleViolationError(
                "entry_locked", f"Cannot change {what} of locked entry {self.id}"
            )

    @classmethod
    def create(
        cls,
        content_type: ContentType,
        content: str,
        preview: str | None = None,
        title: str | None = None,
        id: EntryId | None = None,
    ) -> "Entry":
        """Create a new unlocked entry stamped with the current UTC time."""
        return cls(
            id=id or EntryId.generate(),
            content_type=content_type,
            content=content,
            preview=preview if preview is not None else make_preview(content),
            title=title,
            created_at=datetime.now(UTC),
        )

    @classmethod
    def create_with_id(
        cls,
        id: EntryId,
        content_type: ContentType,
        content: str,
        preview: str,
        created_at: datetime,
        title: str | None = None,
        extracted_text: str | None = None,
        deck_name: str | None = None,
        is_locked: bool = False,
    ) -> "Entry":
        """Reconstitute an entry from persistence or a client upsert."""
        if created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=UTC)
        else:
            created_at = created_at.astimezone(UTC)
        return cls(
            id=id,
            content_type=content_type,
            content=content,
            preview=preview,
            created_at=created_at,
            title=title,
            extracted_text=extracted_text,
            deck_name=deck_name,
            is_locked=is_locked,
        )
