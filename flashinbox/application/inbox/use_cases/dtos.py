"""Data carriers shared by the inbox use cases."""

from dataclasses import dataclass, field
from datetime import datetime

from flashinbox.domain.inbox.entities import Card, CardStatus, Entry


@dataclass
class EntryWithCards:
    """DTO for an entry together with its cards."""

    entry: Entry
    cards: list[Card]

    @property
    def total_card_count(self) -> int:
        return len(self.cards)

    @property
    def pending_card_count(self) -> int:
        return sum(1 for card in self.cards if card.status != CardStatus.ADDED)


@dataclass
class EntryData:
    """Full entry state sent by a client for an upsert."""

    content_type: str
    content: str
    id: str | None = None
    preview: str | None = None
    title: str | None = None
    extracted_text: str | None = None
    deck_name: str | None = None
    is_locked: bool = False
    created_at: datetime | None = None


@dataclass
class CardDraft:
    """One card as produced by the generator or edited by the client."""

    front: str
    back: str
    tags: list[str] = field(default_factory=list)
    id: str | None = None
    status: str = CardStatus.PENDING.value
    external_note_id: int | None = None
