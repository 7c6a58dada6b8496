"""Conversion of domain entities into response schemas."""

from flashinbox.domain.inbox.entities import Card, Entry
from flashinbox.infrastructure.inbox import schemas


def present_entry(entry: Entry) -> schemas.Entry:
    return schemas.Entry(
        id=entry.id.value,
        content_type=entry.content_type.value,
        content=entry.content,
        preview=entry.preview,
        title=entry.title,
        extracted_text=entry.extracted_text,
        deck_name=entry.deck_name,
        is_locked=entry.is_locked,
        created_at=entry.created_at,
    )


def present_card(card: Card) -> schemas.Card:
    return schemas.Card(
        id=card.id.value,
        entry_id=card.entry_id.value,
        front=card.front,
        back=card.back,
        tags=sorted(card.tags),
        status=card.status.value,
        external_note_id=card.external_note_id,
        position=card.position,
    )
