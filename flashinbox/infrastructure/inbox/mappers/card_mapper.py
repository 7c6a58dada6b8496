"""Mapper for GeneratedCard ORM <-> Card domain conversion."""

from flashinbox.domain.common.value_objects import CardId, EntryId
from flashinbox.domain.inbox.entities import Card, CardStatus
from flashinbox.models import GeneratedCard as GeneratedCardORM


class CardMapper:
    """Mapper for GeneratedCard ORM <-> Card domain conversion."""

    def to_domain(self, orm_model: GeneratedCardORM) -> Card:
        return Card.create_with_id(
            id=CardId(orm_model.id),
            entry_id=EntryId(orm_model.entry_id),
            front=orm_model.front,
            back=orm_model.back,
            tags=orm_model.tags or [],
            status=CardStatus(orm_model.status),
            external_note_id=orm_model.external_note_id,
            position=orm_model.position,
        )

    def to_orm(self, card: Card, orm_model: GeneratedCardORM | None = None) -> GeneratedCardORM:
        if orm_model is None:
            orm_model = GeneratedCardORM(id=card.id.value)
        orm_model.entry_id = card.entry_id.value
        orm_model.front = card.front
        orm_model.back = card.back
        # Stored as a sorted JSON array so equal tag sets serialize identically
        orm_model.tags = sorted(card.tags)
        orm_model.status = card.status.value
        orm_model.external_note_id = card.external_note_id
        orm_model.position = card.position
        return orm_model
