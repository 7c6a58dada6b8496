"""Repository for Card domain entities."""

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from flashinbox.domain.common.value_objects import CardId, EntryId
from flashinbox.domain.inbox.entities import Card, CardStatus
from flashinbox.infrastructure.inbox.mappers import CardMapper
from flashinbox.models import GeneratedCard as GeneratedCardORM


class CardRepository:
    """Repository for Card domain entities."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = CardMapper()

    def find_by_id(self, card_id: CardId) -> Card | None:
        orm_model = self.db.get(GeneratedCardORM, card_id.value)
        return self.mapper.to_domain(orm_model) if orm_model else None

    def find_by_entry(self, entry_id: EntryId) -> list[Card]:
        """
        Get all cards of an entry.

        Returns:
            List of card entities in batch order
        """
        stmt = (
            select(GeneratedCardORM)
            .where(GeneratedCardORM.entry_id == entry_id.value)
            .order_by(GeneratedCardORM.position, GeneratedCardORM.id)
        )
        orm_models = self.db.execute(stmt).scalars().all()
        return [self.mapper.to_domain(orm) for orm in orm_models]

    def count_total(self, entry_id: EntryId) -> int:
        stmt = select(func.count(GeneratedCardORM.id)).where(
            GeneratedCardORM.entry_id == entry_id.value
        )
        return self.db.execute(stmt).scalar() or 0

    def count_pending(self, entry_id: EntryId) -> int:
        """Count cards that are not added yet (pending or error)."""
        stmt = select(func.count(GeneratedCardORM.id)).where(
            GeneratedCardORM.entry_id == entry_id.value,
            GeneratedCardORM.status != CardStatus.ADDED.value,
        )
        return self.db.execute(stmt).scalar() or 0

    def _merge(self, card: Card) -> None:
        existing = self.db.get(GeneratedCardORM, card.id.value)
        orm_model = self.mapper.to_orm(card, existing)
        if existing is None:
            self.db.add(orm_model)

    def save(self, card: Card) -> Card:
        return self.save_all([card])[0]

    def save_all(self, cards: list[Card]) -> list[Card]:
        """
        Insert or replace cards with a single commit.

        Args:
            cards: Domain entities to persist

        Returns:
            The saved cards
        """
        try:
            for card in cards:
                self._merge(card)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        return cards
