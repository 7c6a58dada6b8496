"""Repository for Entry domain entities."""

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from flashinbox.domain.common.value_objects import EntryId
from flashinbox.domain.inbox.entities import Card, CardStatus, Entry
from flashinbox.infrastructure.inbox.mappers import CardMapper, EntryMapper
from flashinbox.models import GeneratedCard as GeneratedCardORM
from flashinbox.models import InboxEntry as InboxEntryORM


class EntryRepository:
    """Repository for Entry domain entities."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = EntryMapper()
        self.card_mapper = CardMapper()

    def find_all(self) -> list[Entry]:
        """
        Get every entry.

        Returns:
            List of entry entities ordered by created_at DESC
        """
        stmt = select(InboxEntryORM).order_by(
            InboxEntryORM.created_at.desc(), InboxEntryORM.id.desc()
        )
        orm_models = self.db.execute(stmt).scalars().all()
        return [self.mapper.to_domain(orm) for orm in orm_models]

    def find_by_id(self, entry_id: EntryId) -> Entry | None:
        orm_model = self.db.get(InboxEntryORM, entry_id.value)
        return self.mapper.to_domain(orm_model) if orm_model else None

    def _merge_entry(self, entry: Entry) -> None:
        existing = self.db.get(InboxEntryORM, entry.id.value)
        orm_model = self.mapper.to_orm(entry, existing)
        if existing is None:
            self.db.add(orm_model)

    def save(self, entry: Entry) -> Entry:
        """
        Insert or replace an entry.

        Args:
            entry: Domain entity to persist

        Returns:
            Saved domain entity
        """
        try:
            self._merge_entry(entry)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        return entry

    def save_with_cards(self, entry: Entry, cards: list[Card]) -> Entry:
        """
        Save an entry and its cards with a single commit.

        Args:
            entry: Domain entity to persist
            cards: Cards of the entry

        Returns:
            Saved domain entity
        """
        try:
            self._merge_entry(entry)
            # Cards reference the entry row, so it is inserted first
            self.db.flush()
            for card in cards:
                existing = self.db.get(GeneratedCardORM, card.id.value)
                orm_card = self.card_mapper.to_orm(card, existing)
                if existing is None:
                    self.db.add(orm_card)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        return entry

    def delete(self, entry_id: EntryId) -> bool:
        """
        Delete an entry and its cards in one transaction.

        Args:
            entry_id: ID of the entry

        Returns:
            True if the entry was deleted, False if it did not exist
        """
        try:
            self.db.execute(
                delete(GeneratedCardORM)
                .where(GeneratedCardORM.entry_id == entry_id.value)
                .execution_options(synchronize_session=False)
            )
            result = self.db.execute(
                delete(InboxEntryORM)
                .where(InboxEntryORM.id == entry_id.value)
                .execution_options(synchronize_session=False)
            )
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        return result.rowcount > 0

    def delete_if_fully_resolved(self, entry_id: EntryId) -> bool:
        """
        Delete the entry if it has at least one card and no card that is not added.

        The condition is part of the DELETE statement itself, so a card
        changing state concurrently cannot slip between check and delete.

        Args:
            entry_id: ID of the entry

        Returns:
            True if the entry was deleted
        """
        has_cards = select(GeneratedCardORM.id).where(
            GeneratedCardORM.entry_id == entry_id.value
        ).exists()
        has_open_cards = select(GeneratedCardORM.id).where(
            GeneratedCardORM.entry_id == entry_id.value,
            GeneratedCardORM.status != CardStatus.ADDED.value,
        ).exists()

        try:
            result = self.db.execute(
                delete(InboxEntryORM)
                .where(InboxEntryORM.id == entry_id.value, has_cards, ~has_open_cards)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                self.db.rollback()
                return False
            self.db.execute(
                delete(GeneratedCardORM)
                .where(GeneratedCardORM.entry_id == entry_id.value)
                .execution_options(synchronize_session=False)
            )
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        return True
