"""Tests for EntryRepository persistence and transactional deletes."""

from collections.abc import Callable
from datetime import UTC, datetime

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from flashinbox import models
from flashinbox.domain.common.value_objects import EntryId
from flashinbox.domain.inbox.entities import Card, CardStatus, ContentType, Entry
from flashinbox.infrastructure.inbox.repositories import CardRepository, EntryRepository


def _card_count(db_session: Session) -> int:
    return db_session.execute(select(func.count(models.GeneratedCard.id))).scalar() or 0


class TestEntryRepository:
    def test_find_all_newest_first(
        self, entry_repository: EntryRepository, make_entry: Callable[..., Entry]
    ) -> None:
        old = make_entry("old", created_at=datetime(2024, 1, 1, tzinfo=UTC))
        new = make_entry("new", created_at=datetime(2024, 6, 1, tzinfo=UTC))

        assert [e.id for e in entry_repository.find_all()] == [new.id, old.id]

    def test_round_trip_keeps_utc(
        self, entry_repository: EntryRepository, make_entry: Callable[..., Entry]
    ) -> None:
        entry = make_entry(created_at=datetime(2024, 1, 1, 8, 30, tzinfo=UTC))
        loaded = entry_repository.find_by_id(entry.id)
        assert loaded is not None
        assert loaded.created_at == datetime(2024, 1, 1, 8, 30, tzinfo=UTC)

    def test_save_replaces_existing(
        self, entry_repository: EntryRepository, make_entry: Callable[..., Entry]
    ) -> None:
        entry = make_entry()
        entry.deck_name = "Biology"
        entry_repository.save(entry)

        loaded = entry_repository.find_by_id(entry.id)
        assert loaded is not None
        assert loaded.deck_name == "Biology"
        assert len(entry_repository.find_all()) == 1

    def test_delete_leaves_no_orphan_cards(
        self,
        db_session: Session,
        entry_repository: EntryRepository,
        make_entry: Callable[..., Entry],
        make_cards: Callable[..., list[Card]],
    ) -> None:
        entry = make_entry()
        other = make_entry("other")
        make_cards(entry.id, 3)
        make_cards(other.id, 1)

        assert entry_repository.delete(entry.id) is True

        assert entry_repository.find_by_id(entry.id) is None
        assert _card_count(db_session) == 1

    def test_delete_unknown_entry(self, entry_repository: EntryRepository) -> None:
        assert entry_repository.delete(EntryId("missing")) is False

    def test_save_with_cards(
        self, entry_repository: EntryRepository, card_repository: CardRepository
    ) -> None:
        entry = Entry.create_with_id(
            id=EntryId("e1"),
            content_type=ContentType.TEXT,
            content="content",
            preview="content",
            created_at=datetime.now(UTC),
        )
        entry.lock()
        cards = [Card.create(entry.id, "Q", "A", position=0)]

        entry_repository.save_with_cards(entry, cards)

        loaded = entry_repository.find_by_id(entry.id)
        assert loaded is not None and loaded.is_locked
        assert [c.id for c in card_repository.find_by_entry(entry.id)] == [cards[0].id]


class TestDeleteIfFullyResolved:
    def test_entry_without_cards_is_kept(
        self, entry_repository: EntryRepository, make_entry: Callable[..., Entry]
    ) -> None:
        entry = make_entry()
        assert entry_repository.delete_if_fully_resolved(entry.id) is False
        assert entry_repository.find_by_id(entry.id) is not None

    def test_entry_with_pending_or_error_cards_is_kept(
        self,
        entry_repository: EntryRepository,
        card_repository: CardRepository,
        make_entry: Callable[..., Entry],
        make_cards: Callable[..., list[Card]],
    ) -> None:
        entry = make_entry()
        first, second = make_cards(entry.id, 2)
        first.mark_added(1)
        second.transition_to(CardStatus.ERROR)
        card_repository.save_all([first, second])

        assert card_repository.count_pending(entry.id) == 1
        assert entry_repository.delete_if_fully_resolved(entry.id) is False
        assert entry_repository.find_by_id(entry.id) is not None

    def test_fully_added_entry_is_removed_with_cards(
        self,
        db_session: Session,
        entry_repository: EntryRepository,
        card_repository: CardRepository,
        make_entry: Callable[..., Entry],
        make_cards: Callable[..., list[Card]],
    ) -> None:
        entry = make_entry()
        cards = make_cards(entry.id, 2)
        for note_id, card in enumerate(cards, start=1):
            card.mark_added(note_id)
        card_repository.save_all(cards)
        assert card_repository.count_pending(entry.id) == 0
        assert card_repository.count_total(entry.id) == 2

        assert entry_repository.delete_if_fully_resolved(entry.id) is True

        assert entry_repository.find_by_id(entry.id) is None
        assert card_repository.find_by_entry(entry.id) == []
        assert _card_count(db_session) == 0
