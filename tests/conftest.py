"""Pytest configuration and fixtures."""

from collections.abc import Callable, Generator
from typing import Any

import pytest
from dependency_injector import providers
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from flashinbox.config import Settings
from flashinbox.database import Database, get_db
from flashinbox.domain.common.value_objects import EntryId
from flashinbox.domain.inbox.entities import Card, ContentType, Entry
from flashinbox.infrastructure.inbox.repositories import (
    CardRepository,
    EntryRepository,
    FileRepository,
)
from flashinbox.main import create_app
from tests.fakes import ANKI_BASE_URL, FakeAnkiConnect, FakeWebClipper


@pytest.fixture
def settings(tmp_path: Any) -> Settings:
    """Settings pointing at an in-memory database and a temporary storage root."""
    return Settings(
        DATABASE_URL="sqlite://",
        CREATE_SCHEMA_ON_STARTUP=False,
        STORAGE_PATH=tmp_path / "storage",
        ENVIRONMENT="test",
        ANKI_CONNECT_URL=ANKI_BASE_URL,
        MAX_UPLOAD_MB=1,
    )


@pytest.fixture
def database() -> Generator[Database, None, None]:
    """Fresh in-memory database with all tables."""
    database = Database("sqlite://")
    database.create_all()
    yield database
    database.dispose()


@pytest.fixture
def db_session(database: Database) -> Generator[Session, None, None]:
    with database.session() as session:
        yield session


@pytest.fixture
def entry_repository(db_session: Session) -> EntryRepository:
    return EntryRepository(db_session)


@pytest.fixture
def card_repository(db_session: Session) -> CardRepository:
    return CardRepository(db_session)


@pytest.fixture
def file_repository(settings: Settings) -> FileRepository:
    return FileRepository(settings.STORAGE_PATH)


@pytest.fixture
def fake_anki() -> FakeAnkiConnect:
    return FakeAnkiConnect()


@pytest.fixture
def fake_clipper() -> FakeWebClipper:
    return FakeWebClipper()


@pytest.fixture
def app(
    settings: Settings,
    database: Database,
    fake_anki: FakeAnkiConnect,
    fake_clipper: FakeWebClipper,
) -> FastAPI:
    app = create_app(settings, database=database)
    container = app.state.container
    container.anki_http_client.override(providers.Object(fake_anki.client()))
    container.web_clipper.override(providers.Object(fake_clipper))
    return app


@pytest.fixture
def client(app: FastAPI, db_session: Session) -> Generator[TestClient, Any, None]:
    """Create a test client with database session."""

    def override_get_db() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def make_entry(entry_repository: EntryRepository) -> Callable[..., Entry]:
    """Factory persisting an entry."""

    def _make_entry(
        content: str = "Mitochondria are the powerhouse of the cell",
        content_type: ContentType = ContentType.TEXT,
        **fields: Any,
    ) -> Entry:
        entry = Entry.create(content_type=content_type, content=content)
        for name, value in fields.items():
            setattr(entry, name, value)
        return entry_repository.save(entry)

    return _make_entry


@pytest.fixture
def make_cards(card_repository: CardRepository) -> Callable[..., list[Card]]:
    """Factory persisting pending cards for an entry."""

    def _make_cards(entry_id: EntryId, count: int = 2) -> list[Card]:
        cards = [
            Card.create(
                entry_id=entry_id,
                front=f"Question {i}",
                back=f"Answer {i}",
                tags=["biology"],
                position=i,
            )
            for i in range(count)
        ]
        return card_repository.save_all(cards)

    return _make_cards
