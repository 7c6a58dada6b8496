"""Database configuration and session management."""

from collections.abc import Generator, Iterator
from contextlib import contextmanager
from typing import Annotated, Any

from fastapi import Depends, Request
from sqlalchemy import create_engine, event
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

IN_MEMORY_URLS = ("sqlite://", "sqlite:///:memory:")


class Base(DeclarativeBase):
    """Base class for all database models."""


def _configure_sqlite_connection(dbapi_connection: Any, connection_record: Any) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def _enable_wal(dbapi_connection: Any, connection_record: Any) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.close()


class Database:
    """
    Engine and session factory for one application instance.

    Built once by create_app and handed to whatever needs sessions; there is
    no module-level engine.
    """

    def __init__(self, url: str) -> None:
        self.url = url
        if url.startswith("sqlite"):
            engine_kwargs: dict[str, Any] = {"connect_args": {"check_same_thread": False}}
            if url in IN_MEMORY_URLS:
                # One shared connection, otherwise each session sees an empty database
                engine_kwargs["poolclass"] = StaticPool
            self.engine = create_engine(url, **engine_kwargs)
            event.listen(self.engine, "connect", _configure_sqlite_connection)
            if url not in IN_MEMORY_URLS:
                event.listen(self.engine, "connect", _enable_wal)
        else:
            self.engine = create_engine(
                url,
                pool_size=10,
                max_overflow=20,
                pool_pre_ping=True,  # Verify connections before use
                pool_recycle=3600,
            )

        self.session_factory = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    def create_all(self) -> None:
        """Create any missing tables."""
        from flashinbox import models  # noqa: F401  (registers tables on Base.metadata)

        Base.metadata.create_all(bind=self.engine)

    @contextmanager
    def session(self) -> Iterator[Session]:
        db = self.session_factory()
        try:
            yield db
        finally:
            db.close()

    def dispose(self) -> None:
        """Dispose database engine on shutdown."""
        self.engine.dispose()


def get_database(request: Request) -> Database:
    """Get the Database built for the running application."""
    database: Database = request.app.state.database
    return database


def get_db(
    database: Annotated[Database, Depends(get_database)],
) -> Generator[Session, None, None]:
    """Get database session."""
    with database.session() as db:
        yield db


# Type alias for database dependency
DatabaseSession = Annotated[Session, Depends(get_db)]
