import threading
from collections.abc import Callable
from typing import TypeVar

from dependency_injector.providers import Provider
from fastapi import Request

from flashinbox.core import Container
from flashinbox.database import DatabaseSession

T = TypeVar("T")

# Overriding `db` is container-wide state; construction is serialized so each
# use case is built with its own request's session.
_override_lock = threading.Lock()


def inject_use_case(
    select: Callable[[Container], Provider[T]],
) -> Callable[[Request, DatabaseSession], T]:
    """
    Create a FastAPI dependency for a container provider.

    Args:
        select: Picks the provider from the application's container,
            e.g. ``lambda c: c.entry_use_case``
    """

    def dependency(request: Request, db: DatabaseSession) -> T:
        container: Container = request.app.state.container
        with _override_lock, container.db.override(db):
            return select(container)()

    return dependency
