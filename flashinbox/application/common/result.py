"""
Result type for use case outcomes.

Use cases never let a DomainError escape: they return Success with the
value, or Failure with the error, and routers decide what to do with it.

Example:
    result = entry_use_case.get_entry("3f2a...")
    if result.is_success:
        detail = result.unwrap()
    else:
        error = result.unwrap_error()
        log.warning("lookup_failed", kind=error.kind)
"""

from collections.abc import Callable
from dataclasses import dataclass
from functools import wraps
from typing import Generic, ParamSpec, TypeVar

import structlog

from flashinbox.domain.common.exceptions import DomainError

T = TypeVar("T")  # Success value type
E = TypeVar("E")  # Error type
U = TypeVar("U")  # Mapped value type
P = ParamSpec("P")

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class Success(Generic[T]):
    """Represents a successful result containing a value."""

    value: T

    @property
    def is_success(self) -> bool:
        return True

    @property
    def is_failure(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value

    def unwrap_error(self) -> None:
        """Raises ValueError - Success has no error."""
        raise ValueError("Cannot get error from Success result")

    def map(self, fn: Callable[[T], U]) -> "Success[U]":
        return Success(fn(self.value))


@dataclass(frozen=True)
class Failure(Generic[E]):
    """Represents a failed result containing an error."""

    error: E

    @property
    def is_success(self) -> bool:
        return False

    @property
    def is_failure(self) -> bool:
        return True

    def unwrap(self) -> None:
        """Raises ValueError carrying the error."""
        raise ValueError(f"Cannot unwrap Failure result: {self.error}")

    def unwrap_error(self) -> E:
        return self.error

    def map(self, fn: Callable[[object], U]) -> "Failure[E]":
        """No-op for Failure - returns self."""
        return self


Result = Success[T] | Failure[E]


def returns_result(fn: Callable[P, T]) -> Callable[P, "Result[T, DomainError]"]:
    """
    Wrap a use case method so DomainErrors come back as Failure values.

    Any other exception is a bug or an infrastructure fault and propagates.
    """

    @wraps(fn)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> "Result[T, DomainError]":
        try:
            return Success(fn(*args, **kwargs))
        except DomainError as e:
            logger.info(
                "use_case_failed",
                operation=fn.__qualname__,
                kind=e.kind.value,
                error=e.message,
            )
            return Failure(e)

    return wrapper
