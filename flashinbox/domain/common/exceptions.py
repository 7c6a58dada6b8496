"""
Domain layer exceptions.

Every failure the inbox can report is a DomainError carrying an ErrorKind.
Use cases turn these into Failure results; routers translate the kind into
an HTTP status.
"""

from enum import StrEnum
from typing import ClassVar


class ErrorKind(StrEnum):
    """Broad failure categories surfaced to callers."""

    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    EXTERNAL_SYSTEM = "external_system"
    IO = "io"


class DomainError(Exception):
    """
    Base exception for all domain errors.

    All domain exceptions should inherit from this class
    so they can be caught and handled uniformly.
    """

    kind: ClassVar[ErrorKind] = ErrorKind.VALIDATION

    def __init__(self, message: str, details: dict[str, object] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} - {self.details}"
        return self.message


class ValidationError(DomainError):
    """
    Raised when input is rejected before any mutation happens.

    Example: empty capture text, unknown card status, blank deck name.
    """

    kind = ErrorKind.VALIDATION

    def __init__(self, message: str, field: str | None = None, value: object = None) -> None:
        details: dict[str, object] = {}
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = value
        super().__init__(message, details)
        self.field = field
        self.value = value


class BusinessRuleViolationError(ValidationError):
    """
    Raised when a request is well-formed but breaks a lifecycle rule.

    Example: regenerating cards for a locked entry, editing an added card.
    """

    def __init__(self, rule: str, message: str) -> None:
        super().__init__(message)
        self.details["rule"] = rule
        self.rule = rule


class EntityNotFoundError(DomainError):
    """Raised when an entry, card or setting cannot be found."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, entity_type: str, entity_id: object) -> None:
        super().__init__(
            f"{entity_type} with id {entity_id} not found",
            {"entity_type": entity_type, "entity_id": entity_id},
        )
        self.entity_type = entity_type
        self.entity_id = entity_id


class ExternalSystemError(DomainError):
    """
    Raised when the flashcard application or a remote web page misbehaves.

    Covers unreachable services, refused permission and error replies.
    """

    kind = ErrorKind.EXTERNAL_SYSTEM

    def __init__(self, message: str, system: str = "anki") -> None:
        super().__init__(message, {"system": system})
        self.system = system


class StorageError(DomainError):
    """Raised when file storage fails (disk full, permissions, interrupted copy)."""

    kind = ErrorKind.IO
