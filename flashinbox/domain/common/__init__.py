from .entity import Entity, EntityId
from .exceptions import (
    BusinessRuleViolationError,
    DomainError,
    EntityNotFoundError,
    ErrorKind,
    ExternalSystemError,
    StorageError,
    ValidationError,
)

__all__ = [
    "BusinessRuleViolationError",
    "DomainError",
    "Entity",
    "EntityId",
    "EntityNotFoundError",
    "ErrorKind",
    "ExternalSystemError",
    "StorageError",
    "ValidationError",
]
