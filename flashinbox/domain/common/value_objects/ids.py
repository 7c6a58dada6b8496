"""Strongly-typed identifiers for inbox entities."""

from dataclasses import dataclass

from flashinbox.domain.common.entity import EntityId


@dataclass(frozen=True)
class EntryId(EntityId):
    """Identifier of an inbox entry."""


@dataclass(frozen=True)
class CardId(EntityId):
    """Identifier of a generated card."""
