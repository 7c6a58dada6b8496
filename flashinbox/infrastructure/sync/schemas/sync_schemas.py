"""Pydantic schemas for the Anki sync API."""

from typing import Literal

from pydantic import BaseModel, Field

from flashinbox.infrastructure.inbox.schemas import Card


class AnkiStatusResponse(BaseModel):
    available: bool = Field(..., description="Whether AnkiConnect answers")
    permission: Literal["granted", "denied", "prompt"]


class PermissionResponse(BaseModel):
    granted: bool


class CardSyncResponse(BaseModel):
    """Schema for sending a single card."""

    success: bool
    message: str
    card: Card
    entry_removed: bool = Field(..., description="Whether the entry was auto-removed")


class EntrySyncResponse(BaseModel):
    """Schema for sending every pending card of an entry."""

    success: bool = Field(..., description="False when at least one card failed")
    message: str
    added: list[Card]
    failed: dict[str, str] = Field(..., description="Error message per failed card ID")
    entry_removed: bool
