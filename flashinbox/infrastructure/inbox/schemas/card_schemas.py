"""Pydantic schemas for generated card API request/response validation."""

from typing import Literal

from pydantic import BaseModel, Field

CardStatusField = Literal["pending", "added", "error"]


class Card(BaseModel):
    """Schema for Card response."""

    id: str
    entry_id: str
    front: str
    back: str
    tags: list[str]
    status: CardStatusField
    external_note_id: int | None
    position: int


class CardDraftRequest(BaseModel):
    """One card of a batch to save."""

    id: str | None = Field(None, min_length=1, description="Card ID; generated when omitted")
    front: str = Field(..., min_length=1)
    back: str = Field(..., min_length=1)
    tags: list[str] = Field(default_factory=list)
    status: CardStatusField = "pending"
    external_note_id: int | None = None


class CardsSaveRequest(BaseModel):
    cards: list[CardDraftRequest]


class GeneratedCardDraft(BaseModel):
    """One freshly generated card."""

    id: str | None = Field(None, min_length=1)
    front: str = Field(..., min_length=1)
    back: str = Field(..., min_length=1)
    tags: list[str] = Field(default_factory=list)


class CardsCommitRequest(BaseModel):
    """Schema for storing a generated batch and locking the entry."""

    cards: list[GeneratedCardDraft] = Field(..., min_length=1)
    deck_name: str | None = Field(None, description="Target deck; default deck when omitted")


class CardsResponse(BaseModel):
    success: bool = Field(..., description="Whether the operation was successful")
    message: str = Field(..., description="Response message")
    cards: list[Card]


class CardStatusUpdateRequest(BaseModel):
    """Schema for recording a card's sync outcome."""

    status: CardStatusField
    external_note_id: int | None = Field(None, description="Required exactly when status is added")


class CardContentUpdateRequest(BaseModel):
    front: str = Field(..., min_length=1)
    back: str = Field(..., min_length=1)


class CardResponse(BaseModel):
    success: bool = Field(..., description="Whether the update was successful")
    message: str = Field(..., description="Response message")
    card: Card
