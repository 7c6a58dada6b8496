"""Pydantic schemas for inbox entry API request/response validation."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from flashinbox.infrastructure.inbox.schemas.card_schemas import Card

ContentTypeField = Literal["text", "url", "pdf"]


class Entry(BaseModel):
    """Schema for Entry response."""

    id: str
    content_type: ContentTypeField
    content: str
    preview: str
    title: str | None
    extracted_text: str | None
    deck_name: str | None
    is_locked: bool
    created_at: datetime


class EntriesListResponse(BaseModel):
    """Schema for listing entries, newest first."""

    entries: list[Entry]


class EntryDetailResponse(BaseModel):
    """Schema for one entry together with its cards."""

    entry: Entry
    cards: list[Card]
    total_card_count: int = Field(..., description="Number of cards of the entry")
    pending_card_count: int = Field(..., description="Cards that are not added yet")


class EntrySaveRequest(BaseModel):
    """Schema for inserting or replacing an entry."""

    id: str | None = Field(None, min_length=1, description="Entry ID; generated when omitted")
    content_type: ContentTypeField
    content: str = Field(..., min_length=1)
    preview: str | None = Field(None, description="Derived from content when omitted")
    title: str | None = None
    extracted_text: str | None = None
    deck_name: str | None = None
    is_locked: bool = False
    created_at: datetime | None = None


class EntryResponse(BaseModel):
    """Schema for operations returning a single entry."""

    success: bool = Field(..., description="Whether the operation was successful")
    message: str = Field(..., description="Response message")
    entry: Entry


class EntryDeleteResponse(BaseModel):
    success: bool = Field(..., description="Whether the deletion was successful")
    message: str = Field(..., description="Response message")


class DeckNameUpdateRequest(BaseModel):
    deck_name: str = Field(..., min_length=1, description="Target deck name")


class ExtractedContentUpdateRequest(BaseModel):
    """Schema for storing text extracted from an entry's source."""

    title: str | None = Field(None, description="Title; kept unchanged when omitted")
    extracted_text: str = Field(..., description="Extracted text, truncated to 25000 characters")


class AutoRemoveResponse(BaseModel):
    removed: bool = Field(..., description="Whether the fully resolved entry was removed")


class TextIngestRequest(BaseModel):
    """Schema for sharing text or a link into the inbox."""

    text: str = Field(..., min_length=1, description="Shared text or URL")
