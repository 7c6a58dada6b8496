"""Inbox context schemas."""

from flashinbox.infrastructure.inbox.schemas.card_schemas import (
    Card,
    CardContentUpdateRequest,
    CardDraftRequest,
    CardResponse,
    CardsCommitRequest,
    CardsResponse,
    CardsSaveRequest,
    CardStatusUpdateRequest,
    GeneratedCardDraft,
)
from flashinbox.infrastructure.inbox.schemas.entry_schemas import (
    AutoRemoveResponse,
    DeckNameUpdateRequest,
    EntriesListResponse,
    Entry,
    EntryDeleteResponse,
    EntryDetailResponse,
    EntryResponse,
    EntrySaveRequest,
    ExtractedContentUpdateRequest,
    TextIngestRequest,
)

__all__ = [
    "AutoRemoveResponse",
    "Card",
    "CardContentUpdateRequest",
    "CardDraftRequest",
    "CardResponse",
    "CardStatusUpdateRequest",
    "CardsCommitRequest",
    "CardsResponse",
    "CardsSaveRequest",
    "DeckNameUpdateRequest",
    "EntriesListResponse",
    "Entry",
    "EntryDeleteResponse",
    "EntryDetailResponse",
    "EntryResponse",
    "EntrySaveRequest",
    "ExtractedContentUpdateRequest",
    "GeneratedCardDraft",
    "TextIngestRequest",
]
