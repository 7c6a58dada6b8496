"""API routes for inbox entries."""

import logging

from fastapi import APIRouter, Depends, status

from flashinbox.application.inbox.use_cases.dtos import EntryData
from flashinbox.application.inbox.use_cases.entry_use_case import EntryUseCase
from flashinbox.application.inbox.use_cases.reconciliation_use_case import (
    ReconciliationUseCase,
)
from flashinbox.application.inbox.use_cases.web_clip_use_case import WebClipUseCase
from flashinbox.infrastructure.common.di import inject_use_case
from flashinbox.infrastructure.common.errors import unwrap_or_raise
from flashinbox.infrastructure.inbox.routers.presenters import present_card, present_entry
from flashinbox.infrastructure.inbox.schemas import (
    AutoRemoveResponse,
    DeckNameUpdateRequest,
    EntriesListResponse,
    EntryDeleteResponse,
    EntryDetailResponse,
    EntryResponse,
    EntrySaveRequest,
    ExtractedContentUpdateRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/entries", tags=["entries"])


@router.get("", response_model=EntriesListResponse, status_code=status.HTTP_200_OK)
def list_entries(
    use_case: EntryUseCase = Depends(inject_use_case(lambda c: c.entry_use_case)),
) -> EntriesListResponse:
    """List all inbox entries, newest first."""
    entries = unwrap_or_raise(use_case.list_entries())
    return EntriesListResponse(entries=[present_entry(entry) for entry in entries])


@router.put("", response_model=EntryResponse, status_code=status.HTTP_200_OK)
def save_entry(
    request: EntrySaveRequest,
    use_case: EntryUseCase = Depends(inject_use_case(lambda c: c.entry_use_case)),
) -> EntryResponse:
    """
    Insert or replace an entry.

    A locked entry stays locked even if the request says otherwise.
    """
    entry = unwrap_or_raise(use_case.save_entry(EntryData(**request.model_dump())))
    return EntryResponse(success=True, message="Entry saved", entry=present_entry(entry))


@router.get("/{entry_id}", response_model=EntryDetailResponse, status_code=status.HTTP_200_OK)
def get_entry(
    entry_id: str,
    use_case: EntryUseCase = Depends(inject_use_case(lambda c: c.entry_use_case)),
) -> EntryDetailResponse:
    """Get an entry with its cards."""
    detail = unwrap_or_raise(use_case.get_entry(entry_id))
    return EntryDetailResponse(
        entry=present_entry(detail.entry),
        cards=[present_card(card) for card in detail.cards],
        total_card_count=detail.total_card_count,
        pending_card_count=detail.pending_card_count,
    )


@router.delete("/{entry_id}", response_model=EntryDeleteResponse, status_code=status.HTTP_200_OK)
def delete_entry(
    entry_id: str,
    use_case: EntryUseCase = Depends(inject_use_case(lambda c: c.entry_use_case)),
) -> EntryDeleteResponse:
    """Delete an entry, its cards and its stored file."""
    unwrap_or_raise(use_case.delete_entry(entry_id))
    return EntryDeleteResponse(success=True, message="Entry deleted")


@router.post("/{entry_id}/lock", response_model=EntryResponse, status_code=status.HTTP_200_OK)
def lock_entry(
    entry_id: str,
    use_case: EntryUseCase = Depends(inject_use_case(lambda c: c.entry_use_case)),
) -> EntryResponse:
    """Lock an entry so its cards cannot be regenerated."""
    entry = unwrap_or_raise(use_case.lock_entry(entry_id))
    return EntryResponse(success=True, message="Entry locked", entry=present_entry(entry))


@router.patch(
    "/{entry_id}/deck-name", response_model=EntryResponse, status_code=status.HTTP_200_OK
)
def update_deck_name(
    entry_id: str,
    request: DeckNameUpdateRequest,
    use_case: EntryUseCase = Depends(inject_use_case(lambda c: c.entry_use_case)),
) -> EntryResponse:
    entry = unwrap_or_raise(use_case.update_deck_name(entry_id, request.deck_name))
    return EntryResponse(success=True, message="Deck name updated", entry=present_entry(entry))


@router.patch(
    "/{entry_id}/extracted-content",
    response_model=EntryResponse,
    status_code=status.HTTP_200_OK,
)
def update_extracted_content(
    entry_id: str,
    request: ExtractedContentUpdateRequest,
    use_case: EntryUseCase = Depends(inject_use_case(lambda c: c.entry_use_case)),
) -> EntryResponse:
    """Store text extracted from the entry's source, such as OCR output."""
    entry = unwrap_or_raise(
        use_case.update_extracted_content(entry_id, request.title, request.extracted_text)
    )
    return EntryResponse(
        success=True, message="Extracted content updated", entry=present_entry(entry)
    )


@router.post("/{entry_id}/clip", response_model=EntryResponse, status_code=status.HTTP_200_OK)
def clip_entry(
    entry_id: str,
    use_case: WebClipUseCase = Depends(inject_use_case(lambda c: c.web_clip_use_case)),
) -> EntryResponse:
    """Fetch the page behind a url entry and store its title and text."""
    entry = unwrap_or_raise(use_case.clip_entry(entry_id))
    return EntryResponse(success=True, message="Page clipped", entry=present_entry(entry))


@router.post(
    "/{entry_id}/auto-remove", response_model=AutoRemoveResponse, status_code=status.HTTP_200_OK
)
def check_auto_remove(
    entry_id: str,
    use_case: ReconciliationUseCase = Depends(
        inject_use_case(lambda c: c.reconciliation_use_case)
    ),
) -> AutoRemoveResponse:
    """Remove the entry if it has cards and all of them were added."""
    removed = unwrap_or_raise(use_case.check_auto_remove(entry_id))
    return AutoRemoveResponse(removed=removed)
