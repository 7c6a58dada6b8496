"""API routes for sending cards to Anki."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from starlette.concurrency import run_in_threadpool

from flashinbox.application.sync.services import AnkiSyncBridge
from flashinbox.application.sync.use_cases.card_sync_use_case import CardSyncUseCase
from flashinbox.domain.common.exceptions import ExternalSystemError
from flashinbox.infrastructure.common.di import inject_use_case
from flashinbox.infrastructure.common.errors import unwrap_or_raise
from flashinbox.infrastructure.inbox.routers.presenters import present_card
from flashinbox.infrastructure.sync.schemas import (
    AnkiStatusResponse,
    CardSyncResponse,
    EntrySyncResponse,
    PermissionResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["anki"])


def get_bridge(request: Request) -> AnkiSyncBridge:
    """Get the process-wide sync bridge."""
    bridge: AnkiSyncBridge = request.app.state.container.anki_sync_bridge()
    return bridge


@router.get("/anki/status", response_model=AnkiStatusResponse, status_code=status.HTTP_200_OK)
def get_anki_status(bridge: AnkiSyncBridge = Depends(get_bridge)) -> AnkiStatusResponse:
    """Report whether AnkiConnect answers and the last known permission outcome."""
    return AnkiStatusResponse(
        available=bridge.is_available(),
        permission=bridge.permission_state().value,
    )


@router.post(
    "/anki/permission", response_model=PermissionResponse, status_code=status.HTTP_200_OK
)
async def request_anki_permission(
    bridge: AnkiSyncBridge = Depends(get_bridge),
) -> PermissionResponse:
    """Ask AnkiConnect for access. Anki shows a dialog the user must answer."""
    try:
        granted = await run_in_threadpool(bridge.request_permission)
    except ExternalSystemError as e:
        logger.warning(f"Permission request failed: {e!s}")
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=e.message) from e
    return PermissionResponse(granted=granted)


@router.post("/cards/{card_id}/sync", response_model=CardSyncResponse, status_code=status.HTTP_200_OK)
def sync_card(
    card_id: str,
    use_case: CardSyncUseCase = Depends(inject_use_case(lambda c: c.card_sync_use_case)),
) -> CardSyncResponse:
    """
    Send one card to Anki.

    On failure the card keeps its status and the error is returned as 502.
    """
    outcome = unwrap_or_raise(use_case.add_card_to_store(card_id))
    return CardSyncResponse(
        success=True,
        message="Card added to Anki",
        card=present_card(outcome.card),
        entry_removed=outcome.entry_removed,
    )


@router.post(
    "/entries/{entry_id}/sync", response_model=EntrySyncResponse, status_code=status.HTTP_200_OK
)
def sync_entry(
    entry_id: str,
    use_case: CardSyncUseCase = Depends(inject_use_case(lambda c: c.card_sync_use_case)),
) -> EntrySyncResponse:
    """Send every card of the entry that is not added yet."""
    outcome = unwrap_or_raise(use_case.add_all_pending(entry_id))
    if outcome.failed:
        message = f"Added {len(outcome.added)} cards, {len(outcome.failed)} failed"
    else:
        message = f"Added {len(outcome.added)} cards"
    return EntrySyncResponse(
        success=not outcome.failed,
        message=message,
        added=[present_card(card) for card in outcome.added],
        failed=outcome.failed,
        entry_removed=outcome.entry_removed,
    )
