"""API routes for generated cards."""

import logging

from fastapi import APIRouter, Depends, status

from flashinbox.application.inbox.use_cases.card_use_case import CardUseCase
from flashinbox.application.inbox.use_cases.dtos import CardDraft
from flashinbox.infrastructure.common.di import inject_use_case
from flashinbox.infrastructure.common.errors import unwrap_or_raise
from flashinbox.infrastructure.inbox.routers.presenters import present_card
from flashinbox.infrastructure.inbox.schemas import (
    CardContentUpdateRequest,
    CardResponse,
    CardsCommitRequest,
    CardsResponse,
    CardsSaveRequest,
    CardStatusUpdateRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["cards"])


@router.post(
    "/entries/{entry_id}/cards", response_model=CardsResponse, status_code=status.HTTP_200_OK
)
def save_cards(
    entry_id: str,
    request: CardsSaveRequest,
    use_case: CardUseCase = Depends(inject_use_case(lambda c: c.card_use_case)),
) -> CardsResponse:
    """Insert or replace cards of an unlocked entry."""
    cards = unwrap_or_raise(
        use_case.save_cards(
            entry_id, [CardDraft(**draft.model_dump()) for draft in request.cards]
        )
    )
    return CardsResponse(
        success=True,
        message=f"Saved {len(cards)} cards",
        cards=[present_card(card) for card in cards],
    )


@router.post(
    "/entries/{entry_id}/cards/commit",
    response_model=CardsResponse,
    status_code=status.HTTP_201_CREATED,
)
def commit_generated_cards(
    entry_id: str,
    request: CardsCommitRequest,
    use_case: CardUseCase = Depends(inject_use_case(lambda c: c.card_use_case)),
) -> CardsResponse:
    """
    Store a generated batch as pending cards and lock the entry.

    Args:
        entry_id: ID of the entry the cards were generated from
        request: The generated cards and an optional deck name

    Returns:
        The stored cards
    """
    cards = unwrap_or_raise(
        use_case.commit_generated_cards(
            entry_id,
            [CardDraft(**draft.model_dump()) for draft in request.cards],
            deck_name=request.deck_name,
        )
    )
    return CardsResponse(
        success=True,
        message=f"Committed {len(cards)} cards",
        cards=[present_card(card) for card in cards],
    )


@router.patch("/cards/{card_id}/status", response_model=CardResponse, status_code=status.HTTP_200_OK)
def update_card_status(
    card_id: str,
    request: CardStatusUpdateRequest,
    use_case: CardUseCase = Depends(inject_use_case(lambda c: c.card_use_case)),
) -> CardResponse:
    card = unwrap_or_raise(
        use_case.update_card_status(card_id, request.status, request.external_note_id)
    )
    return CardResponse(success=True, message="Card status updated", card=present_card(card))


@router.patch(
    "/cards/{card_id}/content", response_model=CardResponse, status_code=status.HTTP_200_OK
)
def update_card_content(
    card_id: str,
    request: CardContentUpdateRequest,
    use_case: CardUseCase = Depends(inject_use_case(lambda c: c.card_use_case)),
) -> CardResponse:
    """Edit a card that has not been added yet."""
    card = unwrap_or_raise(use_case.update_card_content(card_id, request.front, request.back))
    return CardResponse(success=True, message="Card updated", card=present_card(card))
