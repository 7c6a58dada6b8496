"""API routes for sharing content into the inbox."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status
from starlette.concurrency import run_in_threadpool

from flashinbox.application.inbox.use_cases.ingestion_use_case import IngestionUseCase
from flashinbox.infrastructure.common.di import inject_use_case
from flashinbox.infrastructure.common.errors import unwrap_or_raise
from flashinbox.infrastructure.inbox.routers.presenters import present_entry
from flashinbox.infrastructure.inbox.schemas import EntryResponse, TextIngestRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/ingest", tags=["ingest"])

PDF_CONTENT_TYPES = {"application/pdf", "application/x-pdf"}


@router.post("/text", response_model=EntryResponse, status_code=status.HTTP_201_CREATED)
def ingest_text(
    request: TextIngestRequest,
    use_case: IngestionUseCase = Depends(inject_use_case(lambda c: c.ingestion_use_case)),
) -> EntryResponse:
    """Create a text or url entry from shared text."""
    entry = unwrap_or_raise(use_case.ingest_text(request.text))
    return EntryResponse(success=True, message="Entry created", entry=present_entry(entry))


@router.post("/pdf", response_model=EntryResponse, status_code=status.HTTP_201_CREATED)
async def ingest_pdf(
    file: Annotated[UploadFile, File(description="PDF document")],
    use_case: IngestionUseCase = Depends(inject_use_case(lambda c: c.ingestion_use_case)),
) -> EntryResponse:
    """
    Store an uploaded PDF and create its entry.

    The copy to storage runs in a worker thread.

    Raises:
        HTTPException: 400 if the upload is not a PDF
    """
    filename = file.filename or ""
    if file.content_type not in PDF_CONTENT_TYPES and not filename.lower().endswith(".pdf"):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Only PDF files are allowed"
        )

    result = await run_in_threadpool(use_case.ingest_pdf, file.file, file.filename)
    entry = unwrap_or_raise(result)
    return EntryResponse(success=True, message="PDF stored", entry=present_entry(entry))
