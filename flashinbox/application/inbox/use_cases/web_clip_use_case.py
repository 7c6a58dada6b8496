"""Use case for clipping the page behind a url entry."""

import structlog

from flashinbox.application.common.result import returns_result
from flashinbox.application.inbox.protocols import (
    EntryRepositoryProtocol,
    WebClipperProtocol,
)
from flashinbox.domain.common.exceptions import EntityNotFoundError, ValidationError
from flashinbox.domain.common.value_objects import EntryId
from flashinbox.domain.inbox.entities import ContentType, Entry

logger = structlog.get_logger(__name__)


class WebClipUseCase:
    def __init__(
        self, entry_repository: EntryRepositoryProtocol, web_clipper: WebClipperProtocol
    ) -> None:
        self.entry_repository = entry_repository
        self.web_clipper = web_clipper

    @returns_result
    def clip_entry(self, entry_id: str) -> Entry:
        """
        Fetch the page of a url entry and store its title and text.

        Raises:
            EntityNotFoundError: If the entry does not exist
            ValidationError: If the entry is not a url entry or is locked
            ExternalSystemError: If the page cannot be fetched
        """
        entry = self.entry_repository.find_by_id(EntryId(entry_id))
        if entry is None:
            raise EntityNotFoundError("Entry", entry_id)
        if entry.content_type != ContentType.URL:
            raise ValidationError(
                "Only url entries can be clipped",
                field="content_type",
                value=entry.content_type.value,
            )

        page = self.web_clipper.extract(entry.content)
        entry.update_extracted_content(page.title, page.text)
        entry = self.entry_repository.save(entry)
        logger.info("clipped_entry", entry_id=entry_id, length=len(entry.extracted_text or ""))
        return entry
