"""Protocol for fetching readable text from web pages."""

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class ClippedPage:
    """Readable content of a web page."""

    title: str | None
    text: str


class WebClipperProtocol(Protocol):
    def extract(self, url: str) -> ClippedPage:
        """
        Fetch a page and extract its title and main text.

        Raises:
            ExternalSystemError: If the page cannot be fetched or parsed
        """
        ...
