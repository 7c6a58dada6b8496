"""Readable text extraction from web pages with httpx and lxml."""

import logging

import httpx
from lxml import etree, html

from flashinbox.application.inbox.protocols import ClippedPage
from flashinbox.domain.common.exceptions import ExternalSystemError

logger = logging.getLogger(__name__)

# Elements that never carry article text
NOISE_XPATH = (
    "//script|//style|//noscript|//template|//svg|//iframe|//form"
    "|//nav|//header|//footer|//aside"
)
USER_AGENT = "flashinbox-clipper/0.1"


class LxmlWebClipper:
    """
    Fetches a page and keeps the text of its main content.

    The first <article>, else <main>, else <body> is used as the content root.
    """

    def __init__(self, timeout: float = 20.0, http_client: httpx.Client | None = None) -> None:
        self.timeout = timeout
        self.http_client = http_client

    def _fetch(self, url: str) -> bytes:
        if self.http_client is not None:
            response = self.http_client.get(url, follow_redirects=True)
        else:
            with httpx.Client(timeout=self.timeout, headers={"User-Agent": USER_AGENT}) as client:
                response = client.get(url, follow_redirects=True)
        response.raise_for_status()
        return response.content

    def extract(self, url: str) -> ClippedPage:
        try:
            content = self._fetch(url)
        except httpx.HTTPError as e:
            logger.warning(f"Failed to fetch {url}: {e!s}")
            raise ExternalSystemError(f"Could not fetch {url}: {e!s}", system="web") from e

        try:
            document = html.fromstring(content)
        except (etree.ParserError, ValueError) as e:
            raise ExternalSystemError(f"Could not parse page {url}: {e!s}", system="web") from e

        title = document.findtext(".//title")
        title = " ".join(title.split()) if title else None

        for element in document.xpath(NOISE_XPATH):
            element.drop_tree()

        roots = document.xpath("//article") or document.xpath("//main") or document.xpath("//body")
        root = roots[0] if roots else document

        lines = (" ".join(line.split()) for line in root.text_content().splitlines())
        text = "\n".join(line for line in lines if line)
        return ClippedPage(title=title or None, text=text)
