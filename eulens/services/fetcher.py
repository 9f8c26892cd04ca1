"""HTTP fetching of source documents."""

import logging
from typing import Optional

import httpx

from eulens.core.exceptions import FetchError

logger = logging.getLogger(__name__)


class DocumentFetcher:
    """Downloads the raw content of source documents."""

    def __init__(self, timeout: float = 30.0, transport: Optional[httpx.AsyncBaseTransport] = None) -> None:
        """
        Initialize the fetcher.

        Args:
            timeout: Request timeout in seconds.
            transport: Optional httpx transport, used to stub the network.
        """
        self.timeout = timeout
        self.transport = transport

    async def fetch(self, url: str) -> str:
        """
        Fetch a document.

        Args:
            url: Document URL.

        Returns:
            Response body as text.

        Raises:
            FetchError: If the document is unreachable or the response is not successful.
        """
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, follow_redirects=True, transport=self.transport
            ) as client:
                response = await client.get(url)
                response.raise_for_status()
        except httpx.HTTPError as e:
            raise FetchError(f"Failed to fetch document from {url}: {str(e)}") from e

        logger.debug(f"Fetched {len(response.text)} characters from {url}")
        return response.text
