"""Corpus source: fetches the aggregated documentation text."""

import logging

import httpx

from ..config import settings
from ..errors import CorpusLoadError

logger = logging.getLogger(__name__)


class CorpusSource:
    """Fetches the raw corpus over HTTP."""

    def __init__(
        self,
        url: str | None = None,
        client: httpx.AsyncClient | None = None,
        timeout: float | None = None,
    ):
        """Initialize the source.

        Args:
            url: Corpus URL. Defaults to ``settings.docs_url``.
            client: Shared HTTP client. A short-lived client is created per
                fetch when omitted.
            timeout: Request timeout in seconds. Defaults to settings.
        """
        self.url = url or settings.docs_url
        self.client = client
        self.timeout = timeout if timeout is not None else settings.http_timeout

    async def _get(self, client: httpx.AsyncClient) -> httpx.Response:
        return await client.get(self.url, follow_redirects=True)

    async def fetch(self) -> str:
        """Download the corpus text.

        Returns:
            The corpus as one UTF-8 string.

        Raises:
            CorpusLoadError: On a non-2xx response or a transport failure.
        """
        logger.info(f"Fetching documentation corpus from {self.url}")
        try:
            if self.client is not None:
                response = await self._get(self.client)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await self._get(client)
        except httpx.TimeoutException as e:
            raise CorpusLoadError(f"Timed out fetching documentation: {e}") from e
        except httpx.RequestError as e:
            raise CorpusLoadError(f"Failed to fetch documentation: {e}") from e

        if not response.is_success:
            raise CorpusLoadError(f"Failed to fetch documentation: HTTP {response.status_code}")

        text = response.text
        logger.info(f"Fetched {len(text)} characters of documentation")
        return text


class StaticCorpus:
    """In-memory corpus source, for preloaded or bundled text."""

    def __init__(self, text: str):
        self.text = text

    async def fetch(self) -> str:
        return self.text
