# arxivkit/client.py
"""Async transport for the arXiv export API."""

import logging
import os

import httpx

from arxivkit.request import ArxivRequest

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0


class ArxivClient:
    """Issues arXiv API requests and returns the raw Atom feed.

    Use as an async context manager:

        async with ArxivClient() as client:
            feed = await client.fetch(query.make_request())
    """

    def __init__(
        self,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._timeout = timeout if timeout is not None else self._load_from_env()
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    def _load_from_env(self) -> float:
        """Load request timeout (seconds) from ARXIVKIT_TIMEOUT."""
        value = os.getenv("ARXIVKIT_TIMEOUT")
        return float(value) if value else DEFAULT_TIMEOUT

    @property
    def timeout(self) -> float:
        return self._timeout

    async def fetch(self, request: ArxivRequest) -> str:
        """Execute `request` and return the Atom XML response body."""
        if self._client is None:
            raise RuntimeError("Client not initialized. Use 'async with client:'")

        url = request.url
        logger.debug("Requesting: %s", url)
        response = await self._client.get(url)
        response.raise_for_status()
        logger.debug("Response status: %s", response.status_code)
        return response.text

    async def __aenter__(self) -> "ArxivClient":
        self._client = httpx.AsyncClient(timeout=self._timeout, transport=self._transport)
        return self

    async def __aexit__(self, *_: object) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None
