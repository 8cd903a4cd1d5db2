"""
Reusable async HTTP fetching utility with polite defaults.
"""
from __future__ import annotations

import logging
from typing import Optional

import httpx

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "KI-News-Aggregator/1.0"


class AsyncHttpFetcher:
    """
    Thin wrapper over httpx.AsyncClient shared by all feed fetches of one run.

    Failures are raised to the caller; there is no retry here because every
    feed is fetched once per build and a failure only drops that feed.
    """

    def __init__(
        self,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float = 15.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.user_agent = user_agent
        self.timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self) -> "AsyncHttpFetcher":
        self._client = httpx.AsyncClient(
            timeout=self.timeout,
            headers={
                "User-Agent": self.user_agent,
                "Accept": "application/rss+xml,application/atom+xml,application/xml;q=0.9,*/*;q=0.8",
            },
            follow_redirects=True,
            transport=self._transport,
        )
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    async def fetch(self, url: str) -> bytes:
        if self._client is None:
            raise RuntimeError(f"{self.__class__.__name__} HTTP client not initialized")
        response = await self._client.get(url)
        response.raise_for_status()
        logger.debug("GET %s -> %s (%d bytes)", url, response.status_code, len(response.content))
        return response.content
