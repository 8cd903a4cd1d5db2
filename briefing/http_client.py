"""
Async HTTP client for LibreTranslate-compatible translation services.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Sequence

import httpx

from briefing.errors import TranslationError
from briefing.security import redact_secrets

logger = logging.getLogger(__name__)


class LibreTranslateClient:
    """
    Sends one ``POST /translate`` per call with the whole text list as ``q``.

    Any transport error, non-200 status or malformed payload is raised as
    ``TranslationError`` so the batch translator can fall back for that batch.
    """

    def __init__(
        self,
        base_url: str,
        api_key: Optional[str] = None,
        timeout: float = 30.0,
        user_agent: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.endpoint = base_url.rstrip("/") + "/translate"
        self.api_key = api_key
        self.timeout = timeout
        self.user_agent = user_agent or "KI-News-Aggregator/1.0"
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self) -> "LibreTranslateClient":
        self._client = httpx.AsyncClient(
            timeout=self.timeout,
            headers={"User-Agent": self.user_agent, "Accept": "application/json"},
            transport=self._transport,
        )
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    async def translate(self, texts: Sequence[str], source: str, target: str) -> List[str]:
        if self._client is None:
            raise RuntimeError(f"{self.__class__.__name__} HTTP client not initialized")
        payload: Dict[str, Any] = {
            "q": list(texts),
            "source": source,
            "target": target,
            "format": "text",
        }
        if self.api_key:
            payload["api_key"] = self.api_key

        try:
            resp = await self._client.post(self.endpoint, json=payload)
        except httpx.HTTPError as exc:
            raise TranslationError(redact_secrets(f"Translation request failed: {exc}")) from exc
        if resp.status_code != 200:
            raise TranslationError(
                redact_secrets(f"Translation HTTP {resp.status_code}: {resp.text[:200]}")
            )

        try:
            translated = resp.json().get("translatedText")
        except (ValueError, AttributeError) as exc:
            raise TranslationError("Translation response is not a JSON object") from exc
        if isinstance(translated, str) and len(texts) == 1:
            translated = [translated]
        if not isinstance(translated, list) or not all(isinstance(t, str) for t in translated):
            raise TranslationError("Translation response carries no text list")
        return translated
