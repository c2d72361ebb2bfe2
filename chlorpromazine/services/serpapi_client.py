"""Async SerpAPI search client."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import httpx

from ..core.config import ServerSettings
from ..core.exceptions import ExternalServiceError, RateLimitExceeded, ServiceDisabledError
from ..core.http_client import async_http_client
from ..core.logging_config import get_logger

logger = get_logger(__name__)

NO_RESULT = "No relevant information found."
DISABLED_MESSAGE = "Search disabled (SERPAPI_KEY missing)"


class SerpApiClient:
    """Minimal async client for the SerpAPI Google engine, restricted to a site whitelist."""

    SEARCH_PATH = "/search.json"

    def __init__(
        self,
        api_key: str | None,
        *,
        sites: Sequence[str],
        base_url: str = "https://serpapi.com",
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_key = api_key or None
        self._sites = tuple(sites)
        self._base_url = base_url
        self._timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: ServerSettings) -> "SerpApiClient":
        key = settings.serpapi_key.get_secret_value() if settings.serpapi_key else None
        return cls(
            key,
            sites=settings.search_sites,
            base_url=str(settings.serpapi_base_url),
            timeout=settings.search_timeout_seconds,
        )

    def is_configured(self) -> bool:
        return self._api_key is not None

    def build_query(self, query: str) -> str:
        """Prefix the user query with the site restriction."""

        if not self._sites:
            return query
        return f"site:({' OR '.join(self._sites)}) {query}"

    async def search(self, query: str) -> str:
        """Return a one-line summary of the best hit for ``query``."""

        if self._api_key is None:
            raise ServiceDisabledError(DISABLED_MESSAGE)

        params = {"engine": "google", "q": self.build_query(query), "api_key": self._api_key}
        try:
            async with async_http_client(
                base_url=self._base_url, timeout=self._timeout, transport=self._transport
            ) as client:
                response = await client.get(self.SEARCH_PATH, params=params)
        except httpx.HTTPError as exc:
            raise ExternalServiceError(f"SerpAPI request failed: {exc}") from exc

        if response.status_code == httpx.codes.TOO_MANY_REQUESTS:
            raise RateLimitExceeded(response.text)

        if response.is_error:
            raise ExternalServiceError(
                f"SerpAPI responded with {response.status_code}: {response.text}"
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise ExternalServiceError("SerpAPI returned a non-JSON body") from exc

        if not isinstance(payload, dict):
            raise ExternalServiceError(f"Unexpected SerpAPI payload: {type(payload).__name__}")

        summary = _summarize(payload)
        logger.debug("serpapi_search_completed", has_result=summary != NO_RESULT)
        return summary


def _summarize(payload: dict[str, Any]) -> str:
    results = payload.get("organic_results") or []
    hit = results[0] if isinstance(results, list) and results else None
    if isinstance(hit, dict):
        title = hit.get("title", "")
        snippet = hit.get("snippet", "")
        link = hit.get("link", "")
        return f"{title} - {snippet} ({link})"

    # SerpAPI reports empty result pages through "error" with a 200 status.
    error = payload.get("error")
    if error and "hasn't returned any results" not in str(error):
        raise ExternalServiceError(f"SerpAPI error: {error}")
    return NO_RESULT
