"""Shared httpx client factory for outbound calls."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx

from .. import __version__

USER_AGENT = f"chlorpromazine/{__version__}"


@asynccontextmanager
async def async_http_client(
    base_url: str | None = None,
    timeout: float = 10.0,
    transport: httpx.AsyncBaseTransport | None = None,
) -> AsyncIterator[httpx.AsyncClient]:
    """Yield an AsyncClient identifying this server; ``transport`` is swappable in tests."""

    async with httpx.AsyncClient(
        base_url=base_url or "",
        timeout=timeout,
        transport=transport,
        headers={"User-Agent": USER_AGENT},
        follow_redirects=True,
    ) as client:
        yield client
