"""Liveness endpoint for the HTTP transport."""

from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter, Depends

from .. import __version__
from ..core.config import ServerSettings, get_settings

router = APIRouter(tags=["health"])


@router.get("/healthz")
async def healthz(settings: ServerSettings = Depends(get_settings)) -> dict[str, Any]:
    # No collaborator is contacted; search availability comes from config alone.
    return {
        "status": "ok",
        "timestamp": datetime.now(tz=timezone.utc).isoformat(),
        "version": __version__,
        "search_enabled": settings.serpapi_key is not None,
    }
