"""JSON-RPC style endpoint relaying MCP methods to the dispatcher."""

import hashlib
import secrets

from fastapi import APIRouter, Depends, HTTPException, Request

from ..core.config import ServerSettings, get_settings
from ..core.logging_config import get_logger
from ..mcp.dispatcher import Dispatcher, get_dispatcher
from ..schemas.rpc import RpcRequest, RpcResponse

router = APIRouter(tags=["mcp"])
logger = get_logger(__name__)


def require_api_key(
    request: Request, settings: ServerSettings = Depends(get_settings)
) -> str | None:
    """Return the verified bearer token, or None when no API key is configured.

    An unverified token is never returned, so it cannot select a rate-limit key.
    """

    if settings.api_key is None:
        return None

    header = request.headers.get("authorization", "")
    scheme, _, token = header.partition(" ")
    token = token.strip() if scheme.lower() == "bearer" else ""

    if not token or not secrets.compare_digest(token, settings.api_key.get_secret_value()):
        logger.warning("unauthorized_request", path=request.url.path)
        raise HTTPException(status_code=401, detail="unauthorized")
    return token


def caller_identity(request: Request, token: str | None) -> str:
    """Rate-limit key: a digest of the bearer token, else the client address."""

    if token:
        return "key:" + hashlib.sha256(token.encode("utf-8")).hexdigest()[:16]
    host = request.client.host if request.client else "unknown"
    return f"ip:{host}"


@router.post("/mcp", response_model=RpcResponse)
async def handle_rpc(
    payload: RpcRequest,
    request: Request,
    token: str | None = Depends(require_api_key),
    dispatcher: Dispatcher = Depends(get_dispatcher),
) -> RpcResponse:
    caller = caller_identity(request, token)
    envelope = await dispatcher.dispatch(payload.method, payload.params, caller)
    return RpcResponse(id=payload.id, result=envelope.to_wire())
