"""FastAPI application entry point for the HTTP transport."""

import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request

from . import __version__
from .api.health import router as health_router
from .api.rpc import router as rpc_router
from .core.config import env_file_candidates, get_settings, resolved_env_file
from .core.logging_config import configure_logging, get_logger
from .mcp.dispatcher import get_dispatcher

configure_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """FastAPI lifespan handler."""

    settings = get_settings()
    logger.info(
        "server_startup",
        env=settings.app_env,
        log_level=settings.log_level,
        server_host=settings.server_host,
        server_port=settings.server_port,
        hardened_errors=settings.errors_hardened,
        auth_enabled=settings.api_key is not None,
        search_enabled=settings.serpapi_key is not None,
        sites=",".join(settings.search_sites),
    )
    logger.info(
        "environment_loaded",
        log_file=settings.log_file or "stderr-only",
        env_file=resolved_env_file() or "not-found",
        env_candidates=list(env_file_candidates()),
    )
    dispatcher = get_dispatcher()
    logger.info(
        "mcp_catalog_ready",
        prompts=dispatcher.catalog.prompt_names,
        tools=dispatcher.catalog.tool_names,
    )
    yield
    logger.info("server_shutdown")


app = FastAPI(
    title="Chlorpromazine MCP",
    version=__version__,
    description="Grounding prompts and tools for coding agents.",
    lifespan=lifespan,
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    request_id = request.headers.get("x-request-id") or uuid.uuid4().hex[:12]
    started = time.perf_counter()
    response = await call_next(request)
    response.headers["X-Request-ID"] = request_id
    logger.info(
        "http_request",
        request_id=request_id,
        method=request.method,
        path=request.url.path,
        status_code=response.status_code,
        duration_ms=round((time.perf_counter() - started) * 1000, 2),
    )
    return response


app.include_router(health_router)
app.include_router(rpc_router)


@app.get("/")
async def index() -> dict[str, object]:
    return {
        "service": "chlorpromazine",
        "version": __version__,
        "endpoints": ["/mcp", "/healthz"],
    }
