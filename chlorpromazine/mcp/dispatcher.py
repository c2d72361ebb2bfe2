"""Request dispatch: resolve, validate, rate-limit, invoke, shape."""

from __future__ import annotations

import uuid
from functools import lru_cache
from typing import Any, Mapping, assert_never

from pydantic import ValidationError

from ..core.config import ServerSettings, get_settings
from ..core.logging_config import get_logger
from ..core.types import CallerContext, ErrorKind, Failure
from ..schemas.envelope import ResultEnvelope
from ..schemas.requests import (
    REQUEST_MODELS,
    CallToolRequest,
    GetPromptRequest,
    InvocationRequest,
    ListPromptsRequest,
    ListToolsRequest,
)
from ..services import FileReaderService, SerpApiClient
from .catalog import Catalog, ToolServices, default_catalog
from .executor import ToolExecutor
from .prompts import PromptRenderer
from .rate_limiter import RateLimiter
from .results import ResultShaper
from .validation import format_validation_error, validate_arguments

logger = get_logger(__name__)


class Dispatcher:
    """Turn ``(method, params, caller)`` into exactly one ResultEnvelope.

    Steps run in a fixed order and each failure short-circuits the rest:
    resolve target, validate arguments, check the rate limit (tools only),
    invoke, shape. ``dispatch`` never raises.
    """

    def __init__(
        self,
        catalog: Catalog,
        renderer: PromptRenderer,
        executor: ToolExecutor,
        rate_limiter: RateLimiter,
        shaper: ResultShaper,
    ) -> None:
        self.catalog = catalog
        self.renderer = renderer
        self.executor = executor
        self.rate_limiter = rate_limiter
        self.shaper = shaper

    async def dispatch(
        self, method: str, params: Mapping[str, Any] | None, caller: str
    ) -> ResultEnvelope:
        try:
            envelope = await self._dispatch(method, params, caller)
        except Exception as exc:  # noqa: BLE001 - the transport always gets an envelope
            logger.exception("mcp_dispatch_unexpected_error", method=method, caller=caller)
            envelope = self.shaper.failure(
                Failure(ErrorKind.EXECUTION_FAILED, f"{type(exc).__name__}: {exc}")
            )

        logger.info(
            "mcp_dispatch",
            method=method,
            name=envelope.name,
            caller=caller,
            success=envelope.success,
            error_kind=envelope.error_kind.value if envelope.error_kind else None,
        )
        return envelope

    async def _dispatch(
        self, method: str, params: Mapping[str, Any] | None, caller: str
    ) -> ResultEnvelope:
        parsed = self._parse(method, params)
        if isinstance(parsed, Failure):
            return self.shaper.failure(parsed)

        if isinstance(parsed, ListPromptsRequest):
            return self.shaper.success(structured={"prompts": self.catalog.list_prompts()})
        if isinstance(parsed, ListToolsRequest):
            return self.shaper.success(structured={"tools": self.catalog.list_tools()})
        if isinstance(parsed, GetPromptRequest):
            return self._get_prompt(parsed)
        if isinstance(parsed, CallToolRequest):
            return await self._call_tool(parsed, caller)
        assert_never(parsed)

    def _parse(
        self, method: str, params: Mapping[str, Any] | None
    ) -> InvocationRequest | Failure:
        model = REQUEST_MODELS.get(method)
        if model is None:
            return Failure(ErrorKind.NOT_FOUND, f"Unknown method: {method}")
        if params is not None and not isinstance(params, Mapping):
            return Failure(ErrorKind.INVALID_INPUT, "params: must be an object")

        try:
            return model.model_validate({**(params or {}), "method": method})
        except ValidationError as exc:
            return Failure(ErrorKind.INVALID_INPUT, format_validation_error(exc))

    def _get_prompt(self, request: GetPromptRequest) -> ResultEnvelope:
        definition = self.catalog.prompt(request.name)
        if definition is None:
            return self.shaper.failure(
                Failure(ErrorKind.NOT_FOUND, f"Unknown prompt: {request.name}"),
                name=request.name,
            )

        validated = validate_arguments(definition.arguments_model, request.arguments)
        if isinstance(validated, Failure):
            return self.shaper.failure(validated, name=request.name)

        rendered = self.renderer.render(request.name, validated)
        if isinstance(rendered, Failure):
            return self.shaper.failure(rendered, name=request.name)

        return self.shaper.success(
            messages=rendered,
            description=definition.description,
            name=request.name,
        )

    async def _call_tool(self, request: CallToolRequest, caller: str) -> ResultEnvelope:
        invocation_id = request.invocation_id or uuid.uuid4().hex
        definition = self.catalog.tool(request.name)
        if definition is None:
            return self.shaper.failure(
                Failure(ErrorKind.NOT_FOUND, f"Unknown tool: {request.name}"),
                name=request.name,
                invocation_id=invocation_id,
            )

        validated = validate_arguments(definition.input_model, request.arguments)
        if isinstance(validated, Failure):
            return self.shaper.failure(validated, name=request.name, invocation_id=invocation_id)

        if not await self.rate_limiter.check(caller):
            limiter = self.rate_limiter
            return self.shaper.failure(
                Failure(
                    ErrorKind.RATE_LIMITED,
                    f"Rate limit exceeded: {limiter.max_calls} tool calls "
                    f"per {limiter.window_seconds:g}s",
                ),
                name=request.name,
                invocation_id=invocation_id,
            )

        context = CallerContext(caller=caller, invocation_id=invocation_id)
        return await self.executor.execute(request.name, validated, context)


def build_dispatcher(
    settings: ServerSettings | None = None,
    *,
    services: ToolServices | None = None,
    rate_limiter: RateLimiter | None = None,
    catalog: Catalog | None = None,
) -> Dispatcher:
    """Wire a dispatcher from settings; any collaborator can be swapped in."""

    settings = settings or get_settings()
    catalog = catalog or default_catalog()
    shaper = ResultShaper(hardened=settings.errors_hardened)
    services = services or ToolServices(
        search=SerpApiClient.from_settings(settings),
        files=FileReaderService.from_settings(settings),
    )
    rate_limiter = rate_limiter or RateLimiter(
        settings.rate_limit_max_calls, settings.rate_limit_window_seconds
    )
    executor = ToolExecutor(catalog, services, shaper, timeout=settings.tool_timeout_seconds)
    return Dispatcher(catalog, PromptRenderer(catalog), executor, rate_limiter, shaper)


@lru_cache
def get_dispatcher() -> Dispatcher:
    """Return the process-wide dispatcher used by the transports."""

    return build_dispatcher()
