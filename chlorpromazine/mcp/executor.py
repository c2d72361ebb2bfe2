"""Tool execution with a per-invocation timeout."""

from __future__ import annotations

import asyncio
import time

from pydantic import BaseModel

from ..core.exceptions import ExternalServiceError, ServiceDisabledError
from ..core.logging_config import get_logger
from ..core.types import CallerContext, ErrorKind, Failure
from ..schemas.envelope import ResultEnvelope
from .catalog import Catalog, ToolPayload, ToolServices
from .results import ResultShaper

logger = get_logger(__name__)


class ToolExecutor:
    """Run one tool handler and turn whatever happens into an envelope.

    Each handler makes exactly one collaborator call. Nothing raised by a
    handler escapes :meth:`execute`; timeouts, collaborator errors and
    unexpected faults all become ``EXECUTION_FAILED`` envelopes.
    """

    def __init__(
        self,
        catalog: Catalog,
        services: ToolServices,
        shaper: ResultShaper,
        *,
        timeout: float,
    ) -> None:
        self._catalog = catalog
        self._services = services
        self._shaper = shaper
        self._timeout = timeout

    async def execute(
        self, name: str, arguments: BaseModel, context: CallerContext
    ) -> ResultEnvelope:
        definition = self._catalog.tool(name)
        if definition is None:
            return self._shaper.failure(
                Failure(ErrorKind.NOT_FOUND, f"Unknown tool: {name}"),
                name=name,
                invocation_id=context.invocation_id,
            )

        started = time.perf_counter()
        outcome = await self._run(definition.handler, arguments, name)
        duration_ms = round((time.perf_counter() - started) * 1000, 2)

        failed = isinstance(outcome, Failure)
        logger.info(
            "mcp_tool_invocation",
            tool=name,
            caller=context.caller,
            invocation_id=context.invocation_id,
            argument_names=sorted(arguments.model_fields_set),
            duration_ms=duration_ms,
            outcome="failure" if failed else "success",
            error_kind=outcome.kind.value if failed else None,
        )
        if failed:
            return self._shaper.failure(outcome, name=name, invocation_id=context.invocation_id)

        return self._shaper.success(
            text=outcome.to_text(),
            structured=outcome.model_dump(mode="json"),
            name=name,
            invocation_id=context.invocation_id,
        )

    async def _run(self, handler, arguments: BaseModel, name: str) -> ToolPayload | Failure:
        try:
            return await asyncio.wait_for(handler(arguments, self._services), timeout=self._timeout)
        except asyncio.TimeoutError:
            return Failure(
                ErrorKind.EXECUTION_FAILED,
                f"Tool '{name}' timed out after {self._timeout:g}s",
            )
        except ServiceDisabledError as exc:
            return Failure(ErrorKind.EXECUTION_FAILED, str(exc), public=True)
        except ExternalServiceError as exc:
            return Failure(ErrorKind.EXECUTION_FAILED, f"{type(exc).__name__}: {exc}")
        except Exception as exc:  # noqa: BLE001 - converted into a failed envelope
            logger.exception("mcp_tool_unexpected_error", tool=name)
            return Failure(ErrorKind.EXECUTION_FAILED, f"{type(exc).__name__}: {exc}")
