"""Result shaping and the error disclosure policy.

Every envelope handed back to a transport is built here. In hardened mode
failure details are replaced with a generic category string; the original
detail only goes to the server log.
"""

from __future__ import annotations

from typing import Any

from ..core.logging_config import get_logger
from ..core.types import ErrorKind, Failure
from ..schemas.envelope import PromptMessage, ResultEnvelope, TextBlock

logger = get_logger(__name__)

GENERIC_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.NOT_FOUND: "not found",
    ErrorKind.INVALID_INPUT: "invalid input",
    ErrorKind.RATE_LIMITED: "rate limited",
    ErrorKind.EXECUTION_FAILED: "internal error",
}

# Kinds whose details never carry internal information.
_ALWAYS_VERBATIM = frozenset({ErrorKind.NOT_FOUND, ErrorKind.RATE_LIMITED})


class ResultShaper:
    def __init__(self, *, hardened: bool) -> None:
        self.hardened = hardened

    def public_message(self, failure: Failure) -> str:
        if not self.hardened or failure.public or failure.kind in _ALWAYS_VERBATIM:
            return failure.detail or GENERIC_MESSAGES[failure.kind]
        return GENERIC_MESSAGES[failure.kind]

    def success(
        self,
        *,
        text: str | None = None,
        structured: dict[str, Any] | None = None,
        messages: list[PromptMessage] | None = None,
        description: str | None = None,
        name: str | None = None,
        invocation_id: str | None = None,
    ) -> ResultEnvelope:
        return ResultEnvelope(
            success=True,
            content=[TextBlock(text=text)] if text is not None else [],
            structured_content=structured,
            messages=messages,
            description=description,
            name=name,
            invocation_id=invocation_id,
        )

    def failure(
        self,
        failure: Failure,
        *,
        name: str | None = None,
        invocation_id: str | None = None,
    ) -> ResultEnvelope:
        message = self.public_message(failure)
        if message != failure.detail:
            logger.warning(
                "mcp_error_sanitized",
                kind=failure.kind.value,
                name=name,
                invocation_id=invocation_id,
                detail=failure.detail,
            )
        return ResultEnvelope(
            success=False,
            content=[TextBlock(text=message)],
            structured_content={"error": message},
            error=message,
            error_kind=failure.kind,
            name=name,
            invocation_id=invocation_id,
        )
