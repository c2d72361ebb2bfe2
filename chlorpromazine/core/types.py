"""Shared type definitions."""

from dataclasses import dataclass
from enum import Enum


class ErrorKind(str, Enum):
    """Failure categories reported in result envelopes."""

    NOT_FOUND = "not_found"
    INVALID_INPUT = "invalid_input"
    RATE_LIMITED = "rate_limited"
    EXECUTION_FAILED = "execution_failed"


@dataclass(slots=True, frozen=True)
class Failure:
    """Explicit failure outcome passed between dispatch components.

    ``public`` marks a detail that carries no internal information and may be
    shown to the caller even when error sanitization is on.
    """

    kind: ErrorKind
    detail: str
    public: bool = False


@dataclass(slots=True, frozen=True)
class CallerContext:
    """Who is invoking a tool, and under which invocation id."""

    caller: str
    invocation_id: str
