"""Schema validation of raw argument bags against declared pydantic models."""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from ..core.types import ErrorKind, Failure

ArgsT = TypeVar("ArgsT", bound=BaseModel)


def validate_arguments(model: type[ArgsT], raw: Any) -> ArgsT | Failure:
    """Project ``raw`` onto ``model`` or describe why it does not fit.

    ``None`` counts as an empty bag. Unknown keys are dropped by the models'
    ``extra="ignore"`` config rather than rejected.
    """

    payload = {} if raw is None else raw
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        return Failure(ErrorKind.INVALID_INPUT, format_validation_error(exc))


def format_validation_error(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error.get("loc", ())) or "arguments"
        parts.append(f"{location}: {error.get('msg', 'invalid value')}")
    return "; ".join(parts)
