"""Pydantic schema for the uniform result envelope."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from ..core.types import ErrorKind

RoleLiteral = Literal["user", "assistant"]


class TextBlock(BaseModel):
    type: Literal["text"] = "text"
    text: str


class PromptMessage(BaseModel):
    role: RoleLiteral
    content: TextBlock


class ResultEnvelope(BaseModel):
    """One per invocation, success or failure alike."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool
    content: list[TextBlock] = Field(default_factory=list)
    structured_content: dict[str, Any] | None = Field(None, alias="structuredContent")
    messages: list[PromptMessage] | None = None
    description: str | None = None
    error: str | None = None
    error_kind: ErrorKind | None = Field(None, alias="errorKind")
    name: str | None = None
    invocation_id: str | None = Field(None, alias="invocationId")

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
