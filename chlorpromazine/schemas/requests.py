"""Tagged invocation requests keyed by method name."""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class _Request(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)


class ListPromptsRequest(_Request):
    method: Literal["prompts/list"]


class GetPromptRequest(_Request):
    method: Literal["prompts/get"]
    name: str = Field(..., min_length=1)
    # Checked against the prompt's own model by the schema validator.
    arguments: Any = None


class ListToolsRequest(_Request):
    method: Literal["tools/list"]


class CallToolRequest(_Request):
    method: Literal["tools/call"]
    name: str = Field(..., min_length=1)
    arguments: Any = None
    invocation_id: str | None = Field(
        None,
        validation_alias=AliasChoices("invocationId", "toolRunId", "invocation_id"),
    )


InvocationRequest = Annotated[
    Union[ListPromptsRequest, GetPromptRequest, ListToolsRequest, CallToolRequest],
    Field(discriminator="method"),
]

REQUEST_MODELS: dict[str, type[_Request]] = {
    "prompts/list": ListPromptsRequest,
    "prompts/get": GetPromptRequest,
    "tools/list": ListToolsRequest,
    "tools/call": CallToolRequest,
}
