"""Pydantic schema for the JSON-RPC style HTTP transport."""

from typing import Any, Literal

from pydantic import BaseModel, Field


class RpcRequest(BaseModel):
    jsonrpc: Literal["2.0"] = "2.0"
    id: str | int | None = None
    method: str = Field(..., min_length=1)
    params: dict[str, Any] = Field(default_factory=dict)


class RpcResponse(BaseModel):
    jsonrpc: Literal["2.0"] = "2.0"
    id: str | int | None = None
    result: dict[str, Any]
