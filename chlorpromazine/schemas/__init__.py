"""Pydantic schemas shared by the dispatch core and the transports."""

from .envelope import PromptMessage, ResultEnvelope, TextBlock
from .requests import (
    CallToolRequest,
    GetPromptRequest,
    InvocationRequest,
    ListPromptsRequest,
    ListToolsRequest,
)
from .rpc import RpcRequest, RpcResponse

__all__ = [
    "CallToolRequest",
    "GetPromptRequest",
    "InvocationRequest",
    "ListPromptsRequest",
    "ListToolsRequest",
    "PromptMessage",
    "ResultEnvelope",
    "RpcRequest",
    "RpcResponse",
    "TextBlock",
]
