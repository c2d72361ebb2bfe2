"""FastMCP registrations that route MCP stdio traffic through the dispatcher."""

import uuid
from typing import Annotated, Any

from fastmcp.exceptions import PromptError, ToolError
from fastmcp.tools.tool import ToolResult
from mcp.types import PromptMessage as McpPromptMessage
from mcp.types import TextContent, ToolAnnotations
from pydantic import Field

from ..core.logging_config import get_logger
from .catalog import default_catalog
from .dispatcher import get_dispatcher
from .registry import mcp

logger = get_logger(__name__)

STDIO_CALLER = "stdio"

_CATALOG = default_catalog()


def _prompt_description(name: str) -> str:
    definition = _CATALOG.prompt(name)
    return definition.description if definition else ""


def _tool_meta(name: str) -> dict[str, Any]:
    definition = _CATALOG.tool(name)
    if definition is None:
        raise KeyError(f"Unknown tool: {name}")
    return {
        "description": definition.description,
        "annotations": ToolAnnotations(**definition.annotations),
        "output_schema": definition.output_model.model_json_schema(),
    }


async def render_prompt(name: str, arguments: dict[str, Any]) -> list[McpPromptMessage]:
    envelope = await get_dispatcher().dispatch(
        "prompts/get", {"name": name, "arguments": arguments}, STDIO_CALLER
    )
    if not envelope.success:
        raise PromptError(envelope.error or f"Prompt {name} failed")
    return [
        McpPromptMessage(role=message.role, content=TextContent(type="text", text=message.content.text))
        for message in envelope.messages or []
    ]


async def call_tool(name: str, arguments: dict[str, Any]) -> ToolResult:
    envelope = await get_dispatcher().dispatch(
        "tools/call",
        {"name": name, "arguments": arguments, "invocationId": uuid.uuid4().hex},
        STDIO_CALLER,
    )
    if not envelope.success:
        raise ToolError(envelope.error or f"Tool {name} failed")
    return ToolResult(
        content=[TextContent(type="text", text=block.text) for block in envelope.content],
        structured_content=envelope.structured_content,
    )


@mcp.prompt(name="sober_thinking", description=_prompt_description("sober_thinking"))
async def sober_thinking_prompt(
    QUESTION_TEXT: Annotated[  # noqa: N803 - argument names are part of the prompt contract
        str, Field(description="The question to answer after grounding in project reality")
    ],
) -> list[McpPromptMessage]:
    return await render_prompt("sober_thinking", {"QUESTION_TEXT": QUESTION_TEXT})


@mcp.prompt(name="fact_checked_answer", description=_prompt_description("fact_checked_answer"))
async def fact_checked_answer_prompt(
    USER_QUERY: Annotated[  # noqa: N803
        str, Field(description="The query to fact-check against official documentation")
    ],
) -> list[McpPromptMessage]:
    return await render_prompt("fact_checked_answer", {"USER_QUERY": USER_QUERY})


@mcp.prompt(name="buzzkill", description=_prompt_description("buzzkill"))
async def buzzkill_prompt(
    ISSUE_DESCRIPTION: Annotated[  # noqa: N803
        str, Field(description="The bug or unexpected behaviour to debug")
    ],
) -> list[McpPromptMessage]:
    return await render_prompt("buzzkill", {"ISSUE_DESCRIPTION": ISSUE_DESCRIPTION})


@mcp.tool(name="kill_trip", **_tool_meta("kill_trip"))
async def kill_trip_tool(
    query: Annotated[str, Field(description="The search query for SerpAPI")],
) -> ToolResult:
    return await call_tool("kill_trip", {"query": query})


@mcp.tool(name="sober_thinking", **_tool_meta("sober_thinking"))
async def sober_thinking_tool() -> ToolResult:
    return await call_tool("sober_thinking", {})


def run_stdio() -> None:
    """Serve the registered prompts and tools over stdio."""

    logger.info(
        "mcp_stdio_startup",
        prompts=_CATALOG.prompt_names,
        tools=_CATALOG.tool_names,
    )
    mcp.run()
