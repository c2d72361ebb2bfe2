"""Shared FastMCP application instance."""

from fastmcp import FastMCP

mcp = FastMCP(
    name="Chlorpromazine",
    instructions=(
        "Grounding prompts and tools: read the project's own files with sober_thinking "
        "and search trusted documentation with kill_trip before answering."
    ),
)
