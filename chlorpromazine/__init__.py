"""Chlorpromazine MCP server: grounding prompts and tools for coding agents."""

__version__ = "0.4.0"
