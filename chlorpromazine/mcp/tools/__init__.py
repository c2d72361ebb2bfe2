"""Tool handlers grouped by collaborator."""

from . import kill_trip, sober_thinking

TOOL_DEFINITIONS = (kill_trip.DEFINITION, sober_thinking.DEFINITION)

__all__ = ["TOOL_DEFINITIONS", "kill_trip", "sober_thinking"]
