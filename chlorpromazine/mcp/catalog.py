"""Immutable prompt and tool definitions, and the catalog that lists them."""

from __future__ import annotations

import copy
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel

from ..core.exceptions import ConfigurationError
from ..services.protocols import ProjectFileReader, SearchService


@dataclass(slots=True, frozen=True)
class PromptArgument:
    name: str
    description: str
    required: bool


class ToolPayload(BaseModel):
    """Base for tool output models."""

    def to_text(self) -> str:
        raise NotImplementedError


@dataclass(slots=True, frozen=True)
class PromptDefinition:
    name: str
    description: str
    arguments_model: type[BaseModel]
    template: str
    role: str = "user"

    @property
    def arguments(self) -> tuple[PromptArgument, ...]:
        """Argument declarations derived from the arguments model, in field order."""

        return tuple(
            PromptArgument(
                name=field_name,
                description=info.description or "",
                required=info.is_required(),
            )
            for field_name, info in self.arguments_model.model_fields.items()
        )

    def describe(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "arguments": [
                {"name": arg.name, "description": arg.description, "required": arg.required}
                for arg in self.arguments
            ],
        }


@dataclass(slots=True, frozen=True)
class ToolServices:
    """External collaborators handed to every tool handler."""

    search: SearchService
    files: ProjectFileReader


ToolHandler = Callable[[Any, ToolServices], Awaitable[ToolPayload]]


@dataclass(slots=True, frozen=True)
class ToolDefinition:
    name: str
    description: str
    input_model: type[BaseModel]
    output_model: type[ToolPayload]
    handler: ToolHandler
    annotations: dict[str, Any] = field(default_factory=dict)

    def describe(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_model.model_json_schema(),
            "outputSchema": self.output_model.model_json_schema(),
            "annotations": dict(self.annotations),
        }


class Catalog:
    """Name-keyed registry of prompts and tools, fixed at construction."""

    def __init__(
        self,
        prompts: Iterable[PromptDefinition],
        tools: Iterable[ToolDefinition],
    ) -> None:
        self._prompts = _index(prompts, "prompt")
        self._tools = _index(tools, "tool")
        self._prompt_listing = tuple(p.describe() for p in self._prompts.values())
        self._tool_listing = tuple(t.describe() for t in self._tools.values())

    def prompt(self, name: str) -> PromptDefinition | None:
        return self._prompts.get(name)

    def tool(self, name: str) -> ToolDefinition | None:
        return self._tools.get(name)

    @property
    def prompt_names(self) -> list[str]:
        return list(self._prompts)

    @property
    def tool_names(self) -> list[str]:
        return list(self._tools)

    def list_prompts(self) -> list[dict[str, Any]]:
        return copy.deepcopy(list(self._prompt_listing))

    def list_tools(self) -> list[dict[str, Any]]:
        return copy.deepcopy(list(self._tool_listing))


def _index(definitions: Iterable[Any], kind: str) -> dict[str, Any]:
    indexed: dict[str, Any] = {}
    for definition in definitions:
        if definition.name in indexed:
            raise ConfigurationError(f"Duplicate {kind} name: {definition.name}")
        indexed[definition.name] = definition
    return indexed


def default_catalog() -> Catalog:
    """Catalog with every prompt and tool the server ships."""

    from .prompts import PROMPT_DEFINITIONS
    from .tools import TOOL_DEFINITIONS

    return Catalog(PROMPT_DEFINITIONS, TOOL_DEFINITIONS)
