"""Grounding tool that reads the project's documentation files."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from ..catalog import ToolDefinition, ToolPayload, ToolServices


class SoberThinkingInput(BaseModel):
    """No arguments; extra keys are ignored."""

    model_config = ConfigDict(extra="ignore", frozen=True)


class SoberThinkingOutput(ToolPayload):
    content: str = Field(..., description="Combined file contents from project")

    def to_text(self) -> str:
        return self.content


async def sober_thinking(args: SoberThinkingInput, services: ToolServices) -> SoberThinkingOutput:
    content = await services.files.read_project_files()
    return SoberThinkingOutput(content=content)


DEFINITION = ToolDefinition(
    name="sober_thinking",
    description=(
        "Read project documentation files to ground answers in the current project state."
    ),
    input_model=SoberThinkingInput,
    output_model=SoberThinkingOutput,
    handler=sober_thinking,
    annotations={"title": "Sober Thinking", "readOnlyHint": True, "openWorldHint": False},
)
