"""Prompt templates and the renderer that fills them."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from ..core.types import ErrorKind, Failure
from ..schemas.envelope import PromptMessage, TextBlock
from .catalog import Catalog, PromptDefinition


class _PromptArgs(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)


class SoberThinkingArgs(_PromptArgs):
    QUESTION_TEXT: str = Field(
        ...,
        min_length=1,
        description="The question to answer after grounding in project reality",
    )


class FactCheckedAnswerArgs(_PromptArgs):
    USER_QUERY: str = Field(
        ...,
        min_length=1,
        description="The query to fact-check against official documentation",
    )


class BuzzkillArgs(_PromptArgs):
    ISSUE_DESCRIPTION: str = Field(
        ...,
        min_length=1,
        description="The bug or unexpected behaviour to debug",
    )


_SOBER_THINKING_TEMPLATE = """Before answering "{QUESTION_TEXT}", first read the project files to ground yourself in reality.

**Instructions:**
1. Use the sober_thinking tool to read the current project files (README.md, CHANGELOG.md, pyproject.toml, etc.)
2. Analyze the current state based on the actual project files
3. Answer the question using only verified information from the project files
4. If information is missing or uncertain, clearly state what is unknown
5. Cite specific files when referencing information

**Important:** Do not make assumptions or hallucinate information. Only use facts from the actual project files."""

_FACT_CHECKED_ANSWER_TEMPLATE = """You need to answer this query: "{USER_QUERY}"

**Fact-checking process:**
1. First, use the kill_trip tool to search official documentation for relevant information
2. Review the search results carefully for accuracy and relevance
3. If the first search doesn't provide enough information, try different search terms
4. Cross-reference multiple sources when possible
5. Provide your answer based only on verified information from official sources

**Answer format:**
- Start with a clear, direct answer
- Include citations from the documentation you found
- If information is incomplete or conflicting, state this clearly
- Provide links to official sources when available

**Important:** Only provide information that can be verified through official documentation. If you cannot find authoritative sources, say so explicitly."""

_BUZZKILL_TEMPLATE = """Debug this issue without guessing: "{ISSUE_DESCRIPTION}"

**Debugging process:**
1. Restate the observed behaviour and the expected behaviour
2. Use the sober_thinking tool to read the project files and confirm versions, configuration and documented behaviour
3. Use the kill_trip tool to check the official documentation for every API or error message involved
4. List candidate causes and, for each one, the evidence that supports or rules it out
5. Propose the smallest fix that the evidence supports, and how to verify it

**Important:** Treat every assumption as unverified until a project file or official source confirms it. If the evidence is inconclusive, say what additional information is needed."""


PROMPT_DEFINITIONS: tuple[PromptDefinition, ...] = (
    PromptDefinition(
        name="sober_thinking",
        description="Ground agent in project reality by reading current files before answering",
        arguments_model=SoberThinkingArgs,
        template=_SOBER_THINKING_TEMPLATE,
    ),
    PromptDefinition(
        name="fact_checked_answer",
        description="Verify answer against official documentation before responding",
        arguments_model=FactCheckedAnswerArgs,
        template=_FACT_CHECKED_ANSWER_TEMPLATE,
    ),
    PromptDefinition(
        name="buzzkill",
        description="Systematic debugging with reality-checking",
        arguments_model=BuzzkillArgs,
        template=_BUZZKILL_TEMPLATE,
    ),
)


class PromptRenderer:
    """Fill prompt templates with validated arguments. No I/O."""

    def __init__(self, catalog: Catalog) -> None:
        self._catalog = catalog

    def render(self, name: str, arguments: BaseModel) -> list[PromptMessage] | Failure:
        definition = self._catalog.prompt(name)
        if definition is None:
            return Failure(ErrorKind.NOT_FOUND, f"Unknown prompt: {name}")

        text = definition.template.format(**arguments.model_dump())
        return [PromptMessage(role=definition.role, content=TextBlock(text=text))]
