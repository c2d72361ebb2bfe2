"""Documentation search tool backed by SerpAPI."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from ...core.exceptions import ServiceDisabledError
from ...services.serpapi_client import DISABLED_MESSAGE
from ..catalog import ToolDefinition, ToolPayload, ToolServices


class KillTripInput(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True, str_strip_whitespace=True)

    query: str = Field(
        ...,
        min_length=1,
        max_length=200,
        description="The search query for SerpAPI",
    )


class KillTripOutput(ToolPayload):
    result: str = Field(..., description="Search result from SerpAPI")

    def to_text(self) -> str:
        return self.result


async def kill_trip(args: KillTripInput, services: ToolServices) -> KillTripOutput:
    """
    Search trusted developer documentation and communities.

    The query is restricted to the configured site whitelist and the first hit
    is summarised as `title - snippet (link)`.
    """

    if not services.search.is_configured():
        raise ServiceDisabledError(DISABLED_MESSAGE)
    result = await services.search.search(args.query)
    return KillTripOutput(result=result)


DEFINITION = ToolDefinition(
    name="kill_trip",
    description="Search trusted dev docs & communities.",
    input_model=KillTripInput,
    output_model=KillTripOutput,
    handler=kill_trip,
    annotations={"title": "KillTrip Search", "readOnlyHint": True, "openWorldHint": True},
)
