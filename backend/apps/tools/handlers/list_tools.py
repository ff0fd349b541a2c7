"""GET /tools - List registered tools and their input schemas."""

from typing import Any

from pydantic import BaseModel, Field

from services.tools import describe_tools


class ToolDescriptor(BaseModel):
    """A registered tool."""

    name: str
    description: str
    input_schema: dict[str, Any] = Field(..., description="JSON Schema of the arguments")


class ToolListResponse(BaseModel):
    """Response for listing tools."""

    tools: list[ToolDescriptor]


async def list_tools() -> ToolListResponse:
    """List all tools callable through POST /tools/call."""
    return ToolListResponse(tools=[ToolDescriptor(**d) for d in describe_tools()])
