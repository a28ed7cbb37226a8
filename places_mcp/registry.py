"""Static registry of the tools advertised to the host."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from mcp import types

from .errors import UnknownToolError

SEARCH_PLACES = "search_places"
GET_SERVICE_INFO = "get_service_info"
CHECK_HEALTH = "check_health"

MAX_RADIUS_METERS = 50000


@dataclass(frozen=True)
class ToolDescriptor:
    """Metadata for one invocable tool."""

    name: str
    description: str
    properties: dict[str, Any] = field(default_factory=dict)
    required: tuple[str, ...] = ()

    @property
    def input_schema(self) -> dict[str, Any]:
        schema: dict[str, Any] = {"type": "object", "properties": dict(self.properties)}
        if self.required:
            schema["required"] = list(self.required)
        return schema

    def to_tool(self) -> types.Tool:
        return types.Tool(
            name=self.name,
            description=self.description,
            inputSchema=self.input_schema,
        )


TOOLS: tuple[ToolDescriptor, ...] = (
    ToolDescriptor(
        name=SEARCH_PLACES,
        description="Search for places using Google Places API with x402 micropayments",
        properties={
            "query": {
                "type": "string",
                "description": "Search term (e.g., 'pizza restaurants', 'coffee shops')",
            },
            "location": {
                "type": "string",
                "description": "Optional location bias in 'lat,lng' format (e.g., '37.7749,-122.4194')",
            },
            "radius": {
                "type": "number",
                "description": f"Optional search radius in meters (max {MAX_RADIUS_METERS})",
                "minimum": 0,
                "maximum": MAX_RADIUS_METERS,
            },
        },
        required=("query",),
    ),
    ToolDescriptor(
        name=GET_SERVICE_INFO,
        description="Get x402 service information and payment requirements",
    ),
    ToolDescriptor(
        name=CHECK_HEALTH,
        description="Check the health status of the Places API service",
    ),
)

_BY_NAME = MappingProxyType({tool.name: tool for tool in TOOLS})


def list_tools() -> list[types.Tool]:
    """Return the advertised tools. Independent of payment capability."""
    return [tool.to_tool() for tool in TOOLS]


def get_tool(name: str) -> ToolDescriptor:
    """Look up a tool by name.

    Raises:
        UnknownToolError: If no tool has this name
    """
    try:
        return _BY_NAME[name]
    except KeyError:
        raise UnknownToolError(name) from None
