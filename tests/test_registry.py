"""Tests for the static tool registry."""

import pytest

from places_mcp.errors import UnknownToolError
from places_mcp.registry import TOOLS, get_tool, list_tools


def test_lists_three_tools():
    names = [tool.name for tool in list_tools()]

    assert names == ["search_places", "get_service_info", "check_health"]


def test_list_tools_is_idempotent():
    first = [tool.model_dump() for tool in list_tools()]
    second = [tool.model_dump() for tool in list_tools()]

    assert first == second


def test_search_schema():
    schema = get_tool("search_places").input_schema

    assert schema["required"] == ["query"]
    assert schema["properties"]["query"]["type"] == "string"
    assert schema["properties"]["radius"]["minimum"] == 0
    assert schema["properties"]["radius"]["maximum"] == 50000


def test_parameterless_tools_have_empty_object_schema():
    assert get_tool("check_health").input_schema == {"type": "object", "properties": {}}


def test_names_are_unique():
    assert len({tool.name for tool in TOOLS}) == len(TOOLS)


def test_unknown_tool():
    with pytest.raises(UnknownToolError, match="Unknown tool: book_table"):
        get_tool("book_table")
