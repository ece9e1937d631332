"""
Tests for Tool base classes.
"""

import json
from typing import List

import pytest

from kgsearch.errors import ErrorReason, GraphSearchError
from kgsearch.tools import (
    BaseTool,
    ParameterType,
    ToolParameter,
    ToolResult,
)


class TestToolParameter:
    """Tests for ToolParameter."""

    def test_create_simple(self):
        param = ToolParameter(
            name="query",
            param_type=ParameterType.STRING,
            description="Search query"
        )
        assert param.name == "query"
        assert param.required is True
        assert param.default is None

    def test_to_json_schema(self):
        param = ToolParameter(
            name="topK",
            param_type=ParameterType.INTEGER,
            description="Number of results",
            required=False,
            default=10
        )
        assert param.to_json_schema() == {
            "type": "integer",
            "description": "Number of results",
            "default": 10,
        }

    def test_to_json_schema_with_enum(self):
        param = ToolParameter(
            name="strategyKey",
            param_type=ParameterType.STRING,
            description="Strategy",
            enum=["technology", "skill"]
        )
        assert param.to_json_schema()["enum"] == ["technology", "skill"]

    def test_extra_schema_merged(self):
        param = ToolParameter(
            name="searchOptions",
            param_type=ParameterType.OBJECT,
            description="Options",
            schema={"properties": {"includeCode": {"type": "boolean"}}}
        )
        schema = param.to_json_schema()

        assert schema["type"] == "object"
        assert schema["properties"]["includeCode"]["type"] == "boolean"


class TestToolResult:
    """Tests for ToolResult."""

    def test_ok_factory(self):
        result = ToolResult.ok(data={"resultCount": 0}, tool_name="t", elapsed_ms=3)

        assert result.success is True
        assert result.tool_name == "t"
        assert result.metadata["elapsed_ms"] == 3
        assert "timestamp" in result.metadata

    def test_fail_factory(self):
        result = ToolResult.fail(error="Something went wrong", tool_name="t")

        assert result.success is False
        assert result.error == "Something went wrong"
        assert result.data is None

    def test_to_json_success(self):
        result = ToolResult.ok(data={"query": "q", "results": [], "resultCount": 0})
        assert json.loads(result.to_json()) == {"query": "q", "results": [], "resultCount": 0}

    def test_to_json_failure(self):
        assert json.loads(ToolResult.fail("boom").to_json()) == {"error": "boom"}


class EchoTool(BaseTool):
    name = "echo"
    description = "Echo the query back"

    def __init__(self, error: Exception = None):
        super().__init__()
        self.error = error

    @property
    def parameters(self) -> List[ToolParameter]:
        return [
            ToolParameter("query", ParameterType.STRING, "Text to echo"),
            ToolParameter("times", ParameterType.INTEGER, "Repetitions", required=False, default=1),
        ]

    async def execute(self, query: str, times: int = 1) -> ToolResult:
        if self.error:
            raise self.error
        return ToolResult.ok(query * times, tool_name=self.name)


class TestBaseTool:
    """Tests for BaseTool."""

    def test_missing_name_rejected(self):
        class Nameless(EchoTool):
            name = ""

        with pytest.raises(ValueError, match="name"):
            Nameless()

    def test_missing_description_rejected(self):
        class Undescribed(EchoTool):
            description = ""

        with pytest.raises(ValueError, match="description"):
            Undescribed()

    @pytest.mark.asyncio
    async def test_call_executes(self):
        result = await EchoTool()(query="ab", times=2)

        assert result.success
        assert result.data == "abab"

    @pytest.mark.asyncio
    async def test_missing_required(self):
        result = await EchoTool()(times=2)

        assert not result.success
        assert result.error == "Missing required parameter: query"

    @pytest.mark.asyncio
    async def test_unknown_parameter(self):
        result = await EchoTool()(query="a", verbose=True)

        assert not result.success
        assert result.error == "Unknown parameter: verbose"

    @pytest.mark.asyncio
    async def test_exception_becomes_failure(self):
        tool = EchoTool(error=GraphSearchError("Failed to execute query: timeout", ErrorReason.QUERY_EXECUTION))

        result = await tool(query="a")

        assert not result.success
        assert result.error == "Failed to execute query: timeout"
        assert result.tool_name == "echo"

    @pytest.mark.asyncio
    async def test_exception_without_message(self):
        result = await EchoTool(error=RuntimeError())(query="a")
        assert result.error == "Unknown error"

    def test_get_schema(self):
        schema = EchoTool().get_schema()

        assert schema["name"] == "echo"
        assert schema["parameters"]["type"] == "object"
        assert set(schema["parameters"]["properties"]) == {"query", "times"}
        assert schema["parameters"]["required"] == ["query"]
