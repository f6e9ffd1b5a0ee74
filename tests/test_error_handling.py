"""Tests for MCP error handling decorator."""

import httpx

from src.core.advisor_client import AdvisorError
from src.core.resolvers import ResolverError
from src.mcp.error_handling import handle_tool_errors


class TestHandleToolErrors:
    async def test_returns_result_on_success(self):
        @handle_tool_errors
        async def tool():
            return "ok"

        assert await tool() == "ok"

    async def test_catches_advisor_error(self):
        @handle_tool_errors
        async def tool():
            raise AdvisorError(503, "not_configured", "OPENAI_API_KEY is not configured.")

        result = await tool()
        assert "OPENAI_API_KEY" in result

    async def test_catches_resolver_error(self):
        @handle_tool_errors
        async def tool():
            raise ResolverError("saved trip", "Japan", ["Portugal"])

        result = await tool()
        assert "Japan" in result
        assert "Portugal" in result

    async def test_catches_connect_error(self):
        @handle_tool_errors
        async def tool():
            raise httpx.ConnectError("Connection refused")

        result = await tool()
        assert "Cannot connect" in result

    async def test_catches_timeout(self):
        @handle_tool_errors
        async def tool():
            raise httpx.ReadTimeout("timed out")

        result = await tool()
        assert "timed out" in result.lower()

    async def test_catches_validation_error(self):
        @handle_tool_errors
        async def tool():
            from src.models.schemas import RecommendSavingsInput
            RecommendSavingsInput()  # type: ignore[call-arg]

        result = await tool()
        assert "Invalid data" in result
        assert "validation error" in result

    async def test_catches_value_error(self):
        @handle_tool_errors
        async def tool():
            raise ValueError("'2024-13-45' is not a valid date (expected YYYY-MM-DD)")

        result = await tool()
        assert result.startswith("Invalid input:")
        assert "2024-13-45" in result

    async def test_catches_unexpected_exception(self):
        @handle_tool_errors
        async def tool():
            raise RuntimeError("boom")

        result = await tool()
        assert "Unexpected error" in result
        assert "RuntimeError" in result
        assert "boom" in result
