"""Tests for MCP server."""

import json
from typing import Any

import pytest

from todoc.models import ExtractionConfig
from todoc.server import MCP_VERSION, JSONRPCErrorCode, TodocMCPServer

DOCUMENTED = "-- @brief Adds\n-- @param x number value\nfunction add(x) end\n"


def call_message(arguments: dict[str, Any], message_id: int = 3) -> dict[str, Any]:
    return {
        "jsonrpc": "2.0",
        "id": message_id,
        "method": "tools/call",
        "params": {"name": "extract_docs", "arguments": arguments},
    }


class TestTodocMCPServer:
    """Tests for TodocMCPServer."""

    def test_server_creation(self) -> None:
        """Verify TodocMCPServer initializes with tools and extractors."""
        server = TodocMCPServer()
        assert "extract_docs" in server.tools
        assert "lua" in server.extractors

    @pytest.mark.asyncio
    async def test_handle_initialize(self) -> None:
        """Verify initialize method returns correct protocol version."""
        server = TodocMCPServer()
        message = {
            "jsonrpc": "2.0",
            "id": 1,
            "method": "initialize",
            "params": {"protocolVersion": MCP_VERSION},
        }
        response = await server.handle_message(message)
        assert response["jsonrpc"] == "2.0"
        assert response["id"] == 1
        assert response["result"]["protocolVersion"] == "2024-11-05"
        assert response["result"]["serverInfo"]["name"] == "todoc-mcp-server"

    @pytest.mark.asyncio
    async def test_handle_tools_list(self) -> None:
        """Verify tools/list returns registered tools with schema."""
        server = TodocMCPServer()
        response = await server.handle_message({"jsonrpc": "2.0", "id": 2, "method": "tools/list"})
        (tool,) = response["result"]["tools"]
        assert tool["name"] == "extract_docs"
        assert tool["inputSchema"]["required"] == ["code"]
        assert tool["inputSchema"]["properties"]["language"]["enum"] == ["lua"]

    @pytest.mark.asyncio
    async def test_extract_markdown(self) -> None:
        """Verify extract_docs renders Markdown by default."""
        server = TodocMCPServer()
        response = await server.handle_message(
            call_message({"code": DOCUMENTED, "file_path": "add.lua"})
        )
        text = response["result"]["content"][0]["text"]
        assert response["id"] == 3
        assert text.startswith("# add.lua")
        assert "**Brief:** Adds" in text
        assert "- x (number): value" in text

    @pytest.mark.asyncio
    async def test_extract_json(self) -> None:
        """Verify extract_docs can return the JSON document model."""
        server = TodocMCPServer()
        response = await server.handle_message(call_message({"code": DOCUMENTED, "format": "json"}))
        data = json.loads(response["result"]["content"][0]["text"])
        function = data["files"][0]["functions"][0]
        assert function["declaration"]["qualified_name"] == "add"
        assert function["doc"]["params"][0]["type_name"] == "number"

    @pytest.mark.asyncio
    async def test_diagnostics_appended(self) -> None:
        """Verify recoverable diagnostics are listed after Markdown output."""
        server = TodocMCPServer()
        response = await server.handle_message(
            call_message({"code": "-- @since 1\nfunction f() end", "file_path": "f.lua"})
        )
        text = response["result"]["content"][0]["text"]
        assert "Diagnostics:\n- f.lua:1: unknown_tag: Unknown tag '@since'" in text

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("method", "params", "expected_error_code"),
        [
            ("unknown_method", None, JSONRPCErrorCode.METHOD_NOT_FOUND),
            (
                "tools/call",
                {"name": "unknown_tool", "arguments": {}},
                JSONRPCErrorCode.METHOD_NOT_FOUND,
            ),
            (
                "tools/call",
                {"name": "extract_docs", "arguments": {}},
                JSONRPCErrorCode.INVALID_PARAMS,
            ),
            (
                "tools/call",
                {"name": "extract_docs", "arguments": {"code": 42}},
                JSONRPCErrorCode.INVALID_PARAMS,
            ),
            (
                "tools/call",
                {"name": "extract_docs", "arguments": {"code": "x", "format": "html"}},
                JSONRPCErrorCode.INVALID_PARAMS,
            ),
            (
                "tools/call",
                {"name": "extract_docs", "arguments": {"code": "function f("}},
                JSONRPCErrorCode.INTERNAL_ERROR,
            ),
        ],
        ids=[
            "unknown_method",
            "unknown_tool",
            "missing_code_param",
            "non_string_code",
            "unknown_format",
            "unbalanced_source",
        ],
    )
    async def test_error_responses(
        self, method: str, params: dict | None, expected_error_code: JSONRPCErrorCode
    ) -> None:
        """Verify error handling for various invalid requests."""
        server = TodocMCPServer()
        message: dict[str, Any] = {"jsonrpc": "2.0", "id": 1, "method": method}
        if params:
            message["params"] = params
        response = await server.handle_message(message)
        assert "error" in response
        assert response["error"]["code"] == expected_error_code.value

    @pytest.mark.asyncio
    async def test_extraction_failure_message(self) -> None:
        """Verify fatal extraction errors are described in the error message."""
        server = TodocMCPServer()
        response = await server.handle_message(
            call_message({"code": 's = "open', "file_path": "s.lua"})
        )
        assert response["error"]["message"].startswith("Extraction failed: s.lua: line 1")

    @pytest.mark.asyncio
    async def test_handle_unsupported_language(self) -> None:
        """Verify unsupported language returns descriptive error."""
        server = TodocMCPServer()
        response = await server.handle_message(
            call_message({"code": "fn main() {}", "language": "rust"})
        )
        assert "error" in response
        assert "unsupported language" in response["error"]["message"].lower()

    @pytest.mark.asyncio
    async def test_code_too_large(self) -> None:
        """Verify input over the configured limit is rejected."""
        server = TodocMCPServer(config=ExtractionConfig(max_code_size=4))
        response = await server.handle_message(call_message({"code": "function f() end"}))
        assert response["error"]["code"] == JSONRPCErrorCode.INVALID_PARAMS.value
        assert "too large" in response["error"]["message"].lower()
