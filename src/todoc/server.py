"""
todoc MCP Server.

JSON-RPC 2.0 MCP server exposing documentation extraction as a tool.
Supports multiple source languages via pluggable extractors.

Architecture:
    Message Handler → Tool Registry → Language Extractor → Renderer

Deployment:
    - VS Code MCP extension
    - Claude Desktop
    - Any MCP-compatible client
"""

import asyncio
import json
import logging
import sys
from enum import Enum
from typing import Any

from todoc.__version__ import __version__
from todoc.builder import merge_file_documents
from todoc.cli import OUTPUT_FORMATS, render_model
from todoc.errors import ExtractionError
from todoc.extractors import EXTRACTORS, get_extractor
from todoc.models import DEFAULT_CONFIG, ExtractionConfig

# MCP Protocol version
MCP_VERSION = "2024-11-05"

# Configure logging
logging.basicConfig(level=logging.INFO, format="%(message)s")
logger = logging.getLogger(__name__)


class JSONRPCErrorCode(Enum):
    """Standard JSON-RPC 2.0 error codes.

    Attributes:
        PARSE_ERROR: Invalid JSON received (-32700).
        INVALID_REQUEST: JSON is not valid request object (-32600).
        METHOD_NOT_FOUND: Method does not exist (-32601).
        INVALID_PARAMS: Invalid method parameters (-32602).
        INTERNAL_ERROR: Internal server error (-32603).
    """

    PARSE_ERROR = -32700
    INVALID_REQUEST = -32600
    METHOD_NOT_FOUND = -32601
    INVALID_PARAMS = -32602
    INTERNAL_ERROR = -32603


def _error(message_id: Any, code: JSONRPCErrorCode, message: str) -> dict[str, Any]:
    return {
        "jsonrpc": "2.0",
        "id": message_id,
        "error": {"code": code.value, "message": message},
    }


class TodocMCPServer:
    """MCP server for documentation extraction.

    MCP Protocol Implementation:
    - initialize: Establish connection and negotiate capabilities
    - tools/list: Advertise available tools
    - tools/call: Execute documentation extraction

    Attributes:
        tools: Registry of available tools with schemas
        extractors: Language-specific extractor instances
        config: Extraction configuration
        logger: Logger instance
    """

    def __init__(
        self,
        config: ExtractionConfig | None = None,
        logger_instance: logging.Logger | None = None,
    ) -> None:
        """Initialize MCP server with tool registry and extractors.

        Args:
            config: Extraction configuration. Defaults to DEFAULT_CONFIG.
            logger_instance: Logger instance. Defaults to module logger.

        Example:
            >>> server = TodocMCPServer()
            >>> server = TodocMCPServer(config=custom_config)
        """
        self.config = config or DEFAULT_CONFIG
        self.logger = logger_instance or logger

        self.extractors = {
            language: get_extractor(language, self.config, self.logger) for language in EXTRACTORS
        }

        self.tools = {
            "extract_docs": {
                "name": "extract_docs",
                "description": (
                    "Extract API documentation from tagged comment blocks "
                    "preceding function declarations"
                ),
                "inputSchema": {
                    "type": "object",
                    "properties": {
                        "code": {
                            "type": "string",
                            "description": "Source code containing documented functions",
                        },
                        "file_path": {
                            "type": "string",
                            "description": "Optional file path for context",
                            "default": "",
                        },
                        "language": {
                            "type": "string",
                            "description": "Source language (default: lua)",
                            "default": "lua",
                            "enum": list(self.extractors.keys()),
                        },
                        "format": {
                            "type": "string",
                            "description": "Output format (default: markdown)",
                            "default": "markdown",
                            "enum": list(OUTPUT_FORMATS),
                        },
                    },
                    "required": ["code"],
                },
            },
        }

    async def handle_message(self, message: dict[str, Any]) -> dict[str, Any]:
        """Route incoming JSON-RPC 2.0 messages to appropriate handlers.

        Args:
            message: Incoming JSON-RPC 2.0 message dict with
                     method, id, and optional params.

        Returns:
            JSON-RPC 2.0 compliant response dict with result or error.

        Raises:
            No exceptions - errors returned in JSON-RPC error format.

        Example:
            >>> response = await server.handle_message({
            ...     'jsonrpc': '2.0',
            ...     'id': 1,
            ...     'method': 'tools/list'
            ... })
            >>> 'result' in response
            True
        """
        method = message.get("method")
        message_id = message.get("id")

        if method == "initialize":
            return {
                "jsonrpc": "2.0",
                "id": message_id,
                "result": {
                    "protocolVersion": MCP_VERSION,
                    "capabilities": {"tools": {}},
                    "serverInfo": {"name": "todoc-mcp-server", "version": __version__},
                },
            }

        elif method == "tools/list":
            return {
                "jsonrpc": "2.0",
                "id": message_id,
                "result": {"tools": list(self.tools.values())},
            }

        elif method == "tools/call":
            params = message.get("params", {})
            tool_name = params.get("name")
            arguments = params.get("arguments", {})

            if tool_name == "extract_docs":
                return await self._execute_extract_docs(arguments, message_id)
            return _error(message_id, JSONRPCErrorCode.METHOD_NOT_FOUND, f"Unknown tool: {tool_name}")

        return _error(message_id, JSONRPCErrorCode.METHOD_NOT_FOUND, f"Unknown method: {method}")

    async def _execute_extract_docs(
        self, arguments: dict[str, Any], message_id: Any
    ) -> dict[str, Any]:
        """Execute extract_docs MCP tool.

        Validates inputs, runs the language extractor, and renders the
        single-file model in the requested format. Fatal extraction errors
        become INTERNAL_ERROR responses; recoverable diagnostics are listed
        after the rendered output.

        Args:
            arguments: Tool arguments (code, file_path, language, format).
            message_id: Request ID for response correlation.

        Returns:
            JSON-RPC 2.0 response with rendered documentation or error.

        Raises:
            No exceptions - errors returned in JSON-RPC error format.

        Example:
            >>> response = await server._execute_extract_docs(
            ...     {'code': 'function f() end'}, 1
            ... )
            >>> 'result' in response
            True
        """
        try:
            code = arguments.get("code", "")
            file_path = arguments.get("file_path", "")
            language = arguments.get("language", "lua")
            output_format = arguments.get("format", "markdown")

            if not code or not isinstance(code, str):
                return _error(
                    message_id,
                    JSONRPCErrorCode.INVALID_PARAMS,
                    "'code' is required and must be a string",
                )

            max_size = self.config.max_code_size
            if len(code) > max_size:
                return _error(
                    message_id,
                    JSONRPCErrorCode.INVALID_PARAMS,
                    f"Code too large (max {max_size // 1024}KB)",
                )

            if not isinstance(file_path, str) or len(file_path) > self.config.max_file_path_length:
                return _error(message_id, JSONRPCErrorCode.INVALID_PARAMS, "Invalid 'file_path'")

            if output_format not in OUTPUT_FORMATS:
                return _error(
                    message_id,
                    JSONRPCErrorCode.INVALID_PARAMS,
                    f"Unsupported format: {output_format}",
                )

            extractor = self.extractors.get(language)
            if not extractor:
                return _error(
                    message_id,
                    JSONRPCErrorCode.INVALID_PARAMS,
                    f"Unsupported language: {language}",
                )

            try:
                document = extractor.extract(code, file_path)
            except ExtractionError as e:
                return _error(
                    message_id,
                    JSONRPCErrorCode.INTERNAL_ERROR,
                    f"Extraction failed: {e}",
                )

            model = merge_file_documents([document])
            result_text = render_model(model, output_format)
            if document.diagnostics and output_format == "markdown":
                result_text += "\n".join(
                    ["", "Diagnostics:", *(f"- {d}" for d in document.diagnostics)]
                )

            return {
                "jsonrpc": "2.0",
                "id": message_id,
                "result": {"content": [{"type": "text", "text": result_text}]},
            }

        except Exception as e:
            self.logger.exception(f"Error in extract_docs: {e}")
            return _error(message_id, JSONRPCErrorCode.INTERNAL_ERROR, f"Internal error: {e!s}")

    async def run(self) -> None:  # pragma: no cover
        """Execute MCP server stdio event loop.

        Reads JSON-RPC messages from stdin line by line, dispatches them to
        handle_message, and writes responses to stdout until EOF.
        """
        self.logger.info("Starting todoc MCP Server...")

        while True:
            try:
                line = await asyncio.get_event_loop().run_in_executor(None, sys.stdin.readline)

                if not line:
                    self.logger.info("EOF detected, shutting down")
                    break

                line = line.strip()
                if not line:
                    continue

                try:
                    message = json.loads(line)
                    response = await self.handle_message(message)
                    print(json.dumps(response), flush=True)

                except json.JSONDecodeError as e:
                    self.logger.error(f"Invalid JSON: {e}")
                    print(
                        json.dumps(_error(None, JSONRPCErrorCode.PARSE_ERROR, "Parse error")),
                        flush=True,
                    )

            except Exception as e:
                self.logger.error(f"Error processing message: {e}")
                break


async def main() -> None:  # pragma: no cover
    """Entry point for MCP server process (``python -m todoc.server``)."""
    server = TodocMCPServer()
    await server.run()


if __name__ == "__main__":  # pragma: no cover
    asyncio.run(main())
