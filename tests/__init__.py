"""Tests for todoc.

Test package containing unit and integration tests for:
- Models (tokens, declarations, documentation, diagnostics, config)
- Lua extraction pipeline (tokenizer, blocks, declarations, comments)
- Doc-tag and description markup parsing
- Markdown rendering, CLI and MCP server
- Filesystem abstraction (mock and production adapters)
"""
