"""
todoc.

PURPOSE: Extract API documentation from tagged comment blocks in Lua sources.
AI CONTEXT: This package pairs doc-tag comment blocks with the function
declarations they precede and builds an immutable document model that
renderers, the CLI and the MCP server consume.

PACKAGE STRUCTURE:
- extractors/: Language-specific pipelines (tokenizer, block matcher,
  declaration recognizer, comment associator)
- doctags/: Doc-tag parser and nested description markup parser
- models/: Tokens, declarations, documentation nodes, diagnostics, config
- builder.py: Per-file assembly and path-ordered merge
- pipeline.py: Multi-file extraction with per-file failure isolation
- renderers/: Markdown rendering of the document model
- server.py: MCP server with JSON-RPC 2.0 message handling
- cli.py: todoc command line
- filesystem.py: Filesystem abstraction for testability

QUICK START:
    # Extract a single file
    from todoc.extractors.lua import LuaExtractor
    document = LuaExtractor().extract(code, "example.lua")

    # Build a model for several files
    from todoc.pipeline import build_document_model
    model = build_document_model([("a.lua", code_a), ("b.lua", code_b)])

    # Run MCP server
    python -m todoc.server
"""

from todoc.__version__ import (
    __author__,
    __copyright__,
    __description__,
    __license__,
    __title__,
    __version__,
    __version_date__,
)

__all__ = [
    "__version__",
    "__version_date__",
    "__title__",
    "__description__",
    "__author__",
    "__license__",
    "__copyright__",
]
