"""Basic tests for todoc."""

from todoc import __version__
from todoc.extractors import get_extractor
from todoc.server import TodocMCPServer


def test_version() -> None:
    """Verifies package version is correctly defined.

    Tests version string export.

    Business context:
    Package version is reported by ``todoc --version`` and the MCP
    initialize handshake.

    Arrangement:
    1. Import __version__ from package.

    Action:
    Compare version string to expected value.

    Assertion Strategy:
    Validates version equals '0.1.0' (current release).
    """
    assert __version__ == "0.1.0"


def test_lua_extractor_available() -> None:
    """Verifies the Lua extractor is registered.

    Business context:
    Lua is the default language for files without a known extension.

    Arrangement:
    1. Look up the extractor by language name.

    Action:
    Check the extractor's language.

    Assertion Strategy:
    Validates get_language() returns 'lua'.
    """
    extractor = get_extractor("lua")
    assert extractor is not None
    assert extractor.get_language() == "lua"


def test_server_available() -> None:
    """Verify TodocMCPServer registers the extract_docs tool."""
    server = TodocMCPServer()
    assert "extract_docs" in server.tools
