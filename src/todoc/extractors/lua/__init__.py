"""
Lua Documentation Extractor Package.

Provides Lua-specific tokenization, block matching, declaration
recognition and comment association.
"""

from todoc.extractors.lua.blocks import match_blocks
from todoc.extractors.lua.comments import associate_comment
from todoc.extractors.lua.declarations import DeclarationRecognizer, recognize_declarations
from todoc.extractors.lua.extractor import LuaExtractor
from todoc.extractors.lua.lexer import LuaLexer, tokenize

__all__ = [
    "DeclarationRecognizer",
    "LuaExtractor",
    "LuaLexer",
    "associate_comment",
    "match_blocks",
    "recognize_declarations",
    "tokenize",
]
