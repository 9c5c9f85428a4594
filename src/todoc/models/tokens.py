"""
Token models for source scanning.

Defines token kinds, source positions and the token record produced by
language tokenizers. Literal and comment tokens carry their full raw text
so later stages never re-lex their interior.
"""

from dataclasses import dataclass
from enum import Enum


class TokenKind(Enum):
    """Lexical categories produced by the tokenizer.

    Code Kinds:
    • KEYWORD, IDENTIFIER, NUMBER, PUNCTUATION

    Opaque Kinds (interior never inspected as code):
    • STRING_LITERAL, LONG_BRACKET_LITERAL, LINE_COMMENT, BLOCK_COMMENT

    Layout Kinds:
    • WHITESPACE, SHEBANG, END_OF_INPUT
    """

    KEYWORD = "keyword"
    IDENTIFIER = "identifier"
    NUMBER = "number"
    PUNCTUATION = "punctuation"
    STRING_LITERAL = "string_literal"
    LONG_BRACKET_LITERAL = "long_bracket_literal"
    LINE_COMMENT = "line_comment"
    BLOCK_COMMENT = "block_comment"
    WHITESPACE = "whitespace"
    SHEBANG = "shebang"
    END_OF_INPUT = "end_of_input"


COMMENT_KINDS = frozenset({TokenKind.LINE_COMMENT, TokenKind.BLOCK_COMMENT})
TRIVIA_KINDS = COMMENT_KINDS | {TokenKind.WHITESPACE, TokenKind.SHEBANG}


@dataclass(frozen=True)
class Position:
    """Source position.

    Attributes:
        line: 1-based line number
        column: 1-based column (in characters)
        offset: 0-based byte offset into the UTF-8 encoded source
    """

    line: int
    column: int
    offset: int

    def to_dict(self) -> dict[str, int]:
        return {"line": self.line, "column": self.column, "offset": self.offset}


@dataclass(frozen=True)
class Token:
    """A single token with its raw source text.

    Attributes:
        kind: Lexical category
        text: Exact source text covered by the token
        position: Position of the first character
    """

    kind: TokenKind
    text: str
    position: Position

    @property
    def is_comment(self) -> bool:
        return self.kind in COMMENT_KINDS

    @property
    def is_trivia(self) -> bool:
        """True for tokens that never affect syntax (whitespace, comments, shebang)."""
        return self.kind in TRIVIA_KINDS

    def is_keyword(self, *words: str) -> bool:
        return self.kind is TokenKind.KEYWORD and self.text in words

    def is_punct(self, *symbols: str) -> bool:
        return self.kind is TokenKind.PUNCTUATION and self.text in symbols
