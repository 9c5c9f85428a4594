"""
Lua tokenizer.

Converts raw Lua source into a position-tagged token stream that covers
the entire input with no gaps. Comments, short strings and long-bracket
literals become single opaque tokens, so keyword-like text inside them
(``-- end``, ``"function"``, ``[[ do ]]``) is never seen as code.

Architecture:
    - Pre-compiled patterns for whitespace, names and numbers
    - Hand-written scanners for strings and level-matched long brackets
    - Incremental line/column/byte-offset tracking per emitted token
"""

import logging
import re

from todoc.errors import UnterminatedLiteral
from todoc.models import Position, Token, TokenKind

logger = logging.getLogger(__name__)

LUA_KEYWORDS = frozenset(
    {
        "and",
        "break",
        "do",
        "else",
        "elseif",
        "end",
        "false",
        "for",
        "function",
        "goto",
        "if",
        "in",
        "local",
        "nil",
        "not",
        "or",
        "repeat",
        "return",
        "then",
        "true",
        "until",
        "while",
    }
)

# Multi-character operators, longest first
MULTI_CHAR_PUNCTUATION = ("...", "..", "==", "~=", "<=", ">=", "//", "::", "<<", ">>")

# Pre-compiled regex patterns for performance
REGEX_WHITESPACE = re.compile(r"[ \t\r\n\f\v]+")
REGEX_NAME = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
REGEX_NUMBER = re.compile(
    r"0[xX][0-9a-fA-F]*(?:\.[0-9a-fA-F]*)?(?:[pP][+-]?\d+)?"
    r"|(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?"
)
REGEX_LONG_OPEN = re.compile(r"\[(=*)\[")


class LuaLexer:
    """Single-use tokenizer over one Lua source text.

    Attributes:
        source: Decoded source text
        tokens: Tokens emitted so far

    Example:
        >>> tokens = LuaLexer("local x = 1 -- end").tokenize()
        >>> [t.kind.value for t in tokens if not t.is_trivia][:2]
        ['keyword', 'identifier']
    """

    def __init__(self, source: str | bytes) -> None:
        if isinstance(source, bytes):
            source = source.decode("utf-8", errors="surrogateescape")
        self.source = source
        self.tokens: list[Token] = []
        self._pos = 0
        self._line = 1
        self._column = 1
        self._offset = 0

    def tokenize(self) -> list[Token]:
        """Scan the whole source and return the token list.

        The returned list always ends with one END_OF_INPUT token whose text
        is empty. Joining the text of every token reproduces the source.

        Returns:
            Ordered list of tokens covering the entire input.

        Raises:
            UnterminatedLiteral: If a string, long-bracket literal or block
                comment has no closing delimiter before end of input.

        Example:
            >>> "".join(t.text for t in LuaLexer(code).tokenize()) == code
            True
        """
        src = self.source
        if src.startswith("#"):
            self._emit(TokenKind.SHEBANG, self._line_end(0))

        while self._pos < len(src):
            self._scan_token()

        self.tokens.append(Token(TokenKind.END_OF_INPUT, "", self._position()))
        logger.debug(f"Tokenized {len(src)} characters into {len(self.tokens)} tokens")
        return self.tokens

    # ==================== SCANNERS ====================

    def _scan_token(self) -> None:
        src = self.source
        pos = self._pos
        ch = src[pos]

        match = REGEX_WHITESPACE.match(src, pos)
        if match:
            self._emit(TokenKind.WHITESPACE, match.end())
            return

        if src.startswith("--", pos):
            self._scan_comment()
            return

        if ch == "[":
            long_open = REGEX_LONG_OPEN.match(src, pos)
            if long_open:
                end = self._find_long_close(long_open, "long bracket literal")
                self._emit(TokenKind.LONG_BRACKET_LITERAL, end)
            else:
                self._emit(TokenKind.PUNCTUATION, pos + 1)
            return

        if ch in "\"'":
            self._emit(TokenKind.STRING_LITERAL, self._find_string_end(ch))
            return

        if ch.isdigit() or (ch == "." and src[pos + 1 : pos + 2].isdigit()):
            match = REGEX_NUMBER.match(src, pos)
            if match:
                self._emit(TokenKind.NUMBER, match.end())
                return

        match = REGEX_NAME.match(src, pos)
        if match:
            kind = TokenKind.KEYWORD if match.group() in LUA_KEYWORDS else TokenKind.IDENTIFIER
            self._emit(kind, match.end())
            return

        for symbol in MULTI_CHAR_PUNCTUATION:
            if src.startswith(symbol, pos):
                self._emit(TokenKind.PUNCTUATION, pos + len(symbol))
                return

        self._emit(TokenKind.PUNCTUATION, pos + 1)

    def _scan_comment(self) -> None:
        """Emit a line comment or a level-matched block comment at ``--``."""
        long_open = REGEX_LONG_OPEN.match(self.source, self._pos + 2)
        if long_open:
            end = self._find_long_close(long_open, "block comment")
            self._emit(TokenKind.BLOCK_COMMENT, end)
        else:
            self._emit(TokenKind.LINE_COMMENT, self._line_end(self._pos))

    def _find_long_close(self, long_open: re.Match[str], what: str) -> int:
        """Return the end index of a long bracket opened by ``long_open``.

        Only a closer with the same number of ``=`` signs ends the bracket,
        so ``[==[ ]] ]=] ]==]`` closes at the last marker.

        Raises:
            UnterminatedLiteral: If no matching closer exists.
        """
        closer = "]" + long_open.group(1) + "]"
        end = self.source.find(closer, long_open.end())
        if end < 0:
            raise UnterminatedLiteral(f"Unterminated {what}", self._position())
        return end + len(closer)

    def _find_string_end(self, quote: str) -> int:
        """Return the end index of a short string starting at the current position.

        Backslash escapes the next character (an escaped newline continues
        the string), and ``\\z`` skips the following whitespace run.

        Raises:
            UnterminatedLiteral: On end of input or an unescaped newline.
        """
        src = self.source
        i = self._pos + 1
        n = len(src)
        while i < n:
            c = src[i]
            if c == "\\":
                if src.startswith("\r\n", i + 1):
                    i += 3
                elif src.startswith("z", i + 1):
                    match = REGEX_WHITESPACE.match(src, i + 2)
                    i = match.end() if match else i + 2
                else:
                    i += 2
                continue
            if c == quote:
                return i + 1
            if c == "\n":
                break
            i += 1
        raise UnterminatedLiteral("Unterminated string literal", self._position())

    # ==================== POSITION TRACKING ====================

    def _line_end(self, start: int) -> int:
        end = self.source.find("\n", start)
        return len(self.source) if end < 0 else end

    def _position(self) -> Position:
        return Position(self._line, self._column, self._offset)

    def _emit(self, kind: TokenKind, end: int) -> None:
        text = self.source[self._pos : end]
        self.tokens.append(Token(kind, text, self._position()))

        newlines = text.count("\n")
        if newlines:
            self._line += newlines
            self._column = len(text) - text.rfind("\n")
        else:
            self._column += len(text)
        self._offset += len(text.encode("utf-8", errors="surrogateescape"))
        self._pos = end


def tokenize(source: str | bytes) -> list[Token]:
    """Tokenize Lua source into a lossless, position-tagged token list.

    Args:
        source: Lua source as text or UTF-8 bytes.

    Returns:
        Tokens covering the whole input, terminated by END_OF_INPUT.

    Raises:
        UnterminatedLiteral: If a literal or block comment is not closed.

    Example:
        >>> [t.text for t in tokenize("f() -- end")]
        ['f', '(', ')', ' ', '-- end', '']
    """
    return LuaLexer(source).tokenize()
