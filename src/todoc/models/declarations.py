"""
Declaration models for source structure.

Defines block spans, recognized function declarations and the comment
blocks that precede them. Declarations live in a per-file arena and are
referenced by their stable ``index`` rather than by nested ownership.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from todoc.models.tokens import Position, Token, TokenKind


@dataclass(frozen=True)
class BlockSpan:
    """Region bounded by a block opener keyword and its matching terminator.

    Attributes:
        opener_index: Index of the opener token in the full token list
        terminator_index: Index of the terminator token
        opener: Opener token (function, do, if, repeat)
        terminator: Terminator token (end, until)
        children: Directly nested spans in source order
    """

    opener_index: int
    terminator_index: int
    opener: Token
    terminator: Token
    children: tuple["BlockSpan", ...] = ()

    @property
    def keyword(self) -> str:
        return self.opener.text

    def walk(self) -> Iterator["BlockSpan"]:
        """Yield this span and every nested span in source order."""
        pending = [self]
        while pending:
            span = pending.pop()
            yield span
            pending.extend(reversed(span.children))


class FunctionKind(Enum):
    """Syntactic forms of a function definition.

    Forms:
    • GLOBAL_NAMED: function name()
    • LOCAL_NAMED: local function name()
    • TABLE_FIELD: function a.b.c()
    • TABLE_METHOD: function a.b:c() (implicit self)
    • ANONYMOUS_ASSIGNED: name = function() / local name = function()
    • ANONYMOUS: function() expression bound to no name
    """

    GLOBAL_NAMED = "global_named"
    LOCAL_NAMED = "local_named"
    TABLE_FIELD = "table_field"
    TABLE_METHOD = "table_method"
    ANONYMOUS_ASSIGNED = "anonymous_assigned"
    ANONYMOUS = "anonymous"


# Receiver parameter injected by colon-form methods
IMPLICIT_RECEIVER = "self"


@dataclass(frozen=True)
class FunctionDeclaration:
    """A recognized function definition.

    Attributes:
        index: Stable arena index within the file (source order)
        kind: Syntactic form
        path: Qualified name segments, empty for unbound anonymous functions
        parameters: Parameter names; methods start with the implicit receiver
        start: Position of the statement's first token
        end: Position of the body terminator
        start_token: Token index where the statement begins
        body: Block span of the function body
        parent: Arena index of the enclosing declaration, None at top level
        is_local: True when introduced with the ``local`` qualifier
    """

    index: int
    kind: FunctionKind
    path: tuple[str, ...]
    parameters: tuple[str, ...]
    start: Position
    end: Position
    start_token: int
    body: BlockSpan = field(repr=False, compare=True)
    parent: int | None = None
    is_local: bool = False

    @property
    def name(self) -> str:
        return self.path[-1] if self.path else ""

    @property
    def qualified_name(self) -> str:
        """Dotted name, with ``:`` before the last segment for methods."""
        if not self.path:
            return ""
        if self.kind is FunctionKind.TABLE_METHOD and len(self.path) > 1:
            return ".".join(self.path[:-1]) + ":" + self.path[-1]
        return ".".join(self.path)

    @property
    def explicit_parameters(self) -> tuple[str, ...]:
        """Parameters as written in the source (receiver removed for methods)."""
        if self.kind is FunctionKind.TABLE_METHOD:
            return self.parameters[1:]
        return self.parameters

    @property
    def signature(self) -> str:
        params = ", ".join(self.explicit_parameters)
        prefix = "local " if self.is_local else ""
        if self.kind in (FunctionKind.ANONYMOUS_ASSIGNED, FunctionKind.ANONYMOUS):
            binding = f"{prefix}{self.qualified_name} = " if self.path else ""
            return f"{binding}function({params})"
        return f"{prefix}function {self.qualified_name}({params})"

    def to_dict(self) -> dict[str, Any]:
        return {
            "index": self.index,
            "kind": self.kind.value,
            "path": list(self.path),
            "qualified_name": self.qualified_name,
            "parameters": list(self.parameters),
            "signature": self.signature,
            "start": self.start.to_dict(),
            "end": self.end.to_dict(),
            "parent": self.parent,
            "is_local": self.is_local,
        }


@dataclass(frozen=True)
class CommentLine:
    """One line of comment content with markers stripped.

    Attributes:
        line: 1-based source line number
        text: Content after the comment marker
    """

    line: int
    text: str


@dataclass(frozen=True)
class CommentBlock:
    """Contiguous comments directly preceding a declaration.

    Attributes:
        tokens: Comment tokens in source order
        first_token: Index of the first comment token
        last_token: Index of the last comment token
    """

    tokens: tuple[Token, ...]
    first_token: int
    last_token: int

    @property
    def start(self) -> Position:
        return self.tokens[0].position

    @property
    def end(self) -> Position:
        return self.tokens[-1].position

    @property
    def lines(self) -> tuple[str, ...]:
        """Raw comment source lines, markers included."""
        return tuple(line for token in self.tokens for line in token.text.split("\n"))

    def content_lines(self) -> list[CommentLine]:
        """Return comment content lines with per-line markers stripped.

        Line comments lose the leading ``--`` and a doc-style third dash
        before ``@``; ``--- item`` keeps its ``- item`` bullet. Block comments
        lose their ``--[=[`` opener and ``]=]`` closer; interior lines are
        returned unchanged.

        Returns:
            CommentLine values in source order, one per physical line.

        Example:
            >>> block.content_lines()[0].text
            ' @brief Adds numbers'
        """
        result: list[CommentLine] = []
        for token in self.tokens:
            line_no = token.position.line
            text = token.text
            if text.startswith("--[") and token.kind is TokenKind.BLOCK_COMMENT:
                level = text.index("[", 3) - 3
                body = text[4 + level : len(text) - 2 - level]
                for offset, part in enumerate(body.split("\n")):
                    result.append(CommentLine(line_no + offset, part.rstrip("\r")))
            else:
                result.append(CommentLine(line_no, _strip_line_marker(text).rstrip("\r")))
        return result


def _strip_line_marker(text: str) -> str:
    """Remove ``--`` and a doc-style third dash, keeping ``- item`` bullets.

    ``--- @brief`` and rule lines made only of dashes lose every dash;
    ``--- item`` keeps ``- item`` for bullet lists.
    """
    body = text[2:]
    if body.startswith("-@") or not body.strip("- \r"):
        return body.lstrip("-")
    if body.startswith("- @"):
        return body[1:]
    return body
