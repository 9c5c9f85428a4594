"""
Description markup parser.

Parses the body collected under ``@description`` into typed description
nodes. The input is pre-split into comment lines; each line either starts
with a ``\\directive`` or continues the most recent open node.

Directives:
    \\text <text>                 Text paragraph (open for continuation)
    \\code{<body>}                Code block, brace-matched across lines
    \\code[<lang>]{<body>}        Code block with language hint
    \\code <text>                 Code block open for continuation lines
    \\formula{<body>}             Formula, brace-matched; multi-line = block
    \\list [item]                 Bullet list; following bullet lines are items
    \\html <url> [label]          Hyperlink

Brace-matched bodies are scanned character by character with a depth
counter, so ``\\code{local t = {a = "end"}}`` keeps its inner braces.
"""

import logging
import re
import textwrap
from collections.abc import Sequence
from dataclasses import dataclass, replace

from todoc.models import (
    DEFAULT_CONFIG,
    BulletList,
    Code,
    CommentLine,
    DescriptionNode,
    Diagnostic,
    DiagnosticCode,
    ExtractionConfig,
    Formula,
    HTMLLink,
    Text,
)

# Directive at the start of a markup line: backslash followed by a word
REGEX_DIRECTIVE = re.compile(r"\\([A-Za-z]+)(?=$|[\s{\[])")


@dataclass(frozen=True)
class MarkupResult:
    """Nodes and recoverable diagnostics from one description body."""

    nodes: tuple[DescriptionNode, ...] = ()
    diagnostics: tuple[Diagnostic, ...] = ()


@dataclass
class _Braced:
    segments: list[str]
    trailing: str
    next_index: int
    closed: bool


class MarkupParser:
    """Recursive-descent parser over a stream of markup lines.

    Attributes:
        config: Extraction configuration (bullet markers)
        logger: Logger instance for diagnostics

    Example:
        >>> result = MarkupParser().parse([CommentLine(1, "\\\\text hello")])
        >>> result.nodes
        (Text(content='hello'),)
    """

    def __init__(
        self,
        config: ExtractionConfig | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.config = config or DEFAULT_CONFIG
        self.logger = logger or logging.getLogger(__name__)

    def parse(self, lines: Sequence[CommentLine]) -> MarkupResult:
        """Parse markup lines into description nodes.

        Lines without a directive extend the open Text node (joined with a
        space) or Code node (joined with a newline); with no open node they
        start a new Text node. A blank line closes the open node. Unknown
        directives are kept as Text holding the raw line.

        Args:
            lines: Comment lines under ``@description``, markers stripped.

        Returns:
            MarkupResult with nodes in order and any UNKNOWN_MARKUP or
            UNBALANCED_MARKUP diagnostics.

        Raises:
            No exceptions - malformed markup degrades to diagnostics.

        Example:
            >>> lines = [CommentLine(1, "\\\\code{if x then {} end}")]
            >>> MarkupParser().parse(lines).nodes[0].content
            'if x then {} end'
        """
        nodes: list[DescriptionNode] = []
        diagnostics: list[Diagnostic] = []
        open_index: int | None = None
        open_indent = 0

        i = 0
        while i < len(lines):
            line = lines[i]
            stripped = line.text.strip()

            if not stripped:
                open_index = None
                i += 1
                continue

            match = REGEX_DIRECTIVE.match(stripped)
            if match is None:
                if open_index is not None:
                    nodes[open_index] = self._continue(nodes[open_index], line.text, open_indent)
                else:
                    nodes.append(Text(stripped))
                    open_index = len(nodes) - 1
                i += 1
                continue

            directive = match.group(1)
            rest = stripped[match.end() :]
            open_index = None

            if directive == "text":
                nodes.append(Text(rest.strip()))
                open_index = len(nodes) - 1
                i += 1
            elif directive in ("code", "formula"):
                i, opened = self._parse_verbatim(directive, rest, lines, i, nodes, diagnostics)
                if opened:
                    open_index = len(nodes) - 1
                    open_indent = _indent_of(line.text)
            elif directive == "list":
                i = self._parse_list(rest, lines, i, nodes)
            elif directive == "html":
                parts = rest.split(None, 1)
                url = parts[0] if parts else ""
                label = parts[1].strip() if len(parts) > 1 else None
                nodes.append(HTMLLink(url, label))
                i += 1
            else:
                diagnostics.append(
                    Diagnostic(
                        DiagnosticCode.UNKNOWN_MARKUP,
                        f"Unknown markup directive '\\{directive}'",
                        line.line,
                    )
                )
                self.logger.debug(f"Unknown markup directive \\{directive} at line {line.line}")
                nodes.append(Text(stripped))
                i += 1

        return MarkupResult(tuple(nodes), tuple(diagnostics))

    # ==================== DIRECTIVES ====================

    def _parse_verbatim(
        self,
        directive: str,
        rest: str,
        lines: Sequence[CommentLine],
        i: int,
        nodes: list[DescriptionNode],
        diagnostics: list[Diagnostic],
    ) -> tuple[int, bool]:
        """Parse ``\\code``/``\\formula`` starting at line i.

        Returns:
            Index of the next unconsumed line and whether the new node stays
            open for continuation lines (unbraced ``\\code``).
        """
        language: str | None = None
        if directive == "code" and rest.startswith("["):
            close = rest.find("]")
            if close > 0:
                language = rest[1:close].strip() or None
                rest = rest[close + 1 :]

        body = rest.lstrip()
        if not body.startswith("{"):
            if directive == "code":
                nodes.append(Code(body.strip(), language))
                return i + 1, True
            nodes.append(Formula(body.strip()))
            return i + 1, False

        braced = _collect_braced(lines, i, body)
        if not braced.closed:
            diagnostics.append(
                Diagnostic(
                    DiagnosticCode.UNBALANCED_MARKUP,
                    f"'\\{directive}{{' body has no closing brace",
                    lines[i].line,
                )
            )

        content = _join_segments(braced.segments)
        if directive == "code":
            nodes.append(Code(content, language))
        else:
            nodes.append(Formula(content, block=len(braced.segments) > 1))

        trailing = braced.trailing.strip()
        if trailing:
            nodes.append(Text(trailing))
        return braced.next_index, False

    def _parse_list(
        self,
        rest: str,
        lines: Sequence[CommentLine],
        i: int,
        nodes: list[DescriptionNode],
    ) -> int:
        """Collect bullet items following ``\\list``; returns the next line index."""
        markers = self.config.bullet_markers
        items: list[str] = []
        first = rest.strip()
        if first:
            items.append(first[1:].strip() if first[0] in markers else first)

        i += 1
        while i < len(lines):
            stripped = lines[i].text.strip()
            if not stripped or stripped[0] not in markers:
                break
            items.append(stripped[1:].strip())
            i += 1

        nodes.append(BulletList(tuple(items)))
        return i

    @staticmethod
    def _continue(node: DescriptionNode, raw: str, indent: int) -> DescriptionNode:
        if isinstance(node, Code):
            extra = _strip_indent(raw.rstrip(), indent)
            content = f"{node.content}\n{extra}" if node.content else extra
            return replace(node, content=content)
        if isinstance(node, Text):
            extra = raw.strip()
            content = f"{node.content} {extra}" if node.content else extra
            return replace(node, content=content)
        return node


def _collect_braced(lines: Sequence[CommentLine], i: int, text: str) -> _Braced:
    """Scan a brace-matched body starting at the ``{`` that opens ``text``.

    The first line is scanned from ``text`` (already stripped); later lines
    are scanned raw so indentation inside the body survives.
    """
    depth = 0
    segments: list[str] = []
    pos = 0
    segment_start = 1
    k = i
    while True:
        while pos < len(text):
            c = text[pos]
            if c == "{":
                depth += 1
            elif c == "}":
                depth -= 1
                if depth == 0:
                    segments.append(text[segment_start:pos])
                    return _Braced(segments, text[pos + 1 :], k + 1, True)
            pos += 1
        segments.append(text[segment_start:])
        k += 1
        if k >= len(lines):
            return _Braced(segments, "", k, False)
        text = lines[k].text
        pos = 0
        segment_start = 0


def _join_segments(segments: list[str]) -> str:
    """Build verbatim content from per-line body segments.

    A single-line body is returned exactly. Multi-line bodies drop blank
    edge lines and are dedented after the first line.
    """
    if len(segments) == 1:
        return segments[0]

    head, *tail = segments
    body = textwrap.dedent("\n".join(tail)).split("\n")
    result = ([head.strip()] if head.strip() else []) + [line.rstrip() for line in body]
    while result and not result[-1].strip():
        result.pop()
    return "\n".join(result)


def _indent_of(text: str) -> int:
    return len(text) - len(text.lstrip())


def _strip_indent(text: str, indent: int) -> str:
    prefix = len(text) - len(text.lstrip())
    return text[min(prefix, indent) :]
