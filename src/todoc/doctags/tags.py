"""
Doc-tag parser.

First level of the annotation language. Recognizes ``@tag`` directives at
the start of comment lines and routes ``@description`` bodies to the
MarkupParser (second level).

Tags:
    @brief <text>
    @param <name> <type> <description...>
    @return <type> <description...>
    @description                  (markup until the next recognized tag)
    @note <text>
    @includes <a>, <b>
    @!all                         (exclude from the exported model)

Text before the first tag is the implicit brief. Unknown tags are kept
verbatim in DocEntry.passthrough and reported as UNKNOWN_TAG.
"""

import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass, replace

from todoc.doctags.markup import MarkupParser
from todoc.models import (
    DEFAULT_CONFIG,
    CommentLine,
    Diagnostic,
    DiagnosticCode,
    DocEntry,
    ExtractionConfig,
    ParamDoc,
    ReturnDoc,
)

# Tag at the start of a content line: @word or @!word
REGEX_TAG = re.compile(r"@(!?[A-Za-z_][A-Za-z0-9_]*)")

KNOWN_TAGS = frozenset({"brief", "param", "return", "description", "note", "includes", "!all"})

# Continuation targets for untagged lines
_IMPLICIT = "implicit"
_DESCRIPTION = "description"
_PASSTHROUGH = "passthrough"


@dataclass(frozen=True)
class DocParseResult:
    """Parsed DocEntry plus recoverable diagnostics."""

    entry: DocEntry
    diagnostics: tuple[Diagnostic, ...] = ()


class DocTagParser:
    """Parser for doc-tag comment blocks.

    Attributes:
        config: Extraction configuration
        markup_parser: Parser for ``@description`` bodies
        logger: Logger instance for diagnostics

    Examples:
        ```python
        parser = DocTagParser()
        result = parser.parse_text("@param x number first value")
        result.entry.params[0].type_name  # 'number'
        ```
    """

    def __init__(
        self,
        config: ExtractionConfig | None = None,
        markup_parser: MarkupParser | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.config = config or DEFAULT_CONFIG
        self.logger = logger or logging.getLogger(__name__)
        self.markup_parser = markup_parser or MarkupParser(self.config, self.logger)

    # ==================== PUBLIC API ====================

    def parse(self, lines: Sequence[CommentLine]) -> DocParseResult:
        """Parse comment content lines into a DocEntry.

        Walks the lines once as a small state machine. Each recognized tag
        sets the field that following untagged lines continue; ``@description``
        switches into markup collection until the next recognized tag.

        Args:
            lines: Comment lines with markers already stripped.

        Returns:
            DocParseResult holding the DocEntry and UNKNOWN_TAG,
            MALFORMED_PARAM_LINE and markup diagnostics.

        Raises:
            No exceptions - every problem is recoverable.

        Example:
            >>> result = parser.parse([CommentLine(1, " @!all")])
            >>> result.entry.exported
            False
        """
        brief: str | None = None
        params: list[ParamDoc] = []
        returns: list[ReturnDoc] = []
        note: str | None = None
        includes: list[str] = []
        passthrough: list[str] = []
        exported = True
        description_lines: list[CommentLine] = []
        diagnostics: list[Diagnostic] = []

        field: str | None = _IMPLICIT
        for line in lines:
            stripped = line.text.strip()
            match = REGEX_TAG.match(stripped)
            tag = match.group(1) if match else None

            if tag is not None and (tag in KNOWN_TAGS or field != _DESCRIPTION):
                rest = stripped[match.end() :].strip()  # type: ignore[union-attr]
                field = tag

                if tag == "brief":
                    brief = rest
                elif tag == "param":
                    params.append(self._parse_param(rest, line, diagnostics))
                elif tag == "return":
                    returns.append(self._parse_return(rest, line, diagnostics))
                elif tag == "description":
                    if rest:
                        description_lines.append(CommentLine(line.line, rest))
                elif tag == "note":
                    note = rest
                elif tag == "includes":
                    includes.extend(item.strip() for item in rest.split(",") if item.strip())
                    field = None
                elif tag == "!all":
                    exported = False
                    field = None
                else:
                    diagnostics.append(
                        Diagnostic(DiagnosticCode.UNKNOWN_TAG, f"Unknown tag '@{tag}'", line.line)
                    )
                    self.logger.debug(f"Unknown tag @{tag} at line {line.line}")
                    passthrough.append(stripped)
                    field = _PASSTHROUGH
                continue

            if field == _DESCRIPTION:
                description_lines.append(line)
                continue

            if not stripped:
                if field == _IMPLICIT and brief is None:
                    continue
                if field is None and description_lines:
                    description_lines.append(line)
                field = None
                continue

            if field == _IMPLICIT or field == "brief":
                brief = _join(brief, stripped)
            elif field == "param" and params:
                params[-1] = replace(params[-1], description=_join(params[-1].description, stripped))
            elif field == "return" and returns:
                returns[-1] = replace(
                    returns[-1], description=_join(returns[-1].description, stripped)
                )
            elif field == "note":
                note = _join(note, stripped)
            elif field == _PASSTHROUGH:
                passthrough.append(stripped)
            else:
                description_lines.append(line)

        markup = self.markup_parser.parse(description_lines)
        diagnostics.extend(markup.diagnostics)

        entry = DocEntry(
            brief=brief or None,
            params=tuple(params),
            returns=tuple(returns),
            description=markup.nodes,
            exported=exported,
            note=note or None,
            includes=tuple(includes),
            passthrough=tuple(passthrough),
        )
        return DocParseResult(entry, tuple(diagnostics))

    def parse_text(self, text: str, first_line: int = 1) -> DocParseResult:
        """Parse already-stripped comment text; lines are numbered from first_line."""
        lines = [
            CommentLine(first_line + offset, part) for offset, part in enumerate(text.split("\n"))
        ]
        return self.parse(lines)

    # ==================== FIELD PARSING ====================

    def _parse_param(
        self, rest: str, line: CommentLine, diagnostics: list[Diagnostic]
    ) -> ParamDoc:
        """Parse ``<name> <type> <description...>``; missing fields stay empty."""
        parts = rest.split(None, 2)
        if len(parts) < 2:
            missing = "name and type" if not parts else "type"
            diagnostics.append(
                Diagnostic(
                    DiagnosticCode.MALFORMED_PARAM_LINE,
                    f"@param missing {missing}",
                    line.line,
                )
            )
        return ParamDoc(
            name=parts[0] if parts else "",
            type_name=parts[1] if len(parts) > 1 else "",
            description=parts[2] if len(parts) > 2 else "",
        )

    def _parse_return(
        self, rest: str, line: CommentLine, diagnostics: list[Diagnostic]
    ) -> ReturnDoc:
        """Parse ``<type> <description...>``; a missing type is reported."""
        parts = rest.split(None, 1)
        if not parts:
            diagnostics.append(
                Diagnostic(DiagnosticCode.MALFORMED_PARAM_LINE, "@return missing type", line.line)
            )
        return ReturnDoc(
            type_name=parts[0] if parts else "",
            description=parts[1] if len(parts) > 1 else "",
        )


def _join(current: str | None, extra: str) -> str:
    return f"{current} {extra}" if current else extra
