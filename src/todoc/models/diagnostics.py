"""
Diagnostic models for recoverable extraction problems.

Recoverable problems never change control flow; they are accumulated
alongside the document model so tooling can report them.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any


class DiagnosticCode(Enum):
    """Recoverable problem categories.

    Attributes:
        UNKNOWN_TAG: Unrecognized top-level ``@word`` directive
        UNKNOWN_MARKUP: Unrecognized ``\\word`` directive in a description
        MALFORMED_PARAM_LINE: ``@param``/``@return`` missing a required field
        UNBALANCED_MARKUP: ``\\code{``/``\\formula{`` body without closing brace
    """

    UNKNOWN_TAG = "unknown_tag"
    UNKNOWN_MARKUP = "unknown_markup"
    MALFORMED_PARAM_LINE = "malformed_param_line"
    UNBALANCED_MARKUP = "unbalanced_markup"


@dataclass(frozen=True)
class Diagnostic:
    """A recoverable problem found while parsing documentation.

    Attributes:
        code: Problem category
        message: Human-readable description
        line: 1-based source line, None when unknown
        file_path: Source file, empty until attached to a file
    """

    code: DiagnosticCode
    message: str
    line: int | None = None
    file_path: str = ""

    def with_file(self, file_path: str) -> "Diagnostic":
        return replace(self, file_path=file_path)

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code.value,
            "message": self.message,
            "line": self.line,
            "file_path": self.file_path,
        }

    def __str__(self) -> str:
        location = f"{self.file_path}:{self.line}" if self.line is not None else self.file_path
        return f"{location}: {self.code.value}: {self.message}" if location else self.message
