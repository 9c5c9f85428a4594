"""
Fatal extraction errors.

A fatal error aborts the pipeline for the file that raised it. Batch
builders catch ExtractionError per file and keep processing the others.
"""

from todoc.models.tokens import Position


class ExtractionError(Exception):
    """Base class for errors that abort a single file's extraction.

    Attributes:
        code: Stable error identifier used in reports
        message: Human-readable description
        position: Source position of the offending construct, if known
        file_path: Source file, filled in by the extractor
    """

    code = "extraction_error"

    def __init__(
        self,
        message: str,
        position: Position | None = None,
        file_path: str = "",
    ) -> None:
        self.message = message
        self.position = position
        self.file_path = file_path
        super().__init__(self._format())

    def _format(self) -> str:
        location = ""
        if self.position is not None:
            location = f"line {self.position.line}, column {self.position.column}: "
        prefix = f"{self.file_path}: " if self.file_path else ""
        return f"{prefix}{location}{self.message}"

    def with_file(self, file_path: str) -> "ExtractionError":
        """Attach the file path and refresh the exception message."""
        self.file_path = file_path
        self.args = (self._format(),)
        return self


class UnterminatedLiteral(ExtractionError):
    """String, long-bracket literal or block comment without a closer."""

    code = "unterminated_literal"


class UnbalancedBlock(ExtractionError):
    """Block opener without terminator, or terminator without opener."""

    code = "unbalanced_block"


class SourceTooLarge(ExtractionError):
    """Source exceeds the configured size limit."""

    code = "source_too_large"
