"""
Base extractor protocol for documentation extraction.

Defines the interface that all language-specific extractors must implement.
Uses Protocol for structural typing (duck typing with type safety).
"""

from abc import abstractmethod
from typing import Protocol

from todoc.models import FileDocument


class BaseExtractor(Protocol):
    """Protocol defining documentation extractor interface.

    All language-specific extractors must implement this interface.
    Enables multi-language support while keeping one document model.

    The extractor is responsible for:
    1. Tokenizing source code
    2. Recognizing function declarations
    3. Associating and parsing doc comments
    4. Returning the per-file document model

    Examples:
        ```python
        class LuaExtractor:
            def extract(self, code: str | bytes, file_path: str = "") -> FileDocument:
                ...

            def get_language(self) -> str:
                return "lua"

        def process(extractor: BaseExtractor, code: str) -> FileDocument:
            return extractor.extract(code)
        ```
    """

    @abstractmethod
    def extract(self, code: str | bytes, file_path: str = "") -> FileDocument:
        """Extract documented functions from one source file.

        Args:
            code: Source text or raw bytes.
            file_path: Path recorded on the FileDocument and diagnostics.

        Returns:
            FileDocument with exported functions in declaration order.

        Raises:
            ExtractionError: On fatal problems (unterminated literal,
                unbalanced block, oversized input) for this file.

        Example:
            >>> document = extractor.extract(code, "src/module.lua")
            >>> [f.declaration.qualified_name for f in document.functions]
            ['M.add']
        """
        ...

    @abstractmethod
    def get_language(self) -> str:
        """Return the language identifier this extractor handles (e.g. "lua")."""
        ...
