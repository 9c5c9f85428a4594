"""
Lua documentation extractor.

Runs the per-file pipeline:
    Tokenizer → Block Matcher → Declaration Recognizer →
    Comment Associator → Doc-Tag Parser → Model Builder

Each call is independent and keeps no state between files, so one
extractor instance can be shared by parallel workers.
"""

import logging

from todoc.builder import assemble_file_document
from todoc.doctags import DocTagParser
from todoc.errors import ExtractionError, SourceTooLarge
from todoc.extractors.lua.blocks import match_blocks
from todoc.extractors.lua.comments import associate_comment
from todoc.extractors.lua.declarations import DeclarationRecognizer
from todoc.extractors.lua.lexer import LuaLexer
from todoc.models import (
    DEFAULT_CONFIG,
    Diagnostic,
    DocEntry,
    ExtractionConfig,
    FileDocument,
)


class LuaExtractor:
    """Lua documentation extractor.

    Attributes:
        config: Extraction configuration
        logger: Logger instance for diagnostics
        tag_parser: Doc-tag parser shared across files

    Examples:
        ```python
        extractor = LuaExtractor()
        document = extractor.extract(code, "example.lua")
        for fn in document.functions:
            print(fn.declaration.signature, fn.doc.brief if fn.doc else "")
        ```
    """

    def __init__(
        self,
        config: ExtractionConfig | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        """Initialize Lua extractor with configuration.

        Args:
            config: Extraction configuration. Defaults to DEFAULT_CONFIG.
            logger: Logger instance. Defaults to module logger.

        Example:
            >>> extractor = LuaExtractor()
            >>> extractor = LuaExtractor(config=ExtractionConfig(include_anonymous=False))
        """
        self.config = config or DEFAULT_CONFIG
        self.logger = logger or logging.getLogger(__name__)
        self.tag_parser = DocTagParser(self.config, logger=self.logger)

    def get_language(self) -> str:
        """Return 'lua'."""
        return "lua"

    # ==================== PUBLIC API ====================

    def extract(self, code: str | bytes, file_path: str = "") -> FileDocument:
        """Extract documented functions from Lua source.

        Tokenizes the source, matches blocks, recognizes declarations, then
        parses the comment block directly above each declaration. Entries
        marked ``@!all`` are recognized but left out of ``functions``.

        Args:
            code: Lua source text or raw bytes.
            file_path: Path recorded on the FileDocument and diagnostics.

        Returns:
            FileDocument with exported functions in declaration order, the
            full declaration arena, and recoverable diagnostics.

        Raises:
            SourceTooLarge: If code exceeds config.max_code_size.
            UnterminatedLiteral: If a string, long bracket or block comment
                is not closed.
            UnbalancedBlock: If block openers and terminators do not pair up.

        Example:
            >>> document = LuaExtractor().extract("function add(x, y) end", "a.lua")
            >>> document.functions[0].declaration.parameters
            ('x', 'y')
        """
        if len(code) > self.config.max_code_size:
            max_kb = self.config.max_code_size // 1024
            raise SourceTooLarge(f"Code too large (max {max_kb}KB)", file_path=file_path)

        try:
            tokens = LuaLexer(code).tokenize()
            blocks = match_blocks(tokens)
        except ExtractionError as e:
            e.with_file(file_path)
            raise

        recognizer = DeclarationRecognizer(tokens, self.config, self.logger)
        declarations = recognizer.recognize(blocks)

        docs: dict[int, DocEntry] = {}
        diagnostics: list[Diagnostic] = []
        for declaration in declarations:
            comment = associate_comment(tokens, declaration)
            if comment is None:
                continue
            result = self.tag_parser.parse(comment.content_lines())
            docs[declaration.index] = result.entry
            diagnostics.extend(result.diagnostics)

        document = assemble_file_document(file_path, declarations, docs, diagnostics, self.config)
        self.logger.debug(
            f"{file_path or '<source>'}: {len(declarations)} declarations, "
            f"{len(document.functions)} exported, {len(diagnostics)} diagnostics"
        )
        return document
