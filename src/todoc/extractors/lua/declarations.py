"""
Lua function declaration recognizer.

Walks block spans opened by ``function`` and classifies each one by the
syntactic form of its header. Headers are read from the significant
(non-trivia) token view, so whitespace, line breaks and comments between
header tokens never matter.

Accepted forms:
    function name(...)                GLOBAL_NAMED
    local function name(...)          LOCAL_NAMED
    function a.b.c(...)               TABLE_FIELD
    function a.b:c(...)               TABLE_METHOD (implicit self)
    [local] a.b = function(...)       ANONYMOUS_ASSIGNED
    { field = function(...) }         ANONYMOUS_ASSIGNED
    f(function(...) end)              ANONYMOUS
"""

import logging
from dataclasses import dataclass

from todoc.models import (
    DEFAULT_CONFIG,
    IMPLICIT_RECEIVER,
    BlockSpan,
    ExtractionConfig,
    FunctionDeclaration,
    FunctionKind,
    Token,
    TokenKind,
)


@dataclass(frozen=True)
class _Header:
    kind: FunctionKind
    path: tuple[str, ...]
    parameters: tuple[str, ...]
    start_token: int
    is_local: bool


class DeclarationRecognizer:
    """Recognizes function declarations in a tokenized Lua file.

    Attributes:
        tokens: Full token list
        config: Extraction configuration
        logger: Logger instance for diagnostics

    Example:
        ```python
        tokens = tokenize(code)
        recognizer = DeclarationRecognizer(tokens)
        declarations = recognizer.recognize(match_blocks(tokens))
        ```
    """

    def __init__(
        self,
        tokens: list[Token],
        config: ExtractionConfig | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.tokens = tokens
        self.config = config or DEFAULT_CONFIG
        self.logger = logger or logging.getLogger(__name__)

        # Significant token view: indexes into self.tokens, trivia removed
        self._code = [
            i
            for i, t in enumerate(tokens)
            if not t.is_trivia and t.kind is not TokenKind.END_OF_INPUT
        ]
        self._code_pos = {token_index: k for k, token_index in enumerate(self._code)}

    # ==================== PUBLIC API ====================

    def recognize(self, blocks: tuple[BlockSpan, ...]) -> tuple[FunctionDeclaration, ...]:
        """Recognize every function declaration in the block tree.

        Spans are visited in source order (pre-order). Function spans whose
        header parses are emitted; every span is descended into so nested
        functions are found too.

        Args:
            blocks: Top-level spans from match_blocks.

        Returns:
            Declarations in source order; ``index`` equals tuple position and
            ``parent`` refers to the nearest enclosing declaration.

        Raises:
            No exceptions - unparseable headers are skipped and logged.

        Example:
            >>> decls = recognizer.recognize(match_blocks(tokens))
            >>> [d.qualified_name for d in decls]
            ['add', 'A:add']
        """
        declarations: list[FunctionDeclaration] = []
        # Pre-order over an explicit stack; nesting depth is unbounded
        pending: list[tuple[BlockSpan, int | None]] = [(span, None) for span in reversed(blocks)]
        while pending:
            span, parent = pending.pop()
            enclosing = self._visit(span, parent, declarations)
            pending.extend((child, enclosing) for child in reversed(span.children))
        return tuple(declarations)

    # ==================== TRAVERSAL ====================

    def _visit(
        self,
        span: BlockSpan,
        parent: int | None,
        declarations: list[FunctionDeclaration],
    ) -> int | None:
        """Emit a declaration for a function span; return the parent for its children."""
        if span.keyword != "function":
            return parent

        header = self._parse_header(span)
        if header is None:
            self.logger.debug(
                f"Skipping unrecognized function header at line {span.opener.position.line}"
            )
            return parent
        if header.kind is FunctionKind.ANONYMOUS and not self.config.include_anonymous:
            return parent

        declaration = FunctionDeclaration(
            index=len(declarations),
            kind=header.kind,
            path=header.path,
            parameters=header.parameters,
            start=self.tokens[header.start_token].position,
            end=span.terminator.position,
            start_token=header.start_token,
            body=span,
            parent=parent,
            is_local=header.is_local,
        )
        declarations.append(declaration)
        return declaration.index

    # ==================== HEADER PARSING ====================

    def _at(self, k: int) -> Token | None:
        """Return the k-th significant token, or None when out of range."""
        if 0 <= k < len(self._code):
            return self.tokens[self._code[k]]
        return None

    def _parse_header(self, span: BlockSpan) -> _Header | None:
        """Parse the name path and parameter list following ``function``.

        Args:
            span: Function block span.

        Returns:
            Parsed header, or None if the tokens after ``function`` do not
            form a name path followed by a parenthesized parameter list.
        """
        k = self._code_pos[span.opener_index]
        j = k + 1
        token = self._at(j)
        if token is None:
            return None

        path: list[str] = []
        is_method = False
        if token.kind is TokenKind.IDENTIFIER:
            path.append(token.text)
            j += 1
            while self._is_separator(j, "."):
                path.append(self._at(j + 1).text)  # type: ignore[union-attr]
                j += 2
            if self._is_separator(j, ":"):
                path.append(self._at(j + 1).text)  # type: ignore[union-attr]
                j += 2
                is_method = True

        parameters = self._parse_parameters(j, span)
        if parameters is None:
            return None

        if not path:
            return self._classify_anonymous(k, parameters)

        previous = self._at(k - 1)
        is_local = previous is not None and previous.is_keyword("local")
        start_token = self._code[k - 1] if is_local else span.opener_index

        if is_method:
            kind = FunctionKind.TABLE_METHOD
            parameters = (IMPLICIT_RECEIVER, *parameters)
        elif len(path) > 1:
            kind = FunctionKind.TABLE_FIELD
        elif is_local:
            kind = FunctionKind.LOCAL_NAMED
        else:
            kind = FunctionKind.GLOBAL_NAMED

        return _Header(kind, tuple(path), parameters, start_token, is_local)

    def _is_separator(self, j: int, symbol: str) -> bool:
        separator = self._at(j)
        name = self._at(j + 1)
        return (
            separator is not None
            and separator.is_punct(symbol)
            and name is not None
            and name.kind is TokenKind.IDENTIFIER
        )

    def _parse_parameters(self, j: int, span: BlockSpan) -> tuple[str, ...] | None:
        """Collect parameter names from the parenthesized list starting at j.

        Tracks parenthesis depth and splits on commas at depth one. Each
        parameter is the concatenated text of its tokens, so ``...`` and
        other markers are kept as opaque names.

        Returns:
            Parameter names in order, or None if no balanced list follows.
        """
        token = self._at(j)
        if token is None or not token.is_punct("("):
            return None

        parameters: list[str] = []
        current: list[str] = []
        depth = 0
        while True:
            token = self._at(j)
            if token is None or self._code[j] >= span.terminator_index:
                return None
            if token.is_punct("("):
                depth += 1
                if depth > 1:
                    current.append(token.text)
            elif token.is_punct(")"):
                depth -= 1
                if depth == 0:
                    break
                current.append(token.text)
            elif token.is_punct(",") and depth == 1:
                parameters.append("".join(current))
                current = []
            else:
                current.append(token.text)
            j += 1

        if current or parameters:
            parameters.append("".join(current))
        return tuple(parameters)

    def _classify_anonymous(self, k: int, parameters: tuple[str, ...]) -> _Header:
        """Classify ``function(...)`` by the assignment target before it, if any."""
        function_token = self._code[k]
        unbound = _Header(FunctionKind.ANONYMOUS, (), parameters, function_token, False)

        equals = self._at(k - 1)
        if equals is None or not equals.is_punct("="):
            return unbound

        j = k - 2
        name = self._at(j)
        if name is None or name.kind is not TokenKind.IDENTIFIER:
            return unbound

        path = [name.text]
        while True:
            separator = self._at(j - 1)
            owner = self._at(j - 2)
            if (
                separator is not None
                and separator.is_punct(".")
                and owner is not None
                and owner.kind is TokenKind.IDENTIFIER
            ):
                path.insert(0, owner.text)
                j -= 2
            else:
                break

        before = self._at(j - 1)
        if before is not None and before.is_punct(".", ":", "]", ")"):
            # Indexed or computed target such as t[i].f = function() end
            return unbound

        is_local = before is not None and before.is_keyword("local")
        start_token = self._code[j - 1] if is_local else self._code[j]
        return _Header(
            FunctionKind.ANONYMOUS_ASSIGNED, tuple(path), parameters, start_token, is_local
        )


def recognize_declarations(
    tokens: list[Token],
    blocks: tuple[BlockSpan, ...],
    config: ExtractionConfig | None = None,
) -> tuple[FunctionDeclaration, ...]:
    """Recognize function declarations; see DeclarationRecognizer.recognize."""
    return DeclarationRecognizer(tokens, config).recognize(blocks)
