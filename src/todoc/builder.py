"""
Model builder.

Pairs recognized declarations with their parsed documentation, applies
export suppression, and merges per-file results into the ordered
DocumentModel consumed by renderers.
"""

import logging
from collections.abc import Iterable, Mapping, Sequence

from todoc.models import (
    DEFAULT_CONFIG,
    Diagnostic,
    DocEntry,
    DocumentedFunction,
    DocumentModel,
    ExtractionConfig,
    FileDocument,
    FileFailure,
    FunctionDeclaration,
)

logger = logging.getLogger(__name__)


def assemble_file_document(
    path: str,
    declarations: Sequence[FunctionDeclaration],
    docs: Mapping[int, DocEntry],
    diagnostics: Iterable[Diagnostic] = (),
    config: ExtractionConfig | None = None,
) -> FileDocument:
    """Assemble the document model for one file.

    Every declaration becomes a DocumentedFunction in declaration order.
    Entries whose DocEntry has ``exported=False`` (``@!all``) are dropped;
    declarations without a comment keep ``doc=None``. When
    ``config.export_locals`` is False, local declarations without explicit
    documentation are dropped too. The full declaration arena is kept on the
    FileDocument so suppressed declarations remain addressable by index.

    Args:
        path: Source file path.
        declarations: Declaration arena in source order.
        docs: DocEntry per declaration index (absent = undocumented).
        diagnostics: Recoverable problems found in the file.
        config: Extraction configuration. Defaults to DEFAULT_CONFIG.

    Returns:
        Immutable FileDocument.

    Raises:
        No exceptions raised.

    Example:
        >>> doc = assemble_file_document("a.lua", decls, {0: DocEntry(exported=False)})
        >>> len(doc.functions) == len(decls) - 1
        True
    """
    config = config or DEFAULT_CONFIG
    functions: list[DocumentedFunction] = []
    for declaration in declarations:
        entry = docs.get(declaration.index)
        if entry is not None and not entry.exported:
            logger.debug(f"Suppressed {declaration.qualified_name or '<anonymous>'} in {path}")
            continue
        if declaration.is_local and entry is None and not config.export_locals:
            continue
        functions.append(DocumentedFunction(declaration, entry))

    return FileDocument(
        path=path,
        functions=tuple(functions),
        declarations=tuple(declarations),
        diagnostics=tuple(d.with_file(path) for d in diagnostics),
    )


def merge_file_documents(
    documents: Iterable[FileDocument],
    failures: Iterable[FileFailure] = (),
) -> DocumentModel:
    """Merge per-file results into a DocumentModel in path order.

    Sorting by path makes the model independent of the order in which
    workers finished.
    """
    return DocumentModel(
        files=tuple(sorted(documents, key=lambda d: d.path)),
        failures=tuple(sorted(failures, key=lambda f: f.path)),
    )
