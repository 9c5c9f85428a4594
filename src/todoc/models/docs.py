"""
Documentation models.

Defines the parsed documentation of a single declaration (DocEntry), the
closed set of description node kinds, and the per-file and multi-file
document model handed to renderers.
"""

from dataclasses import dataclass
from typing import Any

from todoc.models.declarations import FunctionDeclaration
from todoc.models.diagnostics import Diagnostic
from todoc.models.tokens import Position


@dataclass(frozen=True)
class Text:
    """Plain paragraph."""

    content: str


@dataclass(frozen=True)
class Code:
    """Verbatim code block with optional language hint."""

    content: str
    language: str | None = None


@dataclass(frozen=True)
class Formula:
    """Verbatim math formula; ``block`` is True for multi-line bodies."""

    content: str
    block: bool = False


@dataclass(frozen=True)
class BulletList:
    """Bullet list items in order."""

    items: tuple[str, ...] = ()


@dataclass(frozen=True)
class HTMLLink:
    """Hyperlink with optional label."""

    url: str
    label: str | None = None


# Closed set of description node kinds, matched exhaustively by renderers
DescriptionNode = Text | Code | Formula | BulletList | HTMLLink


def node_to_dict(node: DescriptionNode) -> dict[str, Any]:
    """Serialize a description node to a tagged dict.

    Args:
        node: Any DescriptionNode variant.

    Returns:
        Dict with a ``type`` discriminator plus the node's fields.

    Raises:
        TypeError: If node is not a DescriptionNode variant.

    Example:
        >>> node_to_dict(Text("hello"))
        {'type': 'text', 'content': 'hello'}
    """
    if isinstance(node, Text):
        return {"type": "text", "content": node.content}
    if isinstance(node, Code):
        return {"type": "code", "content": node.content, "language": node.language}
    if isinstance(node, Formula):
        return {"type": "formula", "content": node.content, "block": node.block}
    if isinstance(node, BulletList):
        return {"type": "bullet_list", "items": list(node.items)}
    if isinstance(node, HTMLLink):
        return {"type": "html_link", "url": node.url, "label": node.label}
    raise TypeError(f"Unknown description node: {type(node).__name__}")


@dataclass(frozen=True)
class ParamDoc:
    """Documented parameter (``@param name type description``)."""

    name: str
    type_name: str = ""
    description: str = ""


@dataclass(frozen=True)
class ReturnDoc:
    """Documented return value (``@return type description``), positional."""

    type_name: str = ""
    description: str = ""


@dataclass(frozen=True)
class DocEntry:
    """Parsed documentation for one declaration.

    Attributes:
        brief: One-line summary (explicit ``@brief`` or implicit first text)
        params: ``@param`` entries in encounter order
        returns: ``@return`` entries in encounter order
        description: Nodes parsed from ``@description`` markup
        exported: False when ``@!all`` is present
        note: ``@note`` text
        includes: ``@includes`` items
        passthrough: Raw lines of unrecognized tags, preserved verbatim
    """

    brief: str | None = None
    params: tuple[ParamDoc, ...] = ()
    returns: tuple[ReturnDoc, ...] = ()
    description: tuple[DescriptionNode, ...] = ()
    exported: bool = True
    note: str | None = None
    includes: tuple[str, ...] = ()
    passthrough: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "brief": self.brief,
            "params": [
                {"name": p.name, "type_name": p.type_name, "description": p.description}
                for p in self.params
            ],
            "returns": [
                {"type_name": r.type_name, "description": r.description} for r in self.returns
            ],
            "description": [node_to_dict(node) for node in self.description],
            "exported": self.exported,
            "note": self.note,
            "includes": list(self.includes),
            "passthrough": list(self.passthrough),
        }


@dataclass(frozen=True)
class DocumentedFunction:
    """A declaration paired with its optional documentation."""

    declaration: FunctionDeclaration
    doc: DocEntry | None = None

    @property
    def is_documented(self) -> bool:
        return self.doc is not None

    def to_dict(self) -> dict[str, Any]:
        return {
            "declaration": self.declaration.to_dict(),
            "doc": self.doc.to_dict() if self.doc is not None else None,
        }


@dataclass(frozen=True)
class FileDocument:
    """Document model for a single source file.

    Attributes:
        path: Source file path
        functions: Exported documented functions in declaration order
        declarations: Arena of every recognized declaration, indexed by
            FunctionDeclaration.index (includes suppressed ones)
        diagnostics: Recoverable problems found in this file
    """

    path: str
    functions: tuple[DocumentedFunction, ...] = ()
    declarations: tuple[FunctionDeclaration, ...] = ()
    diagnostics: tuple[Diagnostic, ...] = ()

    def declaration(self, index: int) -> FunctionDeclaration:
        return self.declarations[index]

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": self.path,
            "functions": [f.to_dict() for f in self.functions],
            "diagnostics": [d.to_dict() for d in self.diagnostics],
        }


@dataclass(frozen=True)
class FileFailure:
    """A file whose pipeline aborted with a fatal error."""

    path: str
    code: str
    message: str
    position: Position | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": self.path,
            "code": self.code,
            "message": self.message,
            "position": self.position.to_dict() if self.position else None,
        }


@dataclass(frozen=True)
class DocumentModel:
    """Documentation for a batch of files, ordered by path.

    Attributes:
        files: Successfully processed files
        failures: Files that failed with a fatal error
    """

    files: tuple[FileDocument, ...] = ()
    failures: tuple[FileFailure, ...] = ()

    @property
    def diagnostics(self) -> tuple[Diagnostic, ...]:
        return tuple(d for f in self.files for d in f.diagnostics)

    @property
    def functions(self) -> tuple[DocumentedFunction, ...]:
        return tuple(fn for f in self.files for fn in f.functions)

    def to_dict(self) -> dict[str, Any]:
        return {
            "files": [f.to_dict() for f in self.files],
            "failures": [f.to_dict() for f in self.failures],
        }
