"""
todoc Models.

Core data structures for documentation extraction: tokens, declarations,
documentation nodes, diagnostics and configuration.
"""

from todoc.models.config import (
    DEFAULT_CONFIG,
    ExtractionConfig,
)
from todoc.models.declarations import (
    IMPLICIT_RECEIVER,
    BlockSpan,
    CommentBlock,
    CommentLine,
    FunctionDeclaration,
    FunctionKind,
)
from todoc.models.diagnostics import (
    Diagnostic,
    DiagnosticCode,
)
from todoc.models.docs import (
    BulletList,
    Code,
    DescriptionNode,
    DocEntry,
    DocumentedFunction,
    DocumentModel,
    FileDocument,
    FileFailure,
    Formula,
    HTMLLink,
    ParamDoc,
    ReturnDoc,
    Text,
    node_to_dict,
)
from todoc.models.tokens import (
    Position,
    Token,
    TokenKind,
)

__all__ = [
    # Token models
    "Position",
    "Token",
    "TokenKind",
    # Declaration models
    "BlockSpan",
    "CommentBlock",
    "CommentLine",
    "FunctionDeclaration",
    "FunctionKind",
    "IMPLICIT_RECEIVER",
    # Documentation models
    "BulletList",
    "Code",
    "DescriptionNode",
    "DocEntry",
    "DocumentedFunction",
    "DocumentModel",
    "FileDocument",
    "FileFailure",
    "Formula",
    "HTMLLink",
    "ParamDoc",
    "ReturnDoc",
    "Text",
    "node_to_dict",
    # Diagnostics
    "Diagnostic",
    "DiagnosticCode",
    # Configuration
    "ExtractionConfig",
    "DEFAULT_CONFIG",
]
