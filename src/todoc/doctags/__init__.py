"""
todoc Doc-Tag Parsers.

Two-level annotation language: ``@tag`` directives (tags.py) and the
``\\directive`` markup nested under ``@description`` (markup.py).
"""

from todoc.doctags.markup import MarkupParser, MarkupResult
from todoc.doctags.tags import DocParseResult, DocTagParser

__all__ = ["DocParseResult", "DocTagParser", "MarkupParser", "MarkupResult"]
