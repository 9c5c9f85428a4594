"""
todoc Renderers.

Presentation formats for the document model.
"""

from todoc.renderers.markdown import MarkdownRenderer

__all__ = ["MarkdownRenderer"]
