"""
todoc Extractors Package.

Language-specific documentation extractors. Each extractor implements the
BaseExtractor protocol; extractors are selected by language name or by
source file extension.
"""

import logging
from pathlib import PurePath

from todoc.extractors.base import BaseExtractor
from todoc.extractors.lua import LuaExtractor
from todoc.models import ExtractionConfig

# Languages with an extractor, keyed by language name
EXTRACTORS: dict[str, type[LuaExtractor]] = {
    "lua": LuaExtractor,
}

# File extension to language name; languages without an extractor are unsupported
EXTENSION_LANGUAGES = {
    "lua": "lua",
    "c": "c",
    "cpp": "cpp",
    "cc": "cpp",
    "rs": "rust",
    "py": "python",
}


def language_for_path(path: str) -> str | None:
    """Return the language name for a file path by extension, or None if unknown."""
    return EXTENSION_LANGUAGES.get(PurePath(path).suffix.lstrip(".").lower())


def get_extractor(
    language: str,
    config: ExtractionConfig | None = None,
    logger: logging.Logger | None = None,
) -> BaseExtractor | None:
    """Create the extractor for a language.

    Args:
        language: Language name (e.g. "lua").
        config: Extraction configuration passed to the extractor.
        logger: Logger passed to the extractor.

    Returns:
        Extractor instance, or None when the language is not supported.

    Example:
        >>> get_extractor("lua").get_language()
        'lua'
        >>> get_extractor("rust") is None
        True
    """
    extractor_class = EXTRACTORS.get(language)
    if extractor_class is None:
        return None
    return extractor_class(config=config, logger=logger)


__all__ = [
    "BaseExtractor",
    "EXTENSION_LANGUAGES",
    "EXTRACTORS",
    "LuaExtractor",
    "get_extractor",
    "language_for_path",
]
