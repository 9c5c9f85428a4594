"""Version information for todoc."""

__version__ = "0.1.0"
__version_date__ = "2026-10-16"

__title__ = "todoc"
__description__ = "API documentation extractor for tagged comment blocks in Lua sources"

__author__ = "LiZhuoran"

__license__ = "MIT"
__copyright__ = "Copyright 2026 LiZhuoran"

__all__ = [
    "__version__",
    "__version_date__",
    "__title__",
    "__description__",
    "__author__",
    "__license__",
    "__copyright__",
]
