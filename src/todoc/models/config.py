"""
Configuration models for todoc.

Defines extraction configuration and defaults.
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class ExtractionConfig:
    """Configuration for documentation extraction.

    Attributes:
        max_code_size: Maximum source size in bytes (5MB default)
        max_file_path_length: Maximum file path length
        include_anonymous: Emit unbound ``function() end`` expressions
        export_locals: Keep undocumented ``local`` declarations in the model
        bullet_markers: Characters accepted as bullet markers under ``\\list``
        file_extensions: Extensions picked up during file discovery
        max_workers: Worker threads for multi-file builds (1 = sequential)
    """

    # Size limits
    max_code_size: int = 5 * 1024 * 1024  # 5MB
    max_file_path_length: int = 4096

    # Declaration filtering
    include_anonymous: bool = True
    export_locals: bool = True

    # Markup
    bullet_markers: str = "-*+"

    # Discovery and batching
    file_extensions: tuple[str, ...] = field(default_factory=lambda: ("lua",))
    max_workers: int = 1

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary for serialization.

        Exports all configuration values as a plain dict for JSON output
        and logging.

        Returns:
            Dict with every config field.

        Example:
            >>> config = ExtractionConfig()
            >>> config.to_dict()["max_workers"]
            1
        """
        return {
            "max_code_size": self.max_code_size,
            "max_file_path_length": self.max_file_path_length,
            "include_anonymous": self.include_anonymous,
            "export_locals": self.export_locals,
            "bullet_markers": self.bullet_markers,
            "file_extensions": list(self.file_extensions),
            "max_workers": self.max_workers,
        }


# Default configuration instance
DEFAULT_CONFIG = ExtractionConfig()
