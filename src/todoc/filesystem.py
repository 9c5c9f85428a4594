"""
Filesystem abstraction layer for testable operations.

Provides Protocol-based dependency injection so source discovery and
output writing can be unit tested without touching the real filesystem.

Usage:
    ```python
    # Production use
    fs = DefaultFilesystemAdapter()
    sources = fs.glob(Path("src"), "**/*.lua")
    code = fs.read_bytes(sources[0])

    # Testing use
    mock_fs = MockFilesystemAdapter()
    mock_fs.files[Path("a.lua")] = "function f() end"
    ```
"""

from pathlib import Path
from typing import Protocol


class FilesystemAdapter(Protocol):
    """Protocol defining filesystem operations for dependency injection.

    Implementations must provide all methods with matching signatures.
    Use Protocol for structural typing (duck typing with type safety).
    """

    def exists(self, path: Path) -> bool:
        """Check if file or directory exists at path.

        Args:
            path: Path to check for existence.

        Returns:
            True if path exists, False otherwise.

        Raises:
            No exceptions - returns False for inaccessible paths.

        Example:
            >>> if fs.exists(Path("init.lua")):
            ...     code = fs.read_bytes(Path("init.lua"))
        """
        ...

    def is_dir(self, path: Path) -> bool:
        """Return True if path is an existing directory."""
        ...

    def glob(self, path: Path, pattern: str) -> list[Path]:
        """Find all files matching glob pattern in directory.

        Supports * (any chars), ? (single char), ** (recursive). Used for
        source discovery by the CLI.

        Args:
            path: Base directory to search from.
            pattern: Glob pattern (e.g., '*.lua', '**/*.lua').

        Returns:
            Sorted list of matching file paths. Empty list if no matches.

        Raises:
            PermissionError: If path is not readable.

        Example:
            >>> lua_files = fs.glob(Path("src"), "**/*.lua")
        """
        ...

    def read_bytes(self, path: Path) -> bytes:
        """Read the whole file as bytes.

        Sources are read once and the handle released before extraction
        starts; bytes keep the token round-trip lossless for any encoding.

        Raises:
            FileNotFoundError: If path does not exist.
        """
        ...

    def write_text(self, path: Path, content: str) -> None:
        """Write string to file as UTF-8, creating parent directories.

        Args:
            path: Output file path.
            content: Text to write.

        Raises:
            PermissionError: If path not writable.

        Example:
            >>> fs.write_text(Path("docs/api.md"), markdown)
        """
        ...


class DefaultFilesystemAdapter:  # pragma: no cover
    """Production filesystem adapter using pathlib.

    Implements FilesystemAdapter Protocol with real file I/O while the CLI
    stays testable with MockFilesystemAdapter.

    Example:
        >>> fs = DefaultFilesystemAdapter()
        >>> fs.glob(Path("."), "*.lua")
    """

    def __repr__(self) -> str:
        return "DefaultFilesystemAdapter()"

    def exists(self, path: Path) -> bool:
        return path.exists()

    def is_dir(self, path: Path) -> bool:
        return path.is_dir()

    def glob(self, path: Path, pattern: str) -> list[Path]:
        return sorted(p for p in path.glob(pattern) if p.is_file())

    def read_bytes(self, path: Path) -> bytes:
        return path.read_bytes()

    def write_text(self, path: Path, content: str) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
