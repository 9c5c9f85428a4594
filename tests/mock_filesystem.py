"""Mock filesystem adapter for isolated unit testing.

Provides an in-memory filesystem implementation that enables testing
source discovery and output writing without actual I/O or temporary
directories.

Usage:
    >>> from tests.mock_filesystem import MockFilesystemAdapter
    >>> fs = MockFilesystemAdapter()
    >>> fs.add_file(Path('src/init.lua'), 'function f() end')
    >>> fs.read_bytes(Path('src/init.lua'))
    b'function f() end'
"""

from __future__ import annotations

import fnmatch
from pathlib import Path


class MockFilesystemAdapter:
    """Mock filesystem adapter for isolated unit testing.

    Stores files in memory dictionaries instead of actual filesystem.
    Implements same interface as DefaultFilesystemAdapter.

    Attributes:
        files: Dict mapping Path to file content (str or bytes).
        directories: Set of known directory paths.

    Example:
        >>> fs = MockFilesystemAdapter()
        >>> fs.add_file(Path('lib/a.lua'), 'local x = 1')
        >>> fs.is_dir(Path('lib'))
        True
    """

    def __init__(self) -> None:
        """Initialize empty mock filesystem.

        Example:
            >>> fs = MockFilesystemAdapter()
            >>> assert len(fs.files) == 0
        """
        self.files: dict[Path, str | bytes] = {}
        self.directories: set[Path] = set()

    def __repr__(self) -> str:
        return f"MockFilesystemAdapter(files={len(self.files)}, dirs={len(self.directories)})"

    def add_file(self, path: Path, content: str | bytes) -> None:
        """Store a file and register all of its parent directories.

        Args:
            path: File path.
            content: Text or raw bytes.

        Example:
            >>> fs.add_file(Path('a/b/c.lua'), '')
            >>> Path('a/b') in fs.directories  # True
        """
        self.files[path] = content
        self.directories.update(path.parents)

    def exists(self, path: Path) -> bool:
        """Check if path exists in mock filesystem.

        Args:
            path: Path to check.

        Returns:
            True if in files or directories, False otherwise.

        Example:
            >>> fs.files[Path('a.lua')] = ''
            >>> fs.exists(Path('a.lua'))  # True
        """
        return path in self.files or path in self.directories

    def is_dir(self, path: Path) -> bool:
        return path in self.directories

    def glob(self, path: Path, pattern: str) -> list[Path]:
        """Find files matching pattern in mock filesystem.

        A leading ``**/`` matches files at any depth below path; without it
        only direct children match, as with pathlib.

        Args:
            path: Base path to search from.
            pattern: Glob pattern to match (e.g. '*.lua', '**/*.lua').

        Returns:
            Sorted list of matching paths from files dict.

        Raises:
            No exceptions raised - returns empty list for unmatched.

        Example:
            >>> fs.add_file(Path('src/a.lua'), '')
            >>> fs.glob(Path('src'), '*.lua')  # [Path('src/a.lua')]
        """
        recursive = pattern.startswith("**/")
        name_pattern = pattern.removeprefix("**/")
        results = []
        for file_path in self.files:
            try:
                relative = file_path.relative_to(path)
            except ValueError:
                continue
            if not recursive and len(relative.parts) > 1:
                continue
            if fnmatch.fnmatch(relative.name, name_pattern):
                results.append(file_path)
        return sorted(results)

    def read_bytes(self, path: Path) -> bytes:
        """Read file content as bytes.

        Raises:
            FileNotFoundError: If path not in files dict.
        """
        if path not in self.files:
            raise FileNotFoundError(f"File not found: {path}")
        content = self.files[path]
        return content if isinstance(content, bytes) else content.encode("utf-8")

    def write_text(self, path: Path, content: str) -> None:
        """Write text content to mock filesystem.

        Args:
            path: Path key for files dict.
            content: String to store.

        Example:
            >>> fs.write_text(Path('docs/api.md'), '# api')
        """
        self.add_file(path, content)
