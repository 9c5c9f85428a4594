"""Command-line interface for todoc.

Collects Lua sources, extracts their documentation and writes the result
as Markdown or JSON.

Usage:
    todoc init.lua lib/           Extract given files and directories
    todoc --all --recursive       Extract every source under the current directory
    todoc -o docs/api.md src/     Write Markdown to a file
    todoc --format json src/      Emit the document model as JSON
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from todoc.__version__ import __version__
from todoc.filesystem import DefaultFilesystemAdapter, FilesystemAdapter
from todoc.models import DEFAULT_CONFIG, DocumentModel, ExtractionConfig
from todoc.pipeline import build_document_model
from todoc.renderers import MarkdownRenderer

OUTPUT_FORMATS = ("markdown", "json")


def collect_sources(
    paths: list[Path],
    recursive: bool,
    fs: FilesystemAdapter,
    extensions: tuple[str, ...] = DEFAULT_CONFIG.file_extensions,
) -> list[Path]:
    """Expand files and directories into the list of source files.

    Files are taken as given whatever their extension; directories are
    searched for the configured extensions, recursively with ``recursive``.
    Missing paths are reported on stderr and skipped.

    Args:
        paths: Files and directories from the command line.
        recursive: Descend into subdirectories.
        fs: Filesystem adapter.
        extensions: Extensions picked up inside directories.

    Returns:
        Unique source paths in discovery order.

    Raises:
        No exceptions - missing paths are reported and skipped.

    Example:
        >>> collect_sources([Path("src")], recursive=True, fs=fs)
        [PosixPath('src/init.lua'), PosixPath('src/util/str.lua')]
    """
    found: list[Path] = []
    for path in paths:
        if not fs.exists(path):
            print(f"File not found: {path}", file=sys.stderr)
            continue
        if fs.is_dir(path):
            prefix = "**/" if recursive else ""
            for ext in extensions:
                found.extend(fs.glob(path, f"{prefix}*.{ext}"))
        else:
            found.append(path)
    return list(dict.fromkeys(found))


def read_sources(paths: list[Path], fs: FilesystemAdapter) -> list[tuple[str, bytes]]:
    """Read each source file, reporting unreadable ones on stderr and skipping them."""
    sources: list[tuple[str, bytes]] = []
    for path in paths:
        try:
            sources.append((str(path), fs.read_bytes(path)))
        except OSError as e:
            print(f"Cannot read {path}: {e}", file=sys.stderr)
    return sources


def render_model(model: DocumentModel, output_format: str) -> str:
    """Render the model as Markdown or indented JSON."""
    if output_format == "json":
        return json.dumps(model.to_dict(), indent=2, ensure_ascii=False) + "\n"
    return MarkdownRenderer().render(model)


def run(args: argparse.Namespace, fs: FilesystemAdapter) -> int:
    """Execute an extraction run from parsed arguments.

    Args:
        args: Parsed command-line arguments.
        fs: Filesystem adapter for discovery, reading and writing.

    Returns:
        Exit code: 0 for success, 1 when no sources were found or any file
        failed with a fatal error.

    Raises:
        No exceptions - errors printed to stderr, returns exit code.

    Example:
        >>> run(parser.parse_args(["init.lua"]), DefaultFilesystemAdapter())
        0
    """
    config = ExtractionConfig(max_workers=args.workers)

    paths = [Path(p) for p in [*args.paths, *args.files]]
    if args.all or not paths:
        paths.append(Path.cwd())

    sources = read_sources(collect_sources(paths, args.recursive, fs, config.file_extensions), fs)
    if not sources:
        print("No source files found", file=sys.stderr)
        return 1

    model = build_document_model(sources, config=config)

    for diagnostic in model.diagnostics:
        print(f"warning: {diagnostic}", file=sys.stderr)
    for failure in model.failures:
        print(f"error: {failure.path}: {failure.message}", file=sys.stderr)

    output = render_model(model, args.format)
    if args.output:
        fs.write_text(Path(args.output), output)
        print(f"✓ Documentation written to {args.output} ({len(model.files)} file(s))")
    else:
        sys.stdout.write(output)

    return 1 if model.failures else 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="todoc",
        description="todoc - API documentation extractor for tagged Lua comments",
    )
    parser.add_argument("--version", "-v", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("paths", nargs="*", help="Source files or directories to process")
    parser.add_argument(
        "--files",
        nargs="+",
        action="extend",
        default=[],
        help="Source files to process",
    )
    parser.add_argument(
        "--all",
        "-a",
        action="store_true",
        help="Process all source files in the current directory",
    )
    parser.add_argument(
        "--recursive",
        "-r",
        action="store_true",
        help="Descend into subdirectories",
    )
    parser.add_argument(
        "--format",
        "-f",
        choices=OUTPUT_FORMATS,
        default="markdown",
        help="Output format (default: markdown)",
    )
    parser.add_argument("--output", "-o", help="Write output to this file instead of stdout")
    parser.add_argument(
        "--workers",
        "-j",
        type=int,
        default=DEFAULT_CONFIG.max_workers,
        help="Worker threads for parallel extraction",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(fs: FilesystemAdapter | None = None) -> int:
    """CLI entry point for todoc.

    Parses command-line arguments, configures logging and runs the
    extraction.

    Args:
        fs: Filesystem adapter. Defaults to DefaultFilesystemAdapter.

    Returns:
        Exit code: 0 for success, non-zero for failure.

    Raises:
        SystemExit: On --version or argument errors (via argparse).

    Example:
        >>> import sys
        >>> sys.argv = ['todoc', 'init.lua']
        >>> main()
        0
    """
    args = build_parser().parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )
    return run(args, fs or DefaultFilesystemAdapter())


if __name__ == "__main__":
    sys.exit(main())
