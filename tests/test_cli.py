"""Tests for CLI module."""

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from todoc.cli import build_parser, collect_sources, main, read_sources
from tests.mock_filesystem import MockFilesystemAdapter

DOCUMENTED = "-- @brief Entry point\nfunction init() end\n"
HELPER = "local function helper() end\n"


@pytest.fixture
def fs() -> MockFilesystemAdapter:
    mock = MockFilesystemAdapter()
    mock.add_file(Path("src/init.lua"), DOCUMENTED)
    mock.add_file(Path("src/util/helper.lua"), HELPER)
    mock.add_file(Path("src/notes.txt"), "not lua")
    return mock


def run_cli(fs: MockFilesystemAdapter, *argv: str) -> int:
    with patch("sys.argv", ["todoc", *argv]):
        return main(fs)


class TestCollectSources:
    """Tests for collect_sources function."""

    @pytest.mark.parametrize(
        ("recursive", "expected"),
        [
            (False, [Path("src/init.lua")]),
            (True, [Path("src/init.lua"), Path("src/util/helper.lua")]),
        ],
        ids=["flat", "recursive"],
    )
    def test_directory_expansion(
        self, fs: MockFilesystemAdapter, recursive: bool, expected: list[Path]
    ) -> None:
        """Verify directories are searched for Lua files."""
        assert collect_sources([Path("src")], recursive, fs) == expected

    def test_explicit_files_and_dedupe(self, fs: MockFilesystemAdapter) -> None:
        """Verify explicit files are kept whatever their extension, once each."""
        paths = [Path("src/notes.txt"), Path("src/init.lua"), Path("src")]
        assert collect_sources(paths, False, fs) == [Path("src/notes.txt"), Path("src/init.lua")]

    def test_missing_path_reported(
        self, fs: MockFilesystemAdapter, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Verify missing paths are reported and skipped."""
        assert collect_sources([Path("nope.lua")], False, fs) == []
        assert "File not found: nope.lua" in capsys.readouterr().err


class TestReadSources:
    """Tests for read_sources function."""

    def test_reads_bytes_and_skips_errors(
        self, fs: MockFilesystemAdapter, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Verify readable files are returned as (path, bytes) and read errors reported."""
        sources = read_sources([Path("src/init.lua"), Path("gone.lua")], fs)
        assert sources == [("src/init.lua", DOCUMENTED.encode())]
        assert "Cannot read gone.lua: File not found: gone.lua" in capsys.readouterr().err


class TestMain:
    """Tests for main entry point."""

    def test_markdown_to_stdout(
        self, fs: MockFilesystemAdapter, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Verify Markdown output is written to stdout by default."""
        assert run_cli(fs, "src") == 0
        out = capsys.readouterr().out
        assert out.startswith("# src/init.lua\n")
        assert "**Brief:** Entry point" in out
        assert "helper" not in out

    def test_json_recursive(
        self, fs: MockFilesystemAdapter, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Verify --recursive and --format json emit the full model."""
        assert run_cli(fs, "-r", "--format", "json", "src") == 0
        data = json.loads(capsys.readouterr().out)
        assert [f["path"] for f in data["files"]] == ["src/init.lua", "src/util/helper.lua"]
        assert data["failures"] == []

    def test_output_file(self, fs: MockFilesystemAdapter, capsys: pytest.CaptureFixture[str]) -> None:
        """Verify --output writes through the filesystem adapter."""
        assert run_cli(fs, "src/init.lua", "-o", "docs/api.md") == 0
        assert "Documentation written to docs/api.md" in capsys.readouterr().out
        written = fs.files[Path("docs/api.md")]
        assert isinstance(written, str)
        assert written.startswith("# src/init.lua")

    def test_files_option(self, fs: MockFilesystemAdapter, capsys: pytest.CaptureFixture[str]) -> None:
        """Verify --files accepts several explicit files."""
        assert run_cli(fs, "--files", "src/init.lua", "src/util/helper.lua") == 0
        out = capsys.readouterr().out
        assert "# src/init.lua" in out
        assert "# src/util/helper.lua" in out

    def test_all_uses_current_directory(
        self, fs: MockFilesystemAdapter, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Verify --all processes the current directory."""
        fs.add_file(Path("/work/main.lua"), DOCUMENTED)
        with patch("todoc.cli.Path.cwd", return_value=Path("/work")):
            assert run_cli(fs, "--all") == 0
        assert "# /work/main.lua" in capsys.readouterr().out

    @pytest.mark.parametrize(
        ("argv", "expected_err"),
        [
            (["missing.lua"], "No source files found"),
            (["bad.lua"], "error: bad.lua:"),
        ],
        ids=["no_sources", "fatal_error"],
    )
    def test_failure_exit_code(
        self,
        fs: MockFilesystemAdapter,
        capsys: pytest.CaptureFixture[str],
        argv: list[str],
        expected_err: str,
    ) -> None:
        """Verify exit code 1 when nothing is found or a file fails."""
        fs.add_file(Path("bad.lua"), "function broken(\n")
        assert run_cli(fs, *argv) == 1
        assert expected_err in capsys.readouterr().err

    def test_unreadable_file_skipped(
        self, fs: MockFilesystemAdapter, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Verify a file that cannot be read is reported and the rest still extracted."""
        read_bytes = fs.read_bytes

        def deny_helper(path: Path) -> bytes:
            if path.name == "helper.lua":
                raise PermissionError(f"Permission denied: '{path}'")
            return read_bytes(path)

        with patch.object(fs, "read_bytes", side_effect=deny_helper):
            assert run_cli(fs, "-r", "src") == 0
        captured = capsys.readouterr()
        assert "Cannot read src/util/helper.lua: Permission denied" in captured.err
        assert "# src/init.lua" in captured.out
        assert "helper" not in captured.out

    def test_diagnostics_printed(
        self, fs: MockFilesystemAdapter, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Verify recoverable diagnostics are printed as warnings."""
        fs.add_file(Path("tagged.lua"), "-- @since 2.0\nfunction f() end\n")
        assert run_cli(fs, "tagged.lua") == 0
        assert "warning: tagged.lua:1: unknown_tag" in capsys.readouterr().err

    def test_version(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Verify --version prints the version and exits."""
        with patch("sys.argv", ["todoc", "--version"]), pytest.raises(SystemExit) as exc_info:
            main(MockFilesystemAdapter())
        assert exc_info.value.code == 0
        assert "todoc 0.1.0" in capsys.readouterr().out


class TestBuildParser:
    """Tests for argument parsing."""

    def test_defaults(self) -> None:
        """Verify default option values."""
        args = build_parser().parse_args([])
        assert args.paths == []
        assert args.files == []
        assert args.format == "markdown"
        assert args.workers == 1
        assert not args.all
        assert not args.recursive

    def test_invalid_format(self) -> None:
        """Verify unknown formats are rejected by argparse."""
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--format", "html"])
