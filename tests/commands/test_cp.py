"""Tests for cp."""

import asyncio

from sandbox_shell.commands import CommandResult, CpCommand
from sandbox_shell.fs import MemoryFileSystem


def _project() -> MemoryFileSystem:
    """Create a project with files and a nested directory."""
    return MemoryFileSystem.from_files(
        {
            "/a.txt": "a\n",
            "/b.txt": "b\n",
            "/dest/": "",
            "/src/main.py": "main\n",
            "/src/pkg/mod.py": "mod\n",
        }
    )


def _cp(fs: MemoryFileSystem, args: list[str], cwd: str = "/") -> CommandResult:
    """Run cp against *fs*."""
    return asyncio.run(CpCommand(fs).run(args, cwd))


class TestCpFiles:
    """Verify copying regular files."""

    def test_copy_to_new_name(self) -> None:
        """A file is copied to a new path and the source stays."""
        fs = _project()
        assert _cp(fs, ["a.txt", "c.txt"]).ok
        assert fs.get("/c.txt") == "a\n"
        assert fs.get("/a.txt") == "a\n"

    def test_overwrite_existing_file(self) -> None:
        """cp replaces an existing destination file."""
        fs = _project()
        assert _cp(fs, ["a.txt", "b.txt"]).ok
        assert fs.get("/b.txt") == "a\n"

    def test_multiple_into_directory(self) -> None:
        """Several sources go into a directory by basename."""
        fs = _project()
        assert _cp(fs, ["a.txt", "b.txt", "dest"]).ok
        assert fs.get("/dest/a.txt") == "a\n"
        assert fs.get("/dest/b.txt") == "b\n"

    def test_multiple_into_file_is_an_error(self) -> None:
        """Several sources need a directory destination."""
        result = _cp(_project(), ["a.txt", "b.txt", "src/main.py"])
        assert result.exit_code == 1
        assert result.stderr == "cp: target 'src/main.py' is not a directory"

    def test_missing_source(self) -> None:
        """A missing source is reported with 'cannot stat'."""
        result = _cp(_project(), ["nope.txt", "x.txt"])
        assert result.stderr == "cp: cannot stat 'nope.txt': No such file or directory"

    def test_same_file(self) -> None:
        """Copying a file onto itself is refused."""
        result = _cp(_project(), ["a.txt", "./a.txt"])
        assert "are the same file" in result.stderr

    def test_trailing_slash_needs_existing_directory(self) -> None:
        """A missing 'dir/' destination is not created as a file."""
        fs = _project()
        result = _cp(fs, ["a.txt", "newdir/"])
        assert result.exit_code == 1
        assert result.stderr == (
            "cp: cannot create regular file 'newdir/': Not a directory"
        )
        assert not fs.exists("/newdir")

    def test_trailing_slash_into_existing_directory(self) -> None:
        """An existing 'dir/' destination receives the file by basename."""
        fs = _project()
        assert _cp(fs, ["a.txt", "dest/"]).ok
        assert fs.get("/dest/a.txt") == "a\n"


class TestCpDirectories:
    """Verify recursive copies."""

    def test_directory_needs_recursive(self) -> None:
        """Without -r a directory is skipped with an error."""
        result = _cp(_project(), ["src", "copy"])
        assert result.stderr == "cp: -r not specified; omitting directory 'src'"

    def test_recursive_copy_to_new_name(self) -> None:
        """-r copies the whole tree."""
        fs = _project()
        assert _cp(fs, ["-r", "src", "copy"]).ok
        assert fs.get("/copy/main.py") == "main\n"
        assert fs.get("/copy/pkg/mod.py") == "mod\n"
        assert fs.get("/src/pkg/mod.py") == "mod\n"

    def test_recursive_copy_into_directory(self) -> None:
        """-r into an existing directory nests the source by name."""
        fs = _project()
        assert _cp(fs, ["-R", "src", "dest"]).ok
        assert fs.get("/dest/src/pkg/mod.py") == "mod\n"

    def test_copy_into_itself(self) -> None:
        """A directory cannot be copied below itself."""
        result = _cp(_project(), ["-r", "src", "src/pkg"])
        assert result.exit_code == 1
        assert "into itself" in result.stderr


class TestCpUsage:
    """Verify argument validation."""

    def test_no_operands(self) -> None:
        """cp needs operands."""
        assert _cp(_project(), []).stderr == "cp: missing file operand"

    def test_missing_destination(self) -> None:
        """A single operand names no destination."""
        result = _cp(_project(), ["a.txt"])
        assert result.stderr == "cp: missing destination file operand after 'a.txt'"

    def test_absolute_destination(self) -> None:
        """Absolute paths are refused before anything is copied."""
        fs = _project()
        result = _cp(fs, ["a.txt", "/tmp/a.txt"])
        assert "absolute paths are not supported" in result.stderr
        assert not fs.exists("/tmp")
