"""Tests for grep and find."""

import asyncio

from sandbox_shell.commands import CommandResult, FindCommand, GrepCommand
from sandbox_shell.fs import MemoryFileSystem


def _project() -> MemoryFileSystem:
    """Create a small source tree to search."""
    return MemoryFileSystem.from_files(
        {
            "/README.md": "Hello project\nsee src\n",
            "/notes.txt": "todo: tests\nhello again\n",
            "/src/main.py": "import os\nprint('hello')\n",
            "/src/pkg/util.py": "def hello():\n    return 1\n",
            "/src/pkg/data.json": "{}\n",
            "/empty/": "",
        }
    )


def _grep(args: list[str], cwd: str = "/", stdin: str | None = None) -> CommandResult:
    """Run grep over the project."""
    return asyncio.run(GrepCommand(_project()).run(args, cwd, stdin))


def _find(args: list[str], cwd: str = "/") -> CommandResult:
    """Run find over the project."""
    return asyncio.run(FindCommand(_project()).run(args, cwd))


class TestGrep:
    """Verify pattern search."""

    def test_single_file(self) -> None:
        """Matching lines of one file are printed without a name."""
        result = _grep(["hello", "notes.txt"])
        assert result.ok
        assert result.stdout == "hello again\n"

    def test_ignore_case_and_numbers(self) -> None:
        """-i folds case and -n prefixes line numbers."""
        assert _grep(["-in", "hello", "README.md"]).stdout == "1:Hello project\n"

    def test_several_files_are_named(self) -> None:
        """With several files every line carries its file name."""
        result = _grep(["hello", "README.md", "notes.txt"])
        assert result.stdout == "notes.txt:hello again\n"

    def test_no_match_exits_one(self) -> None:
        """Nothing selected is exit 1 without any message."""
        result = _grep(["zebra", "notes.txt"])
        assert result.exit_code == 1
        assert (result.stdout, result.stderr) == ("", "")

    def test_recursive(self) -> None:
        """-r walks a directory and names files relative to the operand."""
        result = _grep(["-r", "hello", "src"])
        assert result.stdout == "src/main.py:print('hello')\nsrc/pkg/util.py:def hello():\n"

    def test_recursive_without_operand(self) -> None:
        """-r with no file searches the working directory."""
        result = _grep(["-r", "hello"], cwd="/src")
        assert result.stdout == "main.py:print('hello')\npkg/util.py:def hello():\n"

    def test_directory_needs_recursive(self) -> None:
        """A directory operand without -r is an error."""
        result = _grep(["hello", "src"])
        assert result.exit_code == 2
        assert result.stderr == "grep: src: Is a directory"

    def test_missing_file_keeps_other_matches(self) -> None:
        """A missing operand is reported while matches elsewhere still print."""
        result = _grep(["hello", "nope.txt", "notes.txt"])
        assert result.exit_code == 2
        assert result.stdout == "notes.txt:hello again\n"
        assert result.stderr == "grep: nope.txt: No such file or directory"

    def test_invert_and_count(self) -> None:
        """-v selects non-matching lines and -c counts them."""
        assert _grep(["-vc", "hello", "notes.txt"]).stdout == "1\n"

    def test_files_only(self) -> None:
        """-l prints each matching file once."""
        assert _grep(["-rl", "hello", "."]).stdout.splitlines() == [
            "./notes.txt",
            "./src/main.py",
            "./src/pkg/util.py",
        ]

    def test_piped_input(self) -> None:
        """Piped input is searched when no file is given."""
        assert _grep(["b"], stdin="a\nb\nab\n").stdout == "b\nab\n"

    def test_no_input(self) -> None:
        """Without a file or piped input there is nothing to read."""
        assert _grep(["x"]).stderr == "grep: reading from stdin is not supported"

    def test_missing_pattern(self) -> None:
        """A pattern is required."""
        assert _grep([]).stderr == "grep: missing pattern"

    def test_invalid_pattern(self) -> None:
        """A malformed regular expression is reported with exit 2."""
        result = _grep(["(", "notes.txt"])
        assert result.exit_code == 2
        assert result.stderr.startswith("grep: invalid regular expression '('")

    def test_absolute_path(self) -> None:
        """Absolute operands are refused."""
        assert "absolute paths are not supported" in _grep(["x", "/etc/passwd"]).stderr


class TestFind:
    """Verify hierarchy listing."""

    def test_everything_below_start(self) -> None:
        """With no tests find lists the start and all entries below it."""
        assert _find(["src"]).stdout.splitlines() == [
            "src",
            "src/main.py",
            "src/pkg",
            "src/pkg/data.json",
            "src/pkg/util.py",
        ]

    def test_default_start_is_dot(self) -> None:
        """Without a path find starts at '.'."""
        lines = _find([], cwd="/src/pkg").stdout.splitlines()
        assert lines == [".", "./data.json", "./util.py"]

    def test_name_glob(self) -> None:
        """-name matches the basename against a glob."""
        assert _find([".", "-name", "*.py"]).stdout == "./src/main.py\n./src/pkg/util.py\n"

    def test_name_is_case_sensitive(self) -> None:
        """-name is case-sensitive and -iname is not."""
        assert _find(["-name", "readme*"]).stdout == ""
        assert _find(["-iname", "readme*"]).stdout == "./README.md\n"

    def test_type_filter(self) -> None:
        """-type d keeps only directories."""
        assert _find(["-type", "d"]).stdout == ".\n./empty\n./src\n./src/pkg\n"

    def test_maxdepth(self) -> None:
        """-maxdepth limits how far below the start entries are listed."""
        assert _find(["src", "-maxdepth", "1", "-type", "f"]).stdout == "src/main.py\n"

    def test_file_start(self) -> None:
        """A file operand is tested on its own."""
        assert _find(["notes.txt", "-name", "*.txt"]).stdout == "notes.txt\n"

    def test_missing_start_continues(self) -> None:
        """A missing start path is reported and the others are searched."""
        result = _find(["nope", "empty"])
        assert result.exit_code == 1
        assert result.stdout == "empty\n"
        assert result.stderr == "find: nope: No such file or directory"

    def test_unknown_predicate(self) -> None:
        """An unsupported predicate is a usage error."""
        assert _find(["-newer", "x"]).stderr == "find: unknown predicate '-newer'"

    def test_missing_argument(self) -> None:
        """A predicate without its argument is a usage error."""
        assert _find(["-name"]).stderr == "find: missing argument to '-name'"

    def test_bad_type(self) -> None:
        """Only f and d are accepted by -type."""
        assert _find(["-type", "x"]).stderr == "find: Unknown argument to -type: x"

    def test_parent_above_root(self) -> None:
        """A start path above the project root is refused."""
        assert _find([".."]).exit_code == 1
