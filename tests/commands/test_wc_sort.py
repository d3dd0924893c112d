"""Tests for wc and sort."""

import asyncio

from sandbox_shell.commands import CommandResult, SortCommand, WcCommand
from sandbox_shell.fs import MemoryFileSystem


def _fs() -> MemoryFileSystem:
    """Create text files for counting and sorting."""
    return MemoryFileSystem.from_files(
        {
            "/poem.txt": "roses are red\nviolets are blue\n",
            "/one.txt": "one\n",
            "/nums.txt": "10\n9\n100\nx\n9\n",
            "/words.txt": "pear\napple\nfig\n",
        }
    )


def _wc(args: list[str], stdin: str | None = None) -> CommandResult:
    """Run wc over the test files."""
    return asyncio.run(WcCommand(_fs()).run(args, "/", stdin))


def _sort(args: list[str], stdin: str | None = None) -> CommandResult:
    """Run sort over the test files."""
    return asyncio.run(SortCommand(_fs()).run(args, "/", stdin))


class TestWc:
    """Verify counting."""

    def test_all_columns(self) -> None:
        """By default lines, words and bytes are printed with the name."""
        assert _wc(["poem.txt"]).stdout == "       2        6       31 poem.txt\n"

    def test_lines_only(self) -> None:
        """-l selects the line column."""
        assert _wc(["-l", "poem.txt"]).stdout == "       2 poem.txt\n"

    def test_total_for_multiple_files(self) -> None:
        """A total line follows several files."""
        lines = _wc(["-l", "poem.txt", "one.txt"]).stdout.splitlines()
        assert lines == ["       2 poem.txt", "       1 one.txt", "       3 total"]

    def test_piped_input(self) -> None:
        """Piped input is counted without a name."""
        assert _wc(["-w"], stdin="a b c\n").stdout == "       3\n"

    def test_missing_file(self) -> None:
        """A missing file is reported."""
        result = _wc(["nope"])
        assert result.exit_code == 1
        assert result.stderr == "wc: nope: No such file or directory"


class TestSort:
    """Verify sorting."""

    def test_lexicographic(self) -> None:
        """Lines are sorted as strings by default."""
        assert _sort(["words.txt"]).stdout == "apple\nfig\npear\n"

    def test_reverse(self) -> None:
        """-r reverses the order."""
        assert _sort(["-r", "words.txt"]).stdout == "pear\nfig\napple\n"

    def test_numeric_and_unique(self) -> None:
        """-n sorts by leading number; -u drops duplicates."""
        assert _sort(["-nu", "nums.txt"]).stdout == "x\n9\n10\n100\n"

    def test_multiple_files_concatenated(self) -> None:
        """All operands are sorted together."""
        assert _sort(["one.txt", "words.txt"]).stdout == "apple\nfig\none\npear\n"

    def test_piped_input(self) -> None:
        """Piped input is sorted when there are no operands."""
        assert _sort([], stdin="b\na\n").stdout == "a\nb\n"

    def test_no_input(self) -> None:
        """No operand and no input is an error."""
        assert "reading from stdin is not supported" in _sort([]).stderr
