"""Tests for cut, tr and diff."""

import asyncio

from sandbox_shell.commands import CommandResult, CutCommand, DiffCommand, TrCommand
from sandbox_shell.fs import MemoryFileSystem


def _fs() -> MemoryFileSystem:
    """Create text files to slice, translate and compare."""
    return MemoryFileSystem.from_files(
        {
            "/users.csv": "ann,42,admin\nbob,7,guest\nplain line\n",
            "/cols.tsv": "x\ty\tz\n",
            "/old.txt": "a\nb\nc\n",
            "/new.txt": "a\nB\nc\n",
            "/short.txt": "a\n",
            "/copy.txt": "a\nb\nc\n",
            "/dir/": "",
        }
    )


def _cut(args: list[str], stdin: str | None = None) -> CommandResult:
    """Run cut over the test files."""
    return asyncio.run(CutCommand(_fs()).run(args, "/", stdin))


def _tr(args: list[str], stdin: str | None = None) -> CommandResult:
    """Run tr over the test files."""
    return asyncio.run(TrCommand(_fs()).run(args, "/", stdin))


def _diff(args: list[str], stdin: str | None = None) -> CommandResult:
    """Run diff over the test files."""
    return asyncio.run(DiffCommand(_fs()).run(args, "/", stdin))


class TestCut:
    """Verify field and character selection."""

    def test_fields_with_delimiter(self) -> None:
        """-f picks fields; a line without the delimiter is printed whole."""
        assert _cut(["-d", ",", "-f", "1,3", "users.csv"]).stdout == (
            "ann,admin\nbob,guest\nplain line\n"
        )

    def test_default_delimiter_is_tab(self) -> None:
        """Without -d fields are separated by tabs."""
        assert _cut(["-f2", "cols.tsv"]).stdout == "y\n"

    def test_character_range(self) -> None:
        """-c takes ranges, including open-ended ones."""
        assert _cut(["-c1-3"], stdin="abcdef\n").stdout == "abc\n"
        assert _cut(["-c", "3-"], stdin="abcdef\n").stdout == "cdef\n"
        assert _cut(["-c", "-2"], stdin="abcdef\n").stdout == "ab\n"

    def test_positions_past_the_end(self) -> None:
        """Positions beyond the line are skipped."""
        assert _cut(["-c", "2,9"], stdin="ab\n").stdout == "b\n"

    def test_list_required(self) -> None:
        """One of -c or -f must be given."""
        result = _cut(["users.csv"])
        assert result.stderr == "cut: you must specify a list of bytes, characters, or fields"

    def test_only_one_list(self) -> None:
        """-c and -f cannot be combined."""
        assert _cut(["-c1", "-f1", "users.csv"]).stderr == (
            "cut: only one type of list may be specified"
        )

    def test_positions_start_at_one(self) -> None:
        """Position 0 does not exist."""
        assert _cut(["-f0", "users.csv"]).stderr == "cut: fields and positions are numbered from 1"

    def test_invalid_list(self) -> None:
        """A list must be numbers and ranges."""
        assert _cut(["-f", "x", "users.csv"]).stderr == "cut: invalid list 'x'"

    def test_missing_file(self) -> None:
        """A missing file is reported."""
        assert _cut(["-c1", "nope"]).stderr == "cut: nope: No such file or directory"

    def test_no_input(self) -> None:
        """With no file and no piped input there is nothing to read."""
        assert _cut(["-c1"]).stderr == "cut: reading from stdin is not supported"


class TestTr:
    """Verify character translation."""

    def test_ranges(self) -> None:
        """Ranges expand to every character between their ends."""
        assert _tr(["a-z", "A-Z"], stdin="hello, world\n").stdout == "HELLO, WORLD\n"

    def test_short_second_set_repeats_last(self) -> None:
        """SET2 is padded with its last character."""
        assert _tr(["abc", "x"], stdin="aabbcc").stdout == "xxxxxx"

    def test_delete(self) -> None:
        """-d removes every character of SET1."""
        assert _tr(["-d", "aeiou"], stdin="education\n").stdout == "dctn\n"

    def test_squeeze(self) -> None:
        """-s collapses runs of a repeated character."""
        assert _tr(["-s", " "], stdin="a   b  c\n").stdout == "a b c\n"

    def test_escapes(self) -> None:
        """\\n in a set stands for a newline."""
        assert _tr(["\\n", " "], stdin="a\nb\n").stdout == "a b "

    def test_file_operand(self) -> None:
        """Without piped input the files after the sets are read."""
        assert _tr(["abc", "ABC", "old.txt"]).stdout == "A\nB\nC\n"

    def test_missing_operands(self) -> None:
        """tr needs SET1, and SET2 unless deleting."""
        assert _tr([]).stderr == "tr: missing operand"
        assert _tr(["abc"], stdin="x").stderr == "tr: missing operand after 'abc'"

    def test_directory_operand(self) -> None:
        """A directory cannot be read."""
        assert _tr(["a", "b", "dir"]).stderr == "tr: dir: Is a directory"


class TestDiff:
    """Verify file comparison."""

    def test_identical(self) -> None:
        """Equal files print nothing and succeed."""
        result = _diff(["old.txt", "copy.txt"])
        assert result.ok
        assert result.stdout == ""

    def test_changed_line(self) -> None:
        """A changed line is shown in classic format with exit 1."""
        result = _diff(["old.txt", "new.txt"])
        assert result.exit_code == 1
        assert result.stdout == "2c2\n< b\n---\n> B\n"

    def test_added_lines(self) -> None:
        """Lines only in the second file are an append."""
        assert _diff(["short.txt", "old.txt"]).stdout == "1a2,3\n> b\n> c\n"

    def test_deleted_lines(self) -> None:
        """Lines only in the first file are a delete."""
        assert _diff(["old.txt", "short.txt"]).stdout == "2,3d1\n< b\n< c\n"

    def test_unified(self) -> None:
        """-u prints headers, a hunk header and context lines."""
        assert _diff(["-u", "old.txt", "new.txt"]).stdout.splitlines() == [
            "--- old.txt",
            "+++ new.txt",
            "@@ -1,3 +1,3 @@",
            " a",
            "-b",
            "+B",
            " c",
        ]

    def test_piped_input(self) -> None:
        """'-' compares against piped input."""
        assert _diff(["-", "old.txt"], stdin="a\nb\nc\n").ok

    def test_operand_count(self) -> None:
        """Exactly two operands are needed."""
        assert _diff([]).stderr == "diff: missing operand"
        assert _diff(["old.txt"]).stderr == "diff: missing operand after 'old.txt'"
        assert _diff(["a", "b", "c"]).stderr == "diff: extra operand 'c'"

    def test_missing_file_is_trouble(self) -> None:
        """An unreadable operand exits 2."""
        result = _diff(["old.txt", "nope"])
        assert result.exit_code == 2
        assert result.stderr == "diff: nope: No such file or directory"
