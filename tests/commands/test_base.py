"""Tests for the command contract and its helpers.

``Command.run`` is the catch boundary: whatever a command lets escape
becomes a ``<name>: <message>`` result instead of an exception.
"""

import asyncio
import errno

from sandbox_shell.commands.base import (
    Command,
    CommandResult,
    join_lines,
    scan_args,
    split_lines,
)
from sandbox_shell.errors import UsageError
from sandbox_shell.logging import Logger, LogLevel


class _Exploding(Command):
    """A command that raises whatever it is given."""

    name = "boom"
    description = "Raise an exception"
    usage = "boom"

    def __init__(self, exc: BaseException, logger: Logger | None = None) -> None:
        """Remember the exception to raise."""
        super().__init__(logger=logger)
        self._exc = exc

    async def execute(self, args: list[str], cwd: str, stdin: str | None = None) -> CommandResult:
        """Raise the stored exception."""
        raise self._exc


class TestScanArgs:
    """Verify flag/operand splitting."""

    def test_combined_flags(self) -> None:
        """-la contributes both characters."""
        assert scan_args(["-la", "src"]) == (["l", "a"], ["src"])

    def test_lone_dash_is_operand(self) -> None:
        """A single '-' is an operand."""
        assert scan_args(["-"]) == ([], ["-"])

    def test_double_dash_ends_options(self) -> None:
        """Tokens after '--' are operands even if they start with '-'."""
        assert scan_args(["-r", "--", "-weird"]) == (["r"], ["-weird"])


class TestLines:
    """Verify line splitting and joining."""

    def test_trailing_newline_not_a_line(self) -> None:
        """'a\\nb\\n' is two lines."""
        assert split_lines("a\nb\n") == ["a", "b"]

    def test_missing_trailing_newline(self) -> None:
        """A last line without newline still counts."""
        assert split_lines("a\nb") == ["a", "b"]

    def test_empty(self) -> None:
        """Empty text has no lines, and no lines join to empty text."""
        assert split_lines("") == []
        assert join_lines([]) == ""

    def test_join_adds_trailing_newline(self) -> None:
        """Joined output ends with a newline."""
        assert join_lines(["a", "b"]) == "a\nb\n"


class TestCatchBoundary:
    """Verify that run() never raises."""

    def test_shell_error(self) -> None:
        """A ShellError becomes a one-line failure."""
        result = asyncio.run(_Exploding(UsageError("missing operand")).run([], "/"))
        assert result.exit_code == 1
        assert result.stderr == "boom: missing operand"

    def test_os_error_is_mapped(self) -> None:
        """A filesystem error gets its POSIX message."""
        exc = PermissionError(errno.EACCES, "denied by backend")
        result = asyncio.run(_Exploding(exc).run([], "/"))
        assert result.stderr == "boom: Permission denied"

    def test_mapped_errors_are_logged(self) -> None:
        """ShellError and OSError escapes leave an ERROR entry too."""
        logger = Logger()
        asyncio.run(_Exploding(UsageError("missing operand"), logger).run([], "/"))
        asyncio.run(_Exploding(FileNotFoundError(errno.ENOENT, "gone"), logger).run([], "/"))
        errors = logger.filter(min_level=LogLevel.ERROR, source="boom")
        assert [entry.message for entry in errors] == [
            "UsageError: boom: missing operand",
            "FileNotFoundError: boom: No such file or directory",
        ]

    def test_unexpected_error_kept_verbatim_and_logged(self) -> None:
        """An unknown failure keeps its message and is logged at ERROR."""
        logger = Logger()
        result = asyncio.run(_Exploding(ValueError("bad state"), logger).run([], "/"))
        assert result.stderr == "boom: bad state"
        errors = logger.filter(min_level=LogLevel.ERROR)
        assert errors[0].source == "boom"
        assert "ValueError" in errors[0].message

    def test_info(self) -> None:
        """info describes the command."""
        info = _Exploding(RuntimeError()).info
        assert (info.name, info.description, info.usage) == ("boom", "Raise an exception", "boom")
