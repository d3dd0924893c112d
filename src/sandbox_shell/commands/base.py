"""The command contract shared by every utility.

A command is a small object with a ``name``, a one-line
``description``, a ``usage`` string, and an ``execute`` coroutine.  The
dispatcher never calls ``execute`` directly: it calls ``run``, which is
the single catch boundary.  Whatever escapes a command's own handling
is turned into a ``<command>: <message>`` result here, so nothing ever
propagates out of the command layer as an exception.

Helpers in this module keep the per-command modules short:

- ``success`` / ``failure`` build ``CommandResult`` values.
- ``scan_args`` splits argv into flag characters and operands; each
  command then runs its own ``match`` over the characters it knows.
- ``split_lines`` / ``join_lines`` give every text filter the same idea
  of what a line is.
"""

from __future__ import annotations

import errno
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import ClassVar

from sandbox_shell.errors import ErrorKind, ShellError, format_error, format_kind
from sandbox_shell.fs.protocol import VirtualFileSystem
from sandbox_shell.logging import Logger, LogLevel
from sandbox_shell.paths import ROOT, reject_absolute, resolve

EXIT_SUCCESS = 0
EXIT_FAILURE = 1


@dataclass(frozen=True)
class CommandResult:
    """Outcome of one command invocation.

    ``new_cwd`` is only set by directory-changing commands; ``None``
    means the working directory is unchanged.
    """

    exit_code: int
    stdout: str = ""
    stderr: str = ""
    new_cwd: str | None = None

    @property
    def ok(self) -> bool:
        """Return True if the command succeeded."""
        return self.exit_code == EXIT_SUCCESS


@dataclass(frozen=True)
class CommandInfo:
    """Immutable descriptor used for help and tool discovery."""

    name: str
    description: str
    usage: str


def success(stdout: str = "", *, new_cwd: str | None = None) -> CommandResult:
    """Build a successful result."""
    return CommandResult(exit_code=EXIT_SUCCESS, stdout=stdout, new_cwd=new_cwd)


def failure(stderr: str, *, stdout: str = "", exit_code: int = EXIT_FAILURE) -> CommandResult:
    """Build a failed result; *stderr* is a single line without a newline."""
    return CommandResult(exit_code=exit_code, stdout=stdout, stderr=stderr)


def scan_args(args: list[str]) -> tuple[list[str], list[str]]:
    """Split *args* into flag characters and operands.

    Every token starting with ``-`` (other than a lone ``-``) contributes
    its characters after the dash, so ``-la`` yields ``["l", "a"]``.
    A ``--`` token ends option scanning.

    Returns:
        ``(flag_chars, operands)`` in the order they appeared.

    """
    chars: list[str] = []
    operands: list[str] = []
    for index, arg in enumerate(args):
        if arg == "--":
            operands.extend(args[index + 1 :])
            break
        if arg.startswith("-") and arg != "-":
            chars.extend(arg[1:])
        else:
            operands.append(arg)
    return chars, operands


def split_lines(text: str) -> list[str]:
    """Split text into lines; a trailing newline does not add an empty line."""
    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


def join_lines(lines: list[str]) -> str:
    """Join lines with a trailing newline (empty input gives ``""``)."""
    return "\n".join(lines) + "\n" if lines else ""


class Command(ABC):
    """Base class for every shell utility."""

    name: ClassVar[str]
    description: ClassVar[str]
    usage: ClassVar[str]

    def __init__(self, *, root: str = ROOT, logger: Logger | None = None) -> None:
        """Create a command.

        Args:
            root: The project root no operand may escape.
            logger: Audit log for failures caught at the boundary.

        """
        self._root = root
        self._logger = logger

    @property
    def info(self) -> CommandInfo:
        """Return the command's immutable descriptor."""
        return CommandInfo(name=self.name, description=self.description, usage=self.usage)

    async def run(self, args: list[str], cwd: str, stdin: str | None = None) -> CommandResult:
        """Execute the command, converting any escaped exception to a result."""
        try:
            return await self.execute(args, cwd, stdin)
        except (ShellError, OSError) as exc:
            message = format_error(self.name, exc)
            self._log_escape(f"{type(exc).__name__}: {message}")
            return failure(message)
        except Exception as exc:  # noqa: BLE001
            self._log_escape(f"unhandled {type(exc).__name__}: {exc}")
            return failure(format_error(self.name, exc))

    def _log_escape(self, message: str) -> None:
        """Record an exception that reached the catch boundary."""
        if self._logger is not None:
            self._logger.log(LogLevel.ERROR, message, source=self.name)

    @abstractmethod
    async def execute(self, args: list[str], cwd: str, stdin: str | None = None) -> CommandResult:
        """Run the command against *args* with working directory *cwd*."""

    # -- helpers for subclasses -------------------------------------------------

    def resolve(self, operand: str, cwd: str) -> str:
        """Resolve an operand inside the project root."""
        return resolve(operand, cwd, self._root)

    def check_operands(self, operands: list[str]) -> CommandResult | None:
        """Return a failure if any operand is an absolute path.

        Called before any filesystem access so a rejected line never
        has partial effects.
        """
        for operand in operands:
            try:
                reject_absolute(operand)
            except ShellError as exc:
                return failure(format_error(self.name, exc))
        return None

    def error(
        self,
        exc: BaseException,
        operand: str | None = None,
        *,
        action: str | None = None,
    ) -> str:
        """Format *exc* as this command's error line."""
        return format_error(self.name, exc, operand=operand, action=action)

    def error_kind(
        self,
        kind: ErrorKind,
        operand: str | None = None,
        *,
        action: str | None = None,
    ) -> str:
        """Format a detected condition as this command's error line."""
        return format_kind(self.name, kind, operand=operand, action=action)

    def usage_error(self, message: str) -> CommandResult:
        """Return a usage failure such as ``mv: missing file operand``."""
        return failure(f"{self.name}: {message}")


class FileCommand(Command):
    """A command that operates on the virtual filesystem."""

    def __init__(
        self,
        fs: VirtualFileSystem,
        *,
        root: str = ROOT,
        logger: Logger | None = None,
    ) -> None:
        """Create a command bound to a filesystem.

        Args:
            fs: The virtual filesystem the command operates on.
            root: The project root no operand may escape.
            logger: Audit log for failures caught at the boundary.

        """
        super().__init__(root=root, logger=logger)
        self._fs = fs

    async def is_directory(self, path: str) -> bool:
        """Return True if *path* exists and is a directory."""
        try:
            stat = await self._fs.stat(path)
        except OSError:
            return False
        return stat.is_directory()

    async def exists(self, path: str) -> bool:
        """Return True if *path* exists."""
        try:
            await self._fs.stat(path)
        except OSError:
            return False
        return True

    async def read_text(self, path: str) -> str:
        """Read a file, reporting a directory as ``IsADirectoryError``.

        Backends differ on whether reading a directory fails, so the
        type is checked first.
        """
        stat = await self._fs.stat(path)
        if stat.is_directory():
            raise IsADirectoryError(errno.EISDIR, path)
        return await self._fs.read_file(path)
