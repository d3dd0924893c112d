"""which: locate a command."""

from collections.abc import Mapping

from sandbox_shell.commands.base import (
    Command,
    CommandResult,
    failure,
    join_lines,
    scan_args,
    success,
)
from sandbox_shell.logging import Logger
from sandbox_shell.paths import ROOT

BIN_DIR = "/usr/bin"


class WhichCommand(Command):
    """Report where each named command lives.

    Every registered command is presented as ``/usr/bin/<name>``.
    A missing name does not stop the lookup of later names.  When any
    name is missing the exit status is 1 and the whole report, hits and
    misses in operand order, is returned as stderr so the two kinds of
    line are never reordered.
    """

    name = "which"
    description = "Locate a command"
    usage = "which command..."

    def __init__(
        self,
        commands: Mapping[str, Command],
        *,
        root: str = ROOT,
        logger: Logger | None = None,
    ) -> None:
        """Create the command over a read-only view of the registry."""
        super().__init__(root=root, logger=logger)
        self._commands = commands

    async def execute(self, args: list[str], cwd: str, stdin: str | None = None) -> CommandResult:
        """Look up each operand in the registry."""
        _flags, names = scan_args(args)
        if not names:
            return self.usage_error("missing command name")

        report: list[str] = []
        missed = False
        for name in names:
            if name in self._commands:
                report.append(f"{BIN_DIR}/{name}")
            else:
                report.append(f"{self.name}: no {name} in ({BIN_DIR})")
                missed = True

        if missed:
            return failure("\n".join(report))
        return success(join_lines(report))
