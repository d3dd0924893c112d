"""help: list the available commands."""

from collections.abc import Mapping

from sandbox_shell.commands.base import Command, CommandResult, join_lines, success
from sandbox_shell.logging import Logger
from sandbox_shell.paths import ROOT


class HelpCommand(Command):
    """Print every registered command with its usage and description."""

    name = "help"
    description = "List available commands"
    usage = "help [command...]"

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
        """Describe the named commands, or all of them."""
        names = [name for name in args if name in self._commands] or sorted(self._commands)
        width = max(len(self._commands[name].usage) for name in names)
        lines = [
            f"  {self._commands[name].usage:<{width}}  {self._commands[name].description}"
            for name in names
        ]
        return success(join_lines(["Available commands:", *lines]))
