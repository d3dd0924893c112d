"""pwd: print the working directory."""

from sandbox_shell.commands.base import Command, CommandResult, scan_args, success


class PwdCommand(Command):
    """Print the current working directory."""

    name = "pwd"
    description = "Print working directory"
    usage = "pwd"

    async def execute(self, args: list[str], cwd: str, stdin: str | None = None) -> CommandResult:
        """Return *cwd* followed by a newline."""
        _flags, operands = scan_args(args)
        if operands:
            return self.usage_error("too many arguments")
        return success(cwd + "\n")
