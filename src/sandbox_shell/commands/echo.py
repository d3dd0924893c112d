"""echo: write arguments to standard output."""

from sandbox_shell.commands.base import Command, CommandResult, success


class EchoCommand(Command):
    """Join the arguments with single spaces and add a newline."""

    name = "echo"
    description = "Display text"
    usage = "echo [text...]"

    async def execute(self, args: list[str], cwd: str, stdin: str | None = None) -> CommandResult:
        """Echo *args*; never fails."""
        return success(" ".join(args) + "\n")
