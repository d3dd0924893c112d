"""cd: change the working directory."""

from sandbox_shell.commands.base import CommandResult, FileCommand, failure, scan_args, success
from sandbox_shell.errors import ErrorKind, ShellError


class CdCommand(FileCommand):
    """Change the shell's working directory.

    ``cd`` is the only command that sets ``new_cwd``; the shell applies it
    after a successful run.  With no operand the directory is unchanged
    (there is no home directory inside a project).
    """

    name = "cd"
    description = "Change directory"
    usage = "cd [directory]"

    async def execute(self, args: list[str], cwd: str, stdin: str | None = None) -> CommandResult:
        """Resolve the operand and switch to it if it is a directory."""
        _flags, operands = scan_args(args)
        if not operands:
            return success(new_cwd=cwd)
        if len(operands) > 1:
            return self.usage_error("too many arguments")
        if (rejected := self.check_operands(operands)) is not None:
            return rejected

        target = operands[0]
        try:
            path = self.resolve(target, cwd)
        except ShellError as exc:
            return failure(self.error(exc))
        if path == cwd:
            return success(new_cwd=cwd)

        try:
            stat = await self._fs.stat(path)
        except OSError as exc:
            return failure(self.error(exc, target))
        if not stat.is_directory():
            return failure(self.error_kind(ErrorKind.NOT_A_DIRECTORY, target))
        return success(new_cwd=path)
