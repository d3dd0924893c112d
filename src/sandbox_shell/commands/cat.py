"""cat: concatenate files to standard output."""

from sandbox_shell.commands.base import CommandResult, FileCommand, failure, scan_args, success
from sandbox_shell.errors import ShellError


class CatCommand(FileCommand):
    """Print the contents of each file operand in order."""

    name = "cat"
    description = "Concatenate and display file contents"
    usage = "cat [file...]"

    async def execute(self, args: list[str], cwd: str, stdin: str | None = None) -> CommandResult:
        """Concatenate the files, or echo piped input when there are none.

        An unreadable operand is reported and skipped; the remaining
        files are still printed and the exit status is 1.
        """
        _flags, files = scan_args(args)
        if not files:
            if stdin is not None:
                return success(stdin)
            return self.usage_error("missing file operand")
        if (rejected := self.check_operands(files)) is not None:
            return rejected

        chunks: list[str] = []
        errors: list[str] = []
        for file in files:
            try:
                chunks.append(await self.read_text(self.resolve(file, cwd)))
            except (ShellError, OSError) as exc:
                errors.append(self.error(exc, file))

        output = "".join(chunks)
        if errors:
            return failure("\n".join(errors), stdout=output)
        return success(output)
