"""touch: create empty files or refresh their timestamps."""

from sandbox_shell.commands.base import CommandResult, FileCommand, failure, scan_args, success
from sandbox_shell.errors import ShellError


class TouchCommand(FileCommand):
    """Create each missing file; rewrite existing files to bump their mtime.

    A directory operand is accepted and left alone, since the capability
    surface has no way to set a directory's timestamp.
    """

    name = "touch"
    description = "Create empty files or update timestamps"
    usage = "touch file..."

    async def execute(self, args: list[str], cwd: str, stdin: str | None = None) -> CommandResult:
        """Touch every operand, collecting failures."""
        _flags, files = scan_args(args)
        if not files:
            return self.usage_error("missing file operand")
        if (rejected := self.check_operands(files)) is not None:
            return rejected

        errors: list[str] = []
        for file in files:
            try:
                path = self.resolve(file, cwd)
                try:
                    stat = await self._fs.stat(path)
                except FileNotFoundError:
                    await self._fs.write_file(path, "")
                    continue
                if stat.is_file():
                    await self._fs.write_file(path, await self._fs.read_file(path))
            except ShellError as exc:
                errors.append(self.error(exc))
            except OSError as exc:
                errors.append(self.error(exc, file, action="cannot touch"))

        if errors:
            return failure("\n".join(errors))
        return success()
