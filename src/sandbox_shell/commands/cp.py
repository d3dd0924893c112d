"""cp: copy files and directories."""

from __future__ import annotations

import posixpath
from dataclasses import dataclass

from sandbox_shell.commands.base import CommandResult, FileCommand, failure, scan_args, success
from sandbox_shell.errors import ErrorKind, ShellError
from sandbox_shell.fs.walk import walk


@dataclass
class _CpOptions:
    recursive: bool = False


def _parse(args: list[str]) -> tuple[_CpOptions, list[str]]:
    options = _CpOptions()
    chars, paths = scan_args(args)
    for char in chars:
        match char:
            case "r" | "R":
                options.recursive = True
            case _:
                pass
    return options, paths


class CpCommand(FileCommand):
    """Copy one or more sources to a destination.

    With an existing directory as the last operand every source is
    copied into it under its basename; otherwise exactly one source is
    allowed and the destination is created or overwritten.  A file is
    never written to a destination spelled with a trailing slash unless
    that directory exists.  Processing stops at the first failing source.
    """

    name = "cp"
    description = "Copy files and directories"
    usage = "cp [-r] source... destination"

    async def execute(self, args: list[str], cwd: str, stdin: str | None = None) -> CommandResult:
        """Copy the sources named in *args*."""
        options, paths = _parse(args)
        if not paths:
            return self.usage_error("missing file operand")
        if len(paths) == 1:
            return self.usage_error(f"missing destination file operand after '{paths[0]}'")
        if (rejected := self.check_operands(paths)) is not None:
            return rejected

        *sources, destination = paths
        try:
            dest_path = self.resolve(destination, cwd)
        except ShellError as exc:
            return failure(self.error(exc))
        dest_is_dir = await self.is_directory(dest_path)
        if len(sources) > 1 and not dest_is_dir:
            return failure(f"{self.name}: target '{destination}' is not a directory")

        for source in sources:
            try:
                source_path = self.resolve(source, cwd)
            except ShellError as exc:
                return failure(self.error(exc))
            try:
                stat = await self._fs.stat(source_path)
            except OSError as exc:
                return failure(self.error(exc, source, action="cannot stat"))

            if dest_is_dir:
                target = posixpath.join(dest_path, posixpath.basename(source_path))
            else:
                target = dest_path

            if stat.is_directory():
                if not options.recursive:
                    return failure(f"{self.name}: -r not specified; omitting directory '{source}'")
                if target == source_path or target.startswith(source_path + "/"):
                    return failure(
                        f"{self.name}: cannot copy a directory, '{source}', "
                        f"into itself, '{destination}'"
                    )
                try:
                    await self._copy_tree(source_path, target)
                except OSError as exc:
                    return failure(self.error(exc, source, action="cannot copy"))
            else:
                if target == source_path:
                    return failure(f"{self.name}: '{source}' and '{destination}' are the same file")
                if not dest_is_dir and destination.endswith("/"):
                    return failure(
                        self.error_kind(
                            ErrorKind.NOT_A_DIRECTORY,
                            destination,
                            action="cannot create regular file",
                        )
                    )
                try:
                    await self._fs.write_file(target, await self._fs.read_file(source_path))
                except OSError as exc:
                    return failure(
                        self.error(exc, destination, action="cannot create regular file")
                    )

        return success()

    async def _copy_tree(self, source: str, target: str) -> None:
        """Copy the directory *source* to *target*, merging into an existing one."""
        if not await self.is_directory(target):
            await self._fs.mkdir(target)
        async for entry in walk(self._fs, source):
            destination = posixpath.join(target, entry.relative)
            if entry.is_directory:
                if not await self.is_directory(destination):
                    await self._fs.mkdir(destination)
            else:
                await self._fs.write_file(destination, await self._fs.read_file(entry.path))
