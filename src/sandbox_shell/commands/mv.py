"""mv: move or rename files and directories."""

from __future__ import annotations

import posixpath
from dataclasses import dataclass

from sandbox_shell.commands.base import CommandResult, FileCommand, failure, scan_args, success
from sandbox_shell.errors import ErrorKind, ShellError


@dataclass
class _MvOptions:
    force: bool = False


def _parse(args: list[str]) -> tuple[_MvOptions, list[str]]:
    options = _MvOptions()
    chars, paths = scan_args(args)
    for char in chars:
        match char:
            case "f":
                options.force = True
            case _:
                pass
    return options, paths


class MvCommand(FileCommand):
    """Move sources to a destination.

    Unlike POSIX ``mv``, an existing target is never replaced silently:
    the move is refused with ``File exists`` unless ``-f`` is given, and
    even then a directory is never overwritten.
    """

    name = "mv"
    description = "Move/rename files and directories"
    usage = "mv [-f] source... destination"

    async def execute(self, args: list[str], cwd: str, stdin: str | None = None) -> CommandResult:
        """Move each source; stop at the first failure."""
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
                name = posixpath.basename(source_path)
                target = posixpath.join(dest_path, name)
                shown = posixpath.join(destination, name)
            else:
                target = dest_path
                shown = destination
            action = f"cannot move '{source}' to"

            if target == source_path:
                return failure(f"{self.name}: '{source}' and '{shown}' are the same file")
            if stat.is_directory() and target.startswith(source_path + "/"):
                return failure(
                    f"{self.name}: cannot move '{source}' to a subdirectory of itself, '{shown}'"
                )

            if await self.exists(target):
                if not options.force:
                    return failure(self.error_kind(ErrorKind.ALREADY_EXISTS, shown, action=action))
                if await self.is_directory(target):
                    return failure(self.error_kind(ErrorKind.IS_A_DIRECTORY, shown, action=action))
                try:
                    await self._fs.unlink(target)
                except OSError as exc:
                    return failure(self.error(exc, shown, action=action))

            try:
                await self._fs.rename(source_path, target)
            except OSError as exc:
                return failure(self.error(exc, shown, action=action))

        return success()
