"""mkdir: create directories."""

from __future__ import annotations

import posixpath
from dataclasses import dataclass

from sandbox_shell.commands.base import CommandResult, FileCommand, failure, scan_args, success
from sandbox_shell.errors import ErrorKind, ShellError, classify


@dataclass
class _MkdirOptions:
    parents: bool = False


def _parse(args: list[str]) -> tuple[_MkdirOptions, list[str]]:
    options = _MkdirOptions()
    chars, paths = scan_args(args)
    for char in chars:
        match char:
            case "p":
                options.parents = True
            case _:
                pass
    return options, paths


class MkdirCommand(FileCommand):
    """Create each directory operand.

    With ``-p`` missing parents are created and an existing directory is
    not an error.
    """

    name = "mkdir"
    description = "Create directories"
    usage = "mkdir [-p] directory..."

    async def execute(self, args: list[str], cwd: str, stdin: str | None = None) -> CommandResult:
        """Create the directories named in *args*."""
        options, paths = _parse(args)
        if not paths:
            return self.usage_error("missing operand")
        if (rejected := self.check_operands(paths)) is not None:
            return rejected

        errors: list[str] = []
        for operand in paths:
            try:
                path = self.resolve(operand, cwd)
            except ShellError as exc:
                errors.append(self.error(exc))
                continue
            message = await (self._make_parents(path) if options.parents else self._make(path))
            if message is not None:
                errors.append(
                    self.error_kind(message, operand, action="cannot create directory")
                )

        if errors:
            return failure("\n".join(errors))
        return success()

    async def _make(self, path: str) -> ErrorKind | None:
        if await self.exists(path):
            return ErrorKind.ALREADY_EXISTS
        parent = posixpath.dirname(path)
        try:
            parent_stat = await self._fs.stat(parent)
        except OSError as exc:
            return classify(exc)
        if not parent_stat.is_directory():
            return ErrorKind.NOT_A_DIRECTORY
        await self._fs.mkdir(path)
        return None

    async def _make_parents(self, path: str) -> ErrorKind | None:
        current = ""
        for part in path.strip("/").split("/"):
            current = f"{current}/{part}"
            try:
                stat = await self._fs.stat(current)
            except FileNotFoundError:
                await self._fs.mkdir(current)
                continue
            if not stat.is_directory():
                return ErrorKind.ALREADY_EXISTS if current == path else ErrorKind.NOT_A_DIRECTORY
        return None
