"""rm: remove files and directories."""

from __future__ import annotations

import posixpath
from dataclasses import dataclass

from sandbox_shell.commands.base import CommandResult, FileCommand, failure, scan_args, success
from sandbox_shell.errors import ErrorKind, ShellError, classify
from sandbox_shell.fs.walk import walk
from sandbox_shell.paths import is_within


@dataclass
class _RmOptions:
    recursive: bool = False
    force: bool = False
    empty_dirs: bool = False


def _parse(args: list[str]) -> tuple[_RmOptions, list[str]]:
    options = _RmOptions()
    chars, paths = scan_args(args)
    for char in chars:
        match char:
            case "r" | "R":
                options.recursive = True
            case "f":
                options.force = True
            case "d":
                options.empty_dirs = True
            case _:
                pass
    return options, paths


class RmCommand(FileCommand):
    """Remove each operand.

    Directories need ``-r``.  Without it a non-empty directory is
    refused with ``Directory not empty``; an empty one is refused with
    ``Is a directory`` unless ``-d`` is given.  ``-f`` silences missing
    operands only.  The working directory and its ancestors are never
    removed.  Every operand is attempted; failures are collected.
    """

    name = "rm"
    description = "Remove files and directories"
    usage = "rm [-rfd] file..."

    async def execute(self, args: list[str], cwd: str, stdin: str | None = None) -> CommandResult:
        """Remove the operands in *args*."""
        options, paths = _parse(args)
        if not paths:
            if options.force:
                return success()
            return self.usage_error("missing operand")
        if (rejected := self.check_operands(paths)) is not None:
            return rejected

        errors: list[str] = []
        for operand in paths:
            message = await self._remove(operand, cwd, options)
            if message is not None:
                errors.append(message)

        if errors:
            return failure("\n".join(errors))
        return success()

    async def _remove(self, operand: str, cwd: str, options: _RmOptions) -> str | None:
        """Remove one operand, returning an error line on failure."""
        if posixpath.basename(operand.rstrip("/")) in (".", ".."):
            return f"{self.name}: refusing to remove '.' or '..' directory: skipping '{operand}'"
        try:
            path = self.resolve(operand, cwd)
        except ShellError as exc:
            return self.error(exc)
        if is_within(cwd, path):
            return f"{self.name}: refusing to remove '{operand}': contains the working directory"
        action = "cannot remove"

        try:
            stat = await self._fs.stat(path)
        except OSError as exc:
            if options.force and classify(exc) is ErrorKind.NOT_FOUND:
                return None
            return self.error(exc, operand, action=action)

        try:
            if not stat.is_directory():
                await self._fs.unlink(path)
            elif options.recursive:
                await self._remove_tree(path)
            elif await self._fs.readdir(path):
                return self.error_kind(ErrorKind.NOT_EMPTY, operand, action=action)
            elif options.empty_dirs:
                await self._fs.rmdir(path)
            else:
                return self.error_kind(ErrorKind.IS_A_DIRECTORY, operand, action=action)
        except OSError as exc:
            return self.error(exc, operand, action=action)
        return None

    async def _remove_tree(self, path: str) -> None:
        """Remove *path* and everything below it, deepest entries first."""
        async for entry in walk(self._fs, path, topdown=False):
            if entry.is_directory:
                await self._fs.rmdir(entry.path)
            else:
                await self._fs.unlink(entry.path)
        await self._fs.rmdir(path)
