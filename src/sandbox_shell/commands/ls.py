"""ls: list directory contents.

Flags are read one character at a time from any ``-`` token, so ``-la``,
``-al`` and ``-l -a`` are equivalent.  Unknown characters are ignored.

Ordering:
    - default: directories first, then by name.
    - ``-l``: by name only, one long-format line per entry.

Long format mimics ``ls -l`` closely enough for diffing, with fixed
owner/group placeholders since the virtual filesystem has no users::

    drwxr-xr-x 1 user user        0 2024-05-01 09:30 src/
    -rw-r--r-- 1 user user      118 2024-05-01 09:31 README.md
"""

from __future__ import annotations

import posixpath
from dataclasses import dataclass
from datetime import UTC, datetime

from sandbox_shell.commands.base import (
    CommandResult,
    FileCommand,
    failure,
    join_lines,
    scan_args,
    success,
)
from sandbox_shell.errors import ShellError
from sandbox_shell.fs.protocol import DirEntry, StatResult

_SIZE_WIDTH = 8


@dataclass
class _LsOptions:
    long: bool = False
    all: bool = False


def _parse(args: list[str]) -> tuple[_LsOptions, list[str]]:
    options = _LsOptions()
    chars, paths = scan_args(args)
    for char in chars:
        match char:
            case "l":
                options.long = True
            case "a" | "A":
                options.all = True
            case _:
                pass
    return options, paths


def _format_mtime(mtime_ms: float | None) -> str:
    if mtime_ms is None:
        return "unknown         "
    return datetime.fromtimestamp(mtime_ms / 1000, tz=UTC).strftime("%Y-%m-%d %H:%M")


def _long_line(name: str, stat: StatResult | None, *, is_directory: bool) -> str:
    permissions = "drwxr-xr-x" if is_directory else "-rw-r--r--"
    size = stat.size if stat is not None else 0
    mtime = _format_mtime(stat.mtime_ms if stat is not None else None)
    suffix = "/" if is_directory else ""
    return f"{permissions} 1 user user {size:>{_SIZE_WIDTH}} {mtime} {name}{suffix}"


class LsCommand(FileCommand):
    """List files and directories."""

    name = "ls"
    description = "List directory contents"
    usage = "ls [-la] [file...]"

    async def execute(self, args: list[str], cwd: str, stdin: str | None = None) -> CommandResult:
        """List each operand (default ``.``).

        Any operand that cannot be stat'ed aborts the whole listing with
        that error; no partial output is returned.
        """
        options, paths = _parse(args)
        targets = paths or ["."]
        if (rejected := self.check_operands(targets)) is not None:
            return rejected

        blocks: list[list[str]] = []
        for target in targets:
            try:
                path = self.resolve(target, cwd)
                stat = await self._fs.stat(path)
                if stat.is_directory():
                    lines = await self._list_directory(path, options)
                    if len(targets) > 1:
                        lines.insert(0, f"{target}:")
                else:
                    lines = [self._file_line(path, stat, options)]
            except (ShellError, OSError) as exc:
                return failure(self.error(exc, target, action="cannot access"))
            blocks.append(lines)

        output: list[str] = []
        for index, lines in enumerate(blocks):
            if index:
                output.append("")
            output.extend(lines)
        return success(join_lines(output))

    @staticmethod
    def _file_line(path: str, stat: StatResult, options: _LsOptions) -> str:
        name = posixpath.basename(path)
        if options.long:
            return _long_line(name, stat, is_directory=False)
        return name

    async def _list_directory(self, path: str, options: _LsOptions) -> list[str]:
        entries = await self._fs.readdir(path)
        if not options.all:
            entries = [entry for entry in entries if not entry.name.startswith(".")]

        if options.long:
            entries.sort(key=lambda entry: entry.name)
            return [await self._entry_line(path, entry) for entry in entries]

        entries.sort(key=lambda entry: (not entry.is_directory(), entry.name))
        return [entry.name for entry in entries]

    async def _entry_line(self, directory: str, entry: DirEntry) -> str:
        try:
            stat = await self._fs.stat(posixpath.join(directory, entry.name))
        except OSError:
            stat = None
        return _long_line(entry.name, stat, is_directory=entry.is_directory())
