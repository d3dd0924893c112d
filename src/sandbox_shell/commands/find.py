"""find: list files in a directory hierarchy.

Supported expression: ``-name``/``-iname`` glob, ``-type f|d`` and
``-maxdepth N``.  All tests given must hold for a path to be printed.
Paths are printed as the start operand joined with the path below it,
so ``find .`` prints ``./src/main.py``.
"""

from __future__ import annotations

import fnmatch
import posixpath
from dataclasses import dataclass

from sandbox_shell.commands.base import (
    CommandResult,
    FileCommand,
    failure,
    join_lines,
    success,
)
from sandbox_shell.errors import ShellError, UsageError
from sandbox_shell.fs.walk import walk

_TYPES = ("f", "d")


@dataclass
class FindFilter:
    """The tests a path must pass to be printed."""

    name: str | None = None
    ignore_case: bool = False
    file_type: str | None = None
    max_depth: int | None = None

    def matches(self, name: str, *, is_directory: bool, depth: int) -> bool:
        """Return True if an entry *depth* levels below its start passes."""
        if self.max_depth is not None and depth > self.max_depth:
            return False
        if self.file_type is not None and self.file_type != ("d" if is_directory else "f"):
            return False
        if self.name is None:
            return True
        if self.ignore_case:
            return fnmatch.fnmatchcase(name.lower(), self.name.lower())
        return fnmatch.fnmatchcase(name, self.name)


def parse_expression(args: list[str]) -> tuple[list[str], FindFilter]:
    """Split *args* into start paths and the filter they are tested with.

    Raises:
        UsageError: For an unknown predicate or a missing/invalid argument.

    """
    paths: list[str] = []
    found = FindFilter()
    i = 0
    while i < len(args):
        arg = args[i]
        if not arg.startswith("-") or arg == "-":
            paths.append(arg)
            i += 1
            continue
        if arg not in ("-name", "-iname", "-type", "-maxdepth"):
            msg = f"unknown predicate '{arg}'"
            raise UsageError(msg)
        if i + 1 >= len(args):
            msg = f"missing argument to '{arg}'"
            raise UsageError(msg)
        value = args[i + 1]
        match arg:
            case "-name" | "-iname":
                found.name = value
                found.ignore_case = arg == "-iname"
            case "-type":
                if value not in _TYPES:
                    msg = f"Unknown argument to -type: {value}"
                    raise UsageError(msg)
                found.file_type = value
            case _:
                if not value.isdigit():
                    msg = f"invalid argument '{value}' to -maxdepth"
                    raise UsageError(msg)
                found.max_depth = int(value)
        i += 2
    return paths, found


class FindCommand(FileCommand):
    """Walk each start path and print the entries that pass the filter.

    A missing start path is reported and the remaining ones are still
    searched.
    """

    name = "find"
    description = "Search for files and directories"
    usage = "find [path...] [-name pattern] [-iname pattern] [-type f|d] [-maxdepth N]"

    async def execute(self, args: list[str], cwd: str, stdin: str | None = None) -> CommandResult:
        """Print every matching path below the start paths."""
        try:
            paths, found = parse_expression(args)
        except UsageError as exc:
            return failure(self.error(exc))
        paths = paths or ["."]
        if (rejected := self.check_operands(paths)) is not None:
            return rejected

        report: list[str] = []
        errors: list[str] = []
        for start in paths:
            try:
                report.extend(await self._search(start, cwd, found))
            except (ShellError, OSError) as exc:
                errors.append(self.error(exc, start))

        if errors:
            return failure("\n".join(errors), stdout=join_lines(report))
        return success(join_lines(report))

    async def _search(self, start: str, cwd: str, found: FindFilter) -> list[str]:
        path = self.resolve(start, cwd)
        stat = await self._fs.stat(path)
        shown = start.rstrip("/") or start
        matches: list[str] = []
        is_directory = stat.is_directory()
        if found.matches(posixpath.basename(shown), is_directory=is_directory, depth=0):
            matches.append(start)
        if not is_directory:
            return matches
        async for entry in walk(self._fs, path):
            depth = entry.relative.count("/") + 1
            name = posixpath.basename(entry.relative)
            if found.matches(name, is_directory=entry.is_directory, depth=depth):
                matches.append(posixpath.join(shown, entry.relative))
        return matches
