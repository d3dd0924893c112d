"""sort: sort lines of text."""

from __future__ import annotations

import re
from dataclasses import dataclass

from sandbox_shell.commands.base import (
    CommandResult,
    FileCommand,
    failure,
    join_lines,
    scan_args,
    split_lines,
    success,
)
from sandbox_shell.errors import ShellError

_LEADING_NUMBER = re.compile(r"^\s*([-+]?\d+(?:\.\d+)?)")


@dataclass
class _SortOptions:
    reverse: bool = False
    numeric: bool = False
    unique: bool = False


def _parse(args: list[str]) -> tuple[_SortOptions, list[str]]:
    options = _SortOptions()
    chars, files = scan_args(args)
    for char in chars:
        match char:
            case "r":
                options.reverse = True
            case "n":
                options.numeric = True
            case "u":
                options.unique = True
            case _:
                pass
    return options, files


def _numeric_key(line: str) -> tuple[float, str]:
    match = _LEADING_NUMBER.match(line)
    return (float(match.group(1)) if match else 0.0, line)


def sort_lines(lines: list[str], *, reverse: bool, numeric: bool, unique: bool) -> list[str]:
    """Sort *lines*; lines without a leading number count as 0 under ``numeric``."""
    if unique:
        lines = list(dict.fromkeys(lines))
    if numeric:
        return sorted(lines, key=_numeric_key, reverse=reverse)
    return sorted(lines, reverse=reverse)


class SortCommand(FileCommand):
    """Sort the concatenated lines of all files (or piped input)."""

    name = "sort"
    description = "Sort lines of text"
    usage = "sort [-rnu] [file...]"

    async def execute(self, args: list[str], cwd: str, stdin: str | None = None) -> CommandResult:
        """Sort and print the lines."""
        options, files = _parse(args)
        if not files:
            if stdin is None:
                return failure(f"{self.name}: reading from stdin is not supported")
            lines = split_lines(stdin)
        else:
            if (rejected := self.check_operands(files)) is not None:
                return rejected
            lines = []
            for file in files:
                try:
                    lines.extend(split_lines(await self.read_text(self.resolve(file, cwd))))
                except (ShellError, OSError) as exc:
                    return failure(self.error(exc, file))

        ordered = sort_lines(
            lines, reverse=options.reverse, numeric=options.numeric, unique=options.unique
        )
        return success(join_lines(ordered))
