"""uniq: collapse adjacent repeated lines.

Only *adjacent* duplicates are merged, so ``a a b a`` becomes ``a b a``;
pipe through ``sort`` first for a global de-duplication.

Flags:
    ``-c``  prefix each line with its repeat count (width 7, as GNU does).
    ``-d``  print only lines that were repeated.
    ``-u``  print only lines that were not repeated.

When ``-d`` and ``-u`` are both given, ``-d`` wins and ``-u`` is ignored.
"""

from __future__ import annotations

from dataclasses import dataclass
from itertools import groupby

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

_COUNT_WIDTH = 7


@dataclass
class _UniqOptions:
    count: bool = False
    repeated_only: bool = False
    unique_only: bool = False


def _parse(args: list[str]) -> tuple[_UniqOptions, list[str]]:
    options = _UniqOptions()
    chars, files = scan_args(args)
    for char in chars:
        match char:
            case "c":
                options.count = True
            case "d":
                options.repeated_only = True
            case "u":
                options.unique_only = True
            case _:
                pass
    return options, files


def collapse(lines: list[str], options: _UniqOptions) -> list[str]:
    """Group adjacent equal lines and render the groups that pass the filters."""
    result: list[str] = []
    for line, group in groupby(lines):
        repeats = sum(1 for _ in group)
        if options.repeated_only:
            if repeats == 1:
                continue
        elif options.unique_only and repeats > 1:
            continue
        result.append(f"{repeats:>{_COUNT_WIDTH}} {line}" if options.count else line)
    return result


class UniqCommand(FileCommand):
    """Report or omit repeated lines."""

    name = "uniq"
    description = "Report or omit repeated lines"
    usage = "uniq [-c] [-d] [-u] [file]"

    async def execute(self, args: list[str], cwd: str, stdin: str | None = None) -> CommandResult:
        """Filter piped input if present, otherwise the file operand."""
        options, files = _parse(args)
        if len(files) > 1:
            return self.usage_error(f"extra operand '{files[1]}'")
        if (rejected := self.check_operands(files)) is not None:
            return rejected

        if stdin is not None:
            text = stdin
        elif not files:
            return success()
        else:
            file = files[0]
            try:
                text = await self.read_text(self.resolve(file, cwd))
            except (ShellError, OSError) as exc:
                return failure(self.error(exc, file))

        return success(join_lines(collapse(split_lines(text), options)))
