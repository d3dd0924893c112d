"""cut: print selected parts of lines."""

from __future__ import annotations

from dataclasses import dataclass

from sandbox_shell.commands.base import (
    CommandResult,
    FileCommand,
    failure,
    join_lines,
    split_lines,
    success,
)
from sandbox_shell.errors import ShellError, UsageError

_OPEN_END = 4096


@dataclass
class _CutOptions:
    characters: list[int] | None = None
    fields: list[int] | None = None
    delimiter: str = "\t"


def parse_list(text: str) -> list[int]:
    """Expand a list such as ``1,3-5,7-`` into sorted 1-based positions.

    An open range (``N-``) is capped at a large bound; positions beyond
    the end of a line are simply not printed.

    Raises:
        UsageError: If the list is empty or malformed, or names position 0.

    """
    positions: set[int] = set()
    for part in text.split(","):
        start_text, dash, end_text = part.partition("-")
        if not dash:
            end_text = start_text
        if not (start_text or end_text) or not all(
            value.isdigit() for value in (start_text, end_text) if value
        ):
            msg = f"invalid list '{text}'"
            raise UsageError(msg)
        start = int(start_text) if start_text else 1
        end = int(end_text) if end_text else _OPEN_END
        if start == 0 or end == 0:
            msg = "fields and positions are numbered from 1"
            raise UsageError(msg)
        if start > end:
            msg = f"invalid decreasing range '{part}'"
            raise UsageError(msg)
        positions.update(range(start, min(end, _OPEN_END) + 1))
    return sorted(positions)


def _parse(args: list[str]) -> tuple[_CutOptions, list[str]]:
    options = _CutOptions()
    files: list[str] = []
    i = 0
    while i < len(args):
        arg = args[i]
        if arg in ("-c", "-f", "-d"):
            if i + 1 >= len(args):
                msg = f"option requires an argument -- '{arg[1]}'"
                raise UsageError(msg)
            flag, value = arg[1], args[i + 1]
            i += 2
        elif arg[:2] in ("-c", "-f", "-d"):
            flag, value = arg[1], arg[2:]
            i += 1
        else:
            if arg == "-" or not arg.startswith("-"):
                files.append(arg)
            i += 1
            continue
        match flag:
            case "c":
                options.characters = parse_list(value)
            case "f":
                options.fields = parse_list(value)
            case _:
                if len(value) != 1:
                    msg = "the delimiter must be a single character"
                    raise UsageError(msg)
                options.delimiter = value
    if options.characters is not None and options.fields is not None:
        msg = "only one type of list may be specified"
        raise UsageError(msg)
    if options.characters is None and options.fields is None:
        msg = "you must specify a list of bytes, characters, or fields"
        raise UsageError(msg)
    return options, files


def cut_line(line: str, options: _CutOptions) -> str:
    """Return the selected characters or fields of *line*.

    A line without the delimiter is printed whole in field mode.
    """
    if options.characters is not None:
        return "".join(line[pos - 1] for pos in options.characters if pos <= len(line))
    if options.delimiter not in line:
        return line
    parts = line.split(options.delimiter)
    fields = options.fields or []
    return options.delimiter.join(parts[pos - 1] for pos in fields if pos <= len(parts))


class CutCommand(FileCommand):
    """Cut characters (``-c``) or delimited fields (``-f``) from each line."""

    name = "cut"
    description = "Extract sections from lines"
    usage = "cut -c LIST | -f LIST [-d DELIM] [file...]"

    async def execute(self, args: list[str], cwd: str, stdin: str | None = None) -> CommandResult:
        """Print the selected part of every line of the inputs."""
        try:
            options, files = _parse(args)
        except UsageError as exc:
            return failure(self.error(exc))

        if not files and stdin is not None:
            lines = split_lines(stdin)
        elif not files or "-" in files:
            return failure(f"{self.name}: reading from stdin is not supported")
        else:
            if (rejected := self.check_operands(files)) is not None:
                return rejected
            lines = []
            for file in files:
                try:
                    lines.extend(split_lines(await self.read_text(self.resolve(file, cwd))))
                except (ShellError, OSError) as exc:
                    return failure(self.error(exc, file))

        return success(join_lines([cut_line(line, options) for line in lines]))
