"""head: print the first lines of files."""

from __future__ import annotations

from sandbox_shell.commands.base import (
    CommandResult,
    FileCommand,
    failure,
    join_lines,
    split_lines,
    success,
)
from sandbox_shell.errors import ShellError, UsageError

DEFAULT_LINE_COUNT = 10


def parse_line_count(args: list[str]) -> tuple[int, list[str]]:
    """Parse ``-n N`` / ``-nN`` / ``-N`` and return ``(count, files)``.

    The two-token and compact forms are equivalent.  Other ``-`` tokens
    are ignored; a lone ``-`` is kept as an operand so the caller can
    reject it.

    Raises:
        UsageError: If the count is missing or not a non-negative integer.

    """
    count = DEFAULT_LINE_COUNT
    files: list[str] = []
    i = 0
    while i < len(args):
        arg = args[i]
        if arg == "-n":
            i += 1
            if i >= len(args):
                msg = "option requires an argument -- 'n'"
                raise UsageError(msg)
            count = _to_count(args[i])
        elif arg.startswith("-n"):
            count = _to_count(arg[2:])
        elif arg[1:].isdigit() and arg.startswith("-"):
            count = int(arg[1:])
        elif arg == "-" or not arg.startswith("-"):
            files.append(arg)
        i += 1
    return count, files


def _to_count(value: str) -> int:
    if not value.isdigit():
        msg = f"invalid number of lines: '{value}'"
        raise UsageError(msg)
    return int(value)


def format_blocks(blocks: list[tuple[str, list[str]]], *, headers: bool) -> str:
    """Render per-file results, with ``==> file <==`` headers when asked."""
    if not headers:
        return join_lines(blocks[0][1])
    output: list[str] = []
    for index, (file, lines) in enumerate(blocks):
        if index:
            output.append("")
        output.append(f"==> {file} <==")
        output.extend(lines)
    return join_lines(output)


class HeadCommand(FileCommand):
    """Print the first N lines (default 10) of each file."""

    name = "head"
    description = "Display the first lines of files"
    usage = "head [-n lines] [file...]"

    def select(self, lines: list[str], count: int) -> list[str]:
        """Pick the lines this command reports."""
        return lines[:count]

    async def execute(self, args: list[str], cwd: str, stdin: str | None = None) -> CommandResult:
        """Print the selected lines of each file, or of piped input."""
        try:
            count, files = parse_line_count(args)
        except UsageError as exc:
            return failure(self.error(exc))

        if not files and stdin is not None:
            return success(join_lines(self.select(split_lines(stdin), count)))
        if not files or "-" in files:
            return failure(f"{self.name}: reading from stdin is not supported")
        if (rejected := self.check_operands(files)) is not None:
            return rejected

        blocks: list[tuple[str, list[str]]] = []
        errors: list[str] = []
        for file in files:
            try:
                content = await self.read_text(self.resolve(file, cwd))
            except (ShellError, OSError) as exc:
                errors.append(self.error(exc, file))
                continue
            blocks.append((file, self.select(split_lines(content), count)))

        output = format_blocks(blocks, headers=len(files) > 1) if blocks else ""
        if errors:
            return failure("\n".join(errors), stdout=output)
        return success(output)
