"""wc: count lines, words and bytes."""

from __future__ import annotations

from dataclasses import dataclass

from sandbox_shell.commands.base import (
    CommandResult,
    FileCommand,
    failure,
    join_lines,
    scan_args,
    success,
)
from sandbox_shell.errors import ShellError

_COLUMN_WIDTH = 8


@dataclass
class _WcOptions:
    lines: bool = False
    words: bool = False
    bytes: bool = False

    def columns(self) -> tuple[bool, bool, bool]:
        if not (self.lines or self.words or self.bytes):
            return (True, True, True)
        return (self.lines, self.words, self.bytes)


@dataclass(frozen=True)
class _Counts:
    lines: int
    words: int
    bytes: int

    @classmethod
    def of(cls, text: str) -> _Counts:
        return cls(lines=text.count("\n"), words=len(text.split()), bytes=len(text.encode()))

    def __add__(self, other: _Counts) -> _Counts:
        return _Counts(
            lines=self.lines + other.lines,
            words=self.words + other.words,
            bytes=self.bytes + other.bytes,
        )


def _parse(args: list[str]) -> tuple[_WcOptions, list[str]]:
    options = _WcOptions()
    chars, files = scan_args(args)
    for char in chars:
        match char:
            case "l":
                options.lines = True
            case "w":
                options.words = True
            case "c" | "m":
                options.bytes = True
            case _:
                pass
    return options, files


def _render(counts: _Counts, options: _WcOptions, label: str | None) -> str:
    values = (counts.lines, counts.words, counts.bytes)
    parts = [
        f"{value:>{_COLUMN_WIDTH}}"
        for value, shown in zip(values, options.columns(), strict=True)
        if shown
    ]
    if label is not None:
        parts.append(label)
    return " ".join(parts)


class WcCommand(FileCommand):
    """Print newline, word, and byte counts for each file."""

    name = "wc"
    description = "Count lines, words, and characters"
    usage = "wc [-lwc] [file...]"

    async def execute(self, args: list[str], cwd: str, stdin: str | None = None) -> CommandResult:
        """Count each file (plus a total line), or piped input."""
        options, files = _parse(args)
        if not files:
            if stdin is None:
                return failure(f"{self.name}: reading from stdin is not supported")
            return success(join_lines([_render(_Counts.of(stdin), options, None)]))
        if (rejected := self.check_operands(files)) is not None:
            return rejected

        lines: list[str] = []
        errors: list[str] = []
        total = _Counts(0, 0, 0)
        for file in files:
            try:
                counts = _Counts.of(await self.read_text(self.resolve(file, cwd)))
            except (ShellError, OSError) as exc:
                errors.append(self.error(exc, file))
                continue
            total += counts
            lines.append(_render(counts, options, file))
        if len(files) > 1:
            lines.append(_render(total, options, "total"))

        if errors:
            return failure("\n".join(errors), stdout=join_lines(lines))
        return success(join_lines(lines))
