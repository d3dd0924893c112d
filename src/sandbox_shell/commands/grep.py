"""grep: print lines that match a pattern.

Patterns are Python regular expressions.  As with GNU grep the exit
status is 0 when a line was selected, 1 when nothing was, and 2 when an
operand could not be searched or the pattern is invalid; matches found
in readable operands are still printed in that case.
"""

from __future__ import annotations

import posixpath
import re
from dataclasses import dataclass

from sandbox_shell.commands.base import (
    EXIT_SUCCESS,
    CommandResult,
    FileCommand,
    join_lines,
    scan_args,
    split_lines,
)
from sandbox_shell.errors import ErrorKind, ShellError
from sandbox_shell.fs.protocol import VirtualFileSystem
from sandbox_shell.fs.walk import walk

EXIT_NO_MATCH = 1
EXIT_TROUBLE = 2


@dataclass
class _GrepOptions:
    ignore_case: bool = False
    line_numbers: bool = False
    recursive: bool = False
    invert: bool = False
    count: bool = False
    files_only: bool = False


def _parse(args: list[str]) -> tuple[_GrepOptions, list[str]]:
    options = _GrepOptions()
    chars, operands = scan_args(args)
    for char in chars:
        match char:
            case "i":
                options.ignore_case = True
            case "n":
                options.line_numbers = True
            case "r" | "R":
                options.recursive = True
            case "v":
                options.invert = True
            case "c":
                options.count = True
            case "l":
                options.files_only = True
            case _:
                pass
    return options, operands


def match_lines(
    text: str, regex: re.Pattern[str], options: _GrepOptions, name: str | None
) -> tuple[int, list[str]]:
    """Return how many lines were selected and the report lines for one input.

    *name* prefixes every line when several inputs are searched.
    """
    selected = [
        (number, line)
        for number, line in enumerate(split_lines(text), start=1)
        if (regex.search(line) is not None) != options.invert
    ]
    if options.files_only:
        return len(selected), [name or "(standard input)"] if selected else []
    prefix = f"{name}:" if name is not None else ""
    if options.count:
        return len(selected), [f"{prefix}{len(selected)}"]
    if options.line_numbers:
        return len(selected), [f"{prefix}{number}:{line}" for number, line in selected]
    return len(selected), [f"{prefix}{line}" for _, line in selected]


class GrepCommand(FileCommand):
    """Search files, directory trees (``-r``) or piped input for a pattern."""

    name = "grep"
    description = "Search for patterns in files"
    usage = "grep [-inrvcl] pattern [file...]"

    async def execute(self, args: list[str], cwd: str, stdin: str | None = None) -> CommandResult:
        """Print the matching lines of every input."""
        options, operands = _parse(args)
        if not operands:
            return self.usage_error("missing pattern")
        pattern, *files = operands
        try:
            regex = re.compile(pattern, re.IGNORECASE if options.ignore_case else 0)
        except re.error as exc:
            return CommandResult(
                exit_code=EXIT_TROUBLE,
                stderr=f"{self.name}: invalid regular expression '{pattern}': {exc}",
            )

        if not files:
            if stdin is not None:
                selected, report = match_lines(stdin, regex, options, None)
                return _result(selected, report, [])
            if not options.recursive:
                return CommandResult(
                    exit_code=EXIT_TROUBLE,
                    stderr=f"{self.name}: reading from stdin is not supported",
                )
        if (rejected := self.check_operands(files)) is not None:
            return rejected

        selected = 0
        report: list[str] = []
        errors: list[str] = []
        several = len(files) > 1
        for file in files or ["."]:
            try:
                path = self.resolve(file, cwd)
                named = several
                if await self.is_directory(path):
                    if not options.recursive:
                        errors.append(self.error_kind(ErrorKind.IS_A_DIRECTORY, file))
                        continue
                    inputs = await _tree_files(self._fs, path, file if files else None)
                    named = True
                else:
                    inputs = [(file, path)]
                for shown, input_path in inputs:
                    content = await self._fs.read_file(input_path)
                    count, lines = match_lines(content, regex, options, shown if named else None)
                    selected += count
                    report.extend(lines)
            except (ShellError, OSError) as exc:
                errors.append(self.error(exc, file))

        return _result(selected, report, errors)


def _result(selected: int, report: list[str], errors: list[str]) -> CommandResult:
    if errors:
        return CommandResult(
            exit_code=EXIT_TROUBLE, stdout=join_lines(report), stderr="\n".join(errors)
        )
    exit_code = EXIT_SUCCESS if selected else EXIT_NO_MATCH
    return CommandResult(exit_code=exit_code, stdout=join_lines(report))


async def _tree_files(
    fs: VirtualFileSystem, top: str, operand: str | None
) -> list[tuple[str, str]]:
    """List ``(shown name, path)`` for every file below *top*.

    Names are relative to the operand as typed, or bare when grep was
    given no operand at all.
    """
    files: list[tuple[str, str]] = []
    async for entry in walk(fs, top):
        if entry.is_directory:
            continue
        shown = entry.relative if operand is None else posixpath.join(operand, entry.relative)
        files.append((shown, entry.path))
    return files
