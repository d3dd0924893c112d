"""diff: compare two files line by line.

The default output is the classic ``diff`` format (``2c2``, ``< old``,
``---``, ``> new``); ``-u`` prints a unified diff with three lines of
context.  Exit status is 0 for identical inputs, 1 when they differ and
2 when an operand cannot be read.  One operand may be ``-`` to compare
against piped input.
"""

from __future__ import annotations

import difflib

from sandbox_shell.commands.base import (
    CommandResult,
    FileCommand,
    join_lines,
    scan_args,
    split_lines,
    success,
)
from sandbox_shell.errors import ShellError

EXIT_DIFFERENT = 1
EXIT_TROUBLE = 2


def _span(start: int, end: int) -> str:
    """Render a 0-based half-open line range in diff's 1-based notation."""
    if end - start == 1:
        return str(start + 1)
    return f"{start + 1},{end}"


def normal_diff(old: list[str], new: list[str]) -> list[str]:
    """Return the classic diff of two line lists (empty when equal)."""
    out: list[str] = []
    matcher = difflib.SequenceMatcher(a=old, b=new, autojunk=False)
    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
        match tag:
            case "replace":
                out.append(f"{_span(i1, i2)}c{_span(j1, j2)}")
                out.extend(f"< {line}" for line in old[i1:i2])
                out.append("---")
                out.extend(f"> {line}" for line in new[j1:j2])
            case "delete":
                out.append(f"{_span(i1, i2)}d{j1}")
                out.extend(f"< {line}" for line in old[i1:i2])
            case "insert":
                out.append(f"{i1}a{_span(j1, j2)}")
                out.extend(f"> {line}" for line in new[j1:j2])
            case _:
                pass
    return out


def unified_diff(old: list[str], new: list[str], old_name: str, new_name: str) -> list[str]:
    """Return a unified diff with ``---``/``+++`` headers (empty when equal)."""
    return list(
        difflib.unified_diff(old, new, fromfile=old_name, tofile=new_name, lineterm="")
    )


class DiffCommand(FileCommand):
    """Report the differences between two files."""

    name = "diff"
    description = "Compare files line by line"
    usage = "diff [-u] file1 file2"

    async def execute(self, args: list[str], cwd: str, stdin: str | None = None) -> CommandResult:
        """Compare the two operands."""
        chars, files = scan_args(args)
        unified = "u" in chars
        if not files:
            return self._trouble(f"{self.name}: missing operand")
        if len(files) == 1:
            return self._trouble(f"{self.name}: missing operand after '{files[0]}'")
        if len(files) > 2:
            return self._trouble(f"{self.name}: extra operand '{files[2]}'")
        if (rejected := self.check_operands([f for f in files if f != "-"])) is not None:
            return rejected

        texts: list[str] = []
        for file in files:
            if file == "-":
                if stdin is None:
                    return self._trouble(f"{self.name}: reading from stdin is not supported")
                texts.append(stdin)
                continue
            try:
                texts.append(await self.read_text(self.resolve(file, cwd)))
            except (ShellError, OSError) as exc:
                return self._trouble(self.error(exc, file))

        old, new = (split_lines(text) for text in texts)
        if unified:
            report = unified_diff(old, new, files[0], files[1])
        else:
            report = normal_diff(old, new)
        if not report:
            return success()
        return CommandResult(exit_code=EXIT_DIFFERENT, stdout=join_lines(report))

    def _trouble(self, message: str) -> CommandResult:
        return CommandResult(exit_code=EXIT_TROUBLE, stderr=message)
