"""tr: translate or delete characters.

Sets accept ranges (``a-z``) and the escapes ``\\n``, ``\\t`` and
``\\\\``.  When SET2 is shorter than SET1 its last character is
repeated, as GNU ``tr`` does.  File operands after the sets are read
and concatenated when there is no piped input.
"""

from __future__ import annotations

from dataclasses import dataclass

from sandbox_shell.commands.base import CommandResult, FileCommand, failure, success
from sandbox_shell.errors import ShellError

_ESCAPES = {"n": "\n", "t": "\t", "\\": "\\"}


@dataclass
class _TrOptions:
    delete: bool = False
    squeeze: bool = False


def _parse(args: list[str]) -> tuple[_TrOptions, list[str], list[str]]:
    options = _TrOptions()
    sets: list[str] = []
    files: list[str] = []
    for arg in args:
        if arg.startswith("-") and arg != "-" and not sets:
            for char in arg[1:]:
                match char:
                    case "d":
                        options.delete = True
                    case "s":
                        options.squeeze = True
                    case _:
                        pass
        elif len(sets) < (1 if options.delete else 2):
            sets.append(arg)
        else:
            files.append(arg)
    return options, sets, files


def expand_set(text: str) -> str:
    """Expand escapes and ``x-y`` ranges into the full character list."""
    chars: list[str] = []
    i = 0
    while i < len(text):
        char = text[i]
        if char == "\\" and i + 1 < len(text):
            chars.append(_ESCAPES.get(text[i + 1], text[i + 1]))
            i += 2
            continue
        if i + 2 < len(text) and text[i + 1] == "-" and ord(char) <= ord(text[i + 2]):
            chars.extend(chr(code) for code in range(ord(char), ord(text[i + 2]) + 1))
            i += 3
            continue
        chars.append(char)
        i += 1
    return "".join(chars)


def translate(text: str, set1: str, set2: str, *, squeeze: bool = False) -> str:
    """Map every character of *set1* to the matching one of *set2*."""
    source = expand_set(set1)
    target = expand_set(set2)
    target = target + target[-1] * max(len(source) - len(target), 0)
    # Later duplicates in SET1 must not override the first mapping.
    table: dict[int, str] = {}
    for old, new in zip(source, target, strict=False):
        table.setdefault(ord(old), new)
    result = text.translate(table)
    if squeeze:
        result = _squeeze(result, set(target))
    return result


def delete(text: str, set1: str) -> str:
    """Remove every character of *set1*."""
    return text.translate(dict.fromkeys(map(ord, expand_set(set1))))


def _squeeze(text: str, chars: set[str]) -> str:
    out: list[str] = []
    for char in text:
        if out and char == out[-1] and char in chars:
            continue
        out.append(char)
    return "".join(out)


class TrCommand(FileCommand):
    """Translate (``tr SET1 SET2``) or delete (``tr -d SET1``) characters."""

    name = "tr"
    description = "Translate or delete characters"
    usage = "tr [-d] [-s] SET1 [SET2] [file...]"

    async def execute(self, args: list[str], cwd: str, stdin: str | None = None) -> CommandResult:
        """Rewrite the piped input or the concatenated files."""
        options, sets, files = _parse(args)
        if not sets:
            return self.usage_error("missing operand")
        squeeze_only = options.squeeze and not options.delete and len(sets) == 1
        if not options.delete and len(sets) < 2 and not squeeze_only:
            return self.usage_error(f"missing operand after '{sets[0]}'")
        if not options.delete and not squeeze_only and not sets[1]:
            return self.usage_error("when not truncating set1, string2 must be non-empty")

        if stdin is not None:
            text = stdin
        elif not files or "-" in files:
            return failure(f"{self.name}: reading from stdin is not supported")
        else:
            if (rejected := self.check_operands(files)) is not None:
                return rejected
            parts: list[str] = []
            for file in files:
                try:
                    parts.append(await self.read_text(self.resolve(file, cwd)))
                except (ShellError, OSError) as exc:
                    return failure(self.error(exc, file))
            text = "".join(parts)

        if options.delete:
            return success(delete(text, sets[0]))
        if squeeze_only:
            return success(_squeeze(text, set(expand_set(sets[0]))))
        return success(translate(text, sets[0], sets[1], squeeze=options.squeeze))
