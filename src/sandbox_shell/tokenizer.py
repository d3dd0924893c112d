"""Command-line tokenizer.

Two passes turn a raw line into work for the dispatcher:

1. ``split_compound()`` cuts the line at unquoted ``&&``, ``||``, ``;``
   and ``|`` operators, remembering which operator followed each
   segment.
2. ``tokenize()`` splits one segment into argv-style tokens.

Quoting rules are deliberately small: text between matching single or
double quotes is literal (whitespace and operators included) and the
quote characters are dropped.  An unterminated quote is closed at the
end of the input instead of raising, because agent-generated command
lines are often slightly malformed and a best-effort parse is more
useful than a hard failure.  There is no variable, glob, or escape
expansion.
"""

from dataclasses import dataclass
from enum import StrEnum

_QUOTES = frozenset("'\"")


class Operator(StrEnum):
    """Operators that join segments of a compound command line."""

    AND = "&&"
    OR = "||"
    SEQUENCE = ";"
    PIPE = "|"


@dataclass(frozen=True)
class Segment:
    """One simple command and the operator that follows it (if any)."""

    text: str
    operator: Operator | None = None


def tokenize(line: str) -> list[str]:
    """Split *line* into tokens, honouring single and double quotes.

    ``'a b'`` and ``"a b"`` each produce the single token ``a b``.
    Quotes may appear mid-token (``--name="x y"`` gives ``--name=x y``),
    and an explicitly quoted empty string yields an empty token.
    """
    tokens: list[str] = []
    current: list[str] = []
    quote: str | None = None
    in_token = False

    for char in line:
        if quote is not None:
            if char == quote:
                quote = None
            else:
                current.append(char)
        elif char in _QUOTES:
            quote = char
            in_token = True
        elif char.isspace():
            if in_token:
                tokens.append("".join(current))
                current = []
                in_token = False
        else:
            current.append(char)
            in_token = True

    if in_token:
        tokens.append("".join(current))
    return tokens


def split_compound(line: str) -> list[Segment]:
    """Split *line* at unquoted compound operators.

    Quote characters are kept in the segment text so ``tokenize()`` can
    still see them.  Empty segments (``a ;; b``) are dropped.
    """
    segments: list[Segment] = []
    current: list[str] = []
    quote: str | None = None
    i = 0

    def _flush(operator: Operator | None) -> None:
        text = "".join(current).strip()
        if text:
            segments.append(Segment(text=text, operator=operator))
        current.clear()

    while i < len(line):
        char = line[i]
        pair = line[i : i + 2]
        if quote is not None:
            if char == quote:
                quote = None
            current.append(char)
        elif char in _QUOTES:
            quote = char
            current.append(char)
        elif pair in (Operator.AND, Operator.OR):
            _flush(Operator(pair))
            i += 1
        elif char == Operator.PIPE:
            _flush(Operator.PIPE)
        elif char == Operator.SEQUENCE:
            _flush(Operator.SEQUENCE)
        else:
            current.append(char)
        i += 1

    _flush(None)
    return segments
