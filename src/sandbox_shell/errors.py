"""Error taxonomy and the POSIX message mapper.

Every command funnels its failures through this module so the text a
user sees is identical across the whole command set.  There are two
sources of errors:

- **Shell-side** errors raised before the filesystem is touched:
  ``UsageError`` (bad operand count or shape) and ``PathSecurityError``
  (absolute paths, attempts to leave the project root).
- **Filesystem** errors: the builtin ``OSError`` family raised by a
  ``VirtualFileSystem`` backend.

``classify()`` reduces any exception to a closed ``ErrorKind`` and
``describe()`` renders the canonical message for that kind.  Anything
the mapper does not recognise is ``UNKNOWN`` and keeps its raw text, so
unexpected failures are never hidden behind a generic message.
"""

import errno
from enum import StrEnum


class ErrorKind(StrEnum):
    """Every way a command can fail."""

    USAGE = "usage"
    SECURITY = "security"
    NOT_FOUND = "not_found"
    PERMISSION = "permission"
    NOT_A_DIRECTORY = "not_a_directory"
    IS_A_DIRECTORY = "is_a_directory"
    ALREADY_EXISTS = "already_exists"
    NOT_EMPTY = "not_empty"
    UNKNOWN = "unknown"


_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.NOT_FOUND: "No such file or directory",
    ErrorKind.PERMISSION: "Permission denied",
    ErrorKind.NOT_A_DIRECTORY: "Not a directory",
    ErrorKind.IS_A_DIRECTORY: "Is a directory",
    ErrorKind.ALREADY_EXISTS: "File exists",
    ErrorKind.NOT_EMPTY: "Directory not empty",
}


class ShellError(Exception):
    """Base class for errors raised by the shell itself."""

    kind: ErrorKind = ErrorKind.UNKNOWN


class UsageError(ShellError):
    """Wrong number or shape of operands."""

    kind = ErrorKind.USAGE


class PathSecurityError(ShellError):
    """An operand tried to address something outside the project root."""

    kind = ErrorKind.SECURITY


def classify(exc: BaseException) -> ErrorKind:
    """Map an exception to its ``ErrorKind``.

    Subclass checks come before the ``OSError`` errno fallback because
    the builtin subclasses carry the more precise meaning.
    """
    if isinstance(exc, ShellError):
        return exc.kind
    if isinstance(exc, FileNotFoundError):
        return ErrorKind.NOT_FOUND
    if isinstance(exc, PermissionError):
        return ErrorKind.PERMISSION
    if isinstance(exc, NotADirectoryError):
        return ErrorKind.NOT_A_DIRECTORY
    if isinstance(exc, IsADirectoryError):
        return ErrorKind.IS_A_DIRECTORY
    if isinstance(exc, FileExistsError):
        return ErrorKind.ALREADY_EXISTS
    if isinstance(exc, OSError) and exc.errno == errno.ENOTEMPTY:
        return ErrorKind.NOT_EMPTY
    return ErrorKind.UNKNOWN


def describe(exc: BaseException) -> str:
    """Return the user-facing message for *exc*.

    Mapped kinds get their POSIX text; shell errors and unknown failures
    keep their own message.
    """
    kind = classify(exc)
    message = _MESSAGES.get(kind)
    if message is not None:
        return message
    if isinstance(exc, OSError) and exc.strerror:
        return exc.strerror
    return str(exc) or type(exc).__name__


def format_error(
    command: str,
    exc: BaseException,
    *,
    operand: str | None = None,
    action: str | None = None,
) -> str:
    """Render one ``<command>: [<operand>: ]<message>`` line.

    Args:
        command: The command name that failed.
        exc: The exception being reported.
        operand: The user-supplied operand involved, if any.
        action: A verb phrase such as ``"cannot stat"``; when given the
            operand is quoted after it (``cannot stat 'x'``).

    """
    if isinstance(exc, ShellError):
        operand = None
    return _render(command, describe(exc), operand=operand, action=action)


def format_kind(
    command: str,
    kind: ErrorKind,
    *,
    operand: str | None = None,
    action: str | None = None,
) -> str:
    """Render an error line for a condition detected without an exception.

    Used when a command inspects a ``stat`` result itself, e.g. a file
    operand given to ``cd`` is reported as ``NOT_A_DIRECTORY``.
    """
    return _render(command, _MESSAGES[kind], operand=operand, action=action)


def _render(command: str, message: str, *, operand: str | None, action: str | None) -> str:
    if operand is None:
        return f"{command}: {message}"
    if action is not None:
        return f"{command}: {action} '{operand}': {message}"
    return f"{command}: {operand}: {message}"
