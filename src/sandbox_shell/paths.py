"""Path resolution and the project-root guard.

Every command that takes a path operand resolves it here, which is what
keeps the whole command set inside the project root:

1. Absolute operands (``/x``, ``\\x``, ``C:\\x``, ``C:/x``) are rejected
   outright.  Absolute addressing has no meaning inside the sandbox.
2. ``.`` resolves to the working directory unchanged.
3. ``..`` from the root is a hard ceiling, not a silent no-op.
4. Anything else is joined onto the working directory and normalised;
   a result that lands above the root is rejected the same way.
"""

import re

from sandbox_shell.errors import PathSecurityError

ROOT = "/"

_DRIVE_PATTERN = re.compile(r"^[A-Za-z]:[\\/]")


def is_absolute(path: str) -> bool:
    """Return True for Unix, UNC-ish, and drive-letter absolute paths."""
    return path.startswith(("/", "\\")) or _DRIVE_PATTERN.match(path) is not None


def is_within(path: str, root: str = ROOT) -> bool:
    """Return True if *path* is *root* or lies below it."""
    if root == ROOT:
        return path.startswith(ROOT)
    return path == root or path.startswith(root.rstrip("/") + "/")


def reject_absolute(path: str) -> None:
    """Raise ``PathSecurityError`` if *path* is absolute."""
    if is_absolute(path):
        msg = f"absolute paths are not supported: {path}"
        raise PathSecurityError(msg)


def resolve(candidate: str, cwd: str, root: str = ROOT) -> str:
    """Turn a user operand into a normalised absolute virtual path.

    ``.`` and ``..`` segments are collapsed against *cwd*; a ``..`` that
    would climb above *root* raises instead of being clamped.

    Args:
        candidate: The operand as typed (always relative).
        cwd: The current working directory, already inside *root*.
        root: The project root that may never be left.

    Returns:
        The absolute path the operand names.

    Raises:
        PathSecurityError: For absolute operands or paths above *root*.

    """
    reject_absolute(candidate)
    if candidate in ("", "."):
        return cwd
    floor = len(_segments(root))
    parts = _segments(cwd)
    for part in candidate.split("/"):
        if part in ("", "."):
            continue
        if part == "..":
            if len(parts) <= floor:
                msg = "cannot access parent directory: Permission denied"
                raise PathSecurityError(msg)
            parts.pop()
        else:
            parts.append(part)
    return "/" + "/".join(parts)


def _segments(path: str) -> list[str]:
    return [part for part in path.split("/") if part]
