"""The virtual filesystem capability surface consumed by the shell.

The shell never talks to a concrete storage backend.  Every command
receives an object satisfying ``VirtualFileSystem`` and only calls the
operations listed here.  Paths are always absolute, ``/``-separated
virtual paths; the shell resolves user operands before calling in.

Failures are reported with the builtin ``OSError`` family so the error
mapper in ``sandbox_shell.errors`` can classify them by type:

- ``FileNotFoundError``: the path (or its parent) does not exist.
- ``NotADirectoryError``: a directory operation hit a file.
- ``IsADirectoryError``: a file operation hit a directory.
- ``FileExistsError``: an exclusive create or rename target exists.
- ``PermissionError``: the backend refused access.
- ``OSError`` with ``errno.ENOTEMPTY``: ``rmdir`` on a non-empty directory.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Protocol, runtime_checkable


class FileType(StrEnum):
    """The kind of object a path names."""

    FILE = "file"
    DIRECTORY = "directory"


@dataclass(frozen=True)
class StatResult:
    """Read-only snapshot of a path's metadata."""

    file_type: FileType
    size: int = 0
    mtime_ms: float | None = None

    def is_directory(self) -> bool:
        """Return True if the path is a directory."""
        return self.file_type is FileType.DIRECTORY

    def is_file(self) -> bool:
        """Return True if the path is a regular file."""
        return self.file_type is FileType.FILE


@dataclass(frozen=True)
class DirEntry:
    """One name inside a directory listing."""

    name: str
    file_type: FileType

    def is_directory(self) -> bool:
        """Return True if the entry is a directory."""
        return self.file_type is FileType.DIRECTORY

    def is_file(self) -> bool:
        """Return True if the entry is a regular file."""
        return self.file_type is FileType.FILE


@runtime_checkable
class VirtualFileSystem(Protocol):
    """Asynchronous filesystem operations the command set depends on."""

    async def read_file(self, path: str) -> str:
        """Return the text content of a file."""
        ...

    async def write_file(self, path: str, content: str) -> None:
        """Create or replace a file with *content*."""
        ...

    async def readdir(self, path: str) -> list[DirEntry]:
        """List a directory's entries with their types."""
        ...

    async def mkdir(self, path: str) -> None:
        """Create a single directory whose parent already exists."""
        ...

    async def stat(self, path: str) -> StatResult:
        """Return metadata for *path*."""
        ...

    async def unlink(self, path: str) -> None:
        """Remove a file."""
        ...

    async def rmdir(self, path: str) -> None:
        """Remove an empty directory."""
        ...

    async def rename(self, old_path: str, new_path: str) -> None:
        """Move *old_path* to *new_path*, failing if the target exists."""
        ...
