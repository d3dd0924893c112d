"""In-memory virtual filesystem with inodes and path resolution.

This is the reference backend for ``VirtualFileSystem``.  It models the
Unix layout:

- **Inode**: metadata record for a file or directory (type, data, mtime).
  The name does NOT live in the inode; it lives in the parent directory.

- **Directory**: a special inode whose ``children`` map names to inode
  numbers.

- **Path resolution**: ``/src/app/main.py`` is walked component by
  component from the root inode.

All public operations are coroutines so the backend is interchangeable
with storage that really does suspend on I/O.  Nothing here awaits, so
operations are atomic with respect to other tasks on the same loop.
"""

from __future__ import annotations

import errno
import time
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from itertools import count
from typing import Any, TypeAlias

from sandbox_shell.fs.protocol import DirEntry, FileType, StatResult

Clock: TypeAlias = Callable[[], float]


def _now_ms() -> float:
    return time.time() * 1000


@dataclass
class _Inode:
    """Internal inode.

    For files, ``data`` holds the UTF-8 encoded content.
    For directories, ``children`` maps names to inode numbers.
    """

    inode_number: int
    file_type: FileType
    mtime_ms: float
    data: bytes = b""
    children: dict[str, int] = field(default_factory=dict[str, int])

    @property
    def size(self) -> int:
        """Return the size of the file data in bytes."""
        return len(self.data)

    def to_stat(self) -> StatResult:
        """Create a read-only snapshot of this inode."""
        return StatResult(file_type=self.file_type, size=self.size, mtime_ms=self.mtime_ms)


def _split_path(path: str) -> tuple[str, str]:
    """Split a path into (parent_path, child_name).

    Examples::

        "/foo/bar/baz.txt" -> ("/foo/bar", "baz.txt")
        "/hello.txt" -> ("/", "hello.txt")
        "/" -> ("", "")

    """
    if path == "/":
        return ("", "")
    path = path.rstrip("/")
    last_slash = path.rfind("/")
    if last_slash == 0:
        return ("/", path[1:])
    return (path[:last_slash], path[last_slash + 1 :])


class MemoryFileSystem:
    """An in-memory filesystem with inodes and hierarchical directories.

    The filesystem starts with an empty root directory at ``/``.  All
    operations take absolute paths and resolve them from the root inode.
    """

    def __init__(self, *, clock: Clock = _now_ms) -> None:
        """Create a filesystem with an empty root directory.

        Args:
            clock: Returns the current time in milliseconds; used for mtimes.

        """
        self._clock = clock
        self._inode_counter = count(start=0)
        root = self._new_inode(FileType.DIRECTORY)
        self._inodes: dict[int, _Inode] = {root.inode_number: root}
        self._root_ino: int = root.inode_number

    @classmethod
    def from_files(cls, files: Mapping[str, str], *, clock: Clock = _now_ms) -> MemoryFileSystem:
        """Build a filesystem pre-populated with ``{path: content}``.

        Parent directories are created as needed.  A path ending in
        ``/`` creates an (empty) directory instead of a file.
        """
        fs = cls(clock=clock)
        for path, content in files.items():
            if path.endswith("/"):
                fs.ensure_dir(path.rstrip("/") or "/")
            else:
                parent, _ = _split_path(path)
                fs.ensure_dir(parent)
                fs.put(path, content)
        return fs

    def _new_inode(self, file_type: FileType) -> _Inode:
        return _Inode(
            inode_number=next(self._inode_counter),
            file_type=file_type,
            mtime_ms=self._clock(),
        )

    def _resolve(self, path: str) -> _Inode | None:
        """Walk the path from root and return the target inode, if any.

        Raises:
            NotADirectoryError: If an intermediate component is a file.

        """
        if path == "/":
            return self._inodes[self._root_ino]

        current = self._inodes[self._root_ino]
        for part in path.strip("/").split("/"):
            if current.file_type is not FileType.DIRECTORY:
                msg = f"Not a directory: {path}"
                raise NotADirectoryError(errno.ENOTDIR, msg)
            child_ino = current.children.get(part)
            if child_ino is None:
                return None
            current = self._inodes[child_ino]
        return current

    def _require(self, path: str) -> _Inode:
        inode = self._resolve(path)
        if inode is None:
            msg = f"No such file or directory: {path}"
            raise FileNotFoundError(errno.ENOENT, msg)
        return inode

    def _require_parent(self, path: str) -> tuple[_Inode, str]:
        """Return the parent directory inode of *path* and the child name."""
        parent_path, name = _split_path(path)
        if not name:
            msg = "Operation not permitted on root directory"
            raise PermissionError(errno.EPERM, msg)
        parent = self._require(parent_path)
        if parent.file_type is not FileType.DIRECTORY:
            msg = f"Not a directory: {parent_path}"
            raise NotADirectoryError(errno.ENOTDIR, msg)
        return parent, name

    # -- synchronous helpers (seeding, snapshots, tests) ----------------------

    def exists(self, path: str) -> bool:
        """Check whether a path exists."""
        try:
            return self._resolve(path) is not None
        except NotADirectoryError:
            return False

    def ensure_dir(self, path: str) -> None:
        """Create *path* and any missing parents as directories."""
        if path in ("", "/"):
            return
        parent_path, name = _split_path(path)
        self.ensure_dir(parent_path)
        parent = self._require(parent_path)
        if name in parent.children:
            if self._inodes[parent.children[name]].file_type is not FileType.DIRECTORY:
                msg = f"Not a directory: {path}"
                raise NotADirectoryError(errno.ENOTDIR, msg)
            return
        inode = self._new_inode(FileType.DIRECTORY)
        self._inodes[inode.inode_number] = inode
        parent.children[name] = inode.inode_number

    def put(self, path: str, content: str) -> None:
        """Create or replace a file synchronously."""
        parent, name = self._require_parent(path)
        child_ino = parent.children.get(name)
        if child_ino is None:
            inode = self._new_inode(FileType.FILE)
            self._inodes[inode.inode_number] = inode
            parent.children[name] = inode.inode_number
        else:
            inode = self._inodes[child_ino]
            if inode.file_type is FileType.DIRECTORY:
                msg = f"Is a directory: {path}"
                raise IsADirectoryError(errno.EISDIR, msg)
        inode.data = content.encode()
        inode.mtime_ms = self._clock()

    def get(self, path: str) -> str:
        """Read a file synchronously."""
        inode = self._require(path)
        if inode.file_type is FileType.DIRECTORY:
            msg = f"Is a directory: {path}"
            raise IsADirectoryError(errno.EISDIR, msg)
        return inode.data.decode()

    # -- VirtualFileSystem ------------------------------------------------------

    async def read_file(self, path: str) -> str:
        """Return the text content of a file.

        Raises:
            FileNotFoundError: If the path does not exist.
            IsADirectoryError: If the path is a directory.

        """
        return self.get(path)

    async def write_file(self, path: str, content: str) -> None:
        """Create or replace a file.

        Raises:
            FileNotFoundError: If the parent directory does not exist.
            IsADirectoryError: If the path is a directory.

        """
        self.put(path, content)

    async def readdir(self, path: str) -> list[DirEntry]:
        """List a directory's entries in name order.

        Raises:
            FileNotFoundError: If the path does not exist.
            NotADirectoryError: If the path is not a directory.

        """
        inode = self._require(path)
        if inode.file_type is not FileType.DIRECTORY:
            msg = f"Not a directory: {path}"
            raise NotADirectoryError(errno.ENOTDIR, msg)
        return [
            DirEntry(name=name, file_type=self._inodes[ino].file_type)
            for name, ino in sorted(inode.children.items())
        ]

    async def mkdir(self, path: str) -> None:
        """Create an empty directory.

        Raises:
            FileExistsError: If the path already exists.
            FileNotFoundError: If the parent directory does not exist.

        """
        parent, name = self._require_parent(path)
        if name in parent.children:
            msg = f"File exists: {path}"
            raise FileExistsError(errno.EEXIST, msg)
        inode = self._new_inode(FileType.DIRECTORY)
        self._inodes[inode.inode_number] = inode
        parent.children[name] = inode.inode_number
        parent.mtime_ms = self._clock()

    async def stat(self, path: str) -> StatResult:
        """Return metadata for the given path.

        Raises:
            FileNotFoundError: If the path does not exist.

        """
        return self._require(path).to_stat()

    async def unlink(self, path: str) -> None:
        """Remove a file.

        Raises:
            FileNotFoundError: If the path does not exist.
            IsADirectoryError: If the path is a directory.

        """
        parent, name = self._require_parent(path)
        child_ino = parent.children.get(name)
        if child_ino is None:
            msg = f"No such file or directory: {path}"
            raise FileNotFoundError(errno.ENOENT, msg)
        if self._inodes[child_ino].file_type is FileType.DIRECTORY:
            msg = f"Is a directory: {path}"
            raise IsADirectoryError(errno.EISDIR, msg)
        del parent.children[name]
        del self._inodes[child_ino]
        parent.mtime_ms = self._clock()

    async def rmdir(self, path: str) -> None:
        """Remove an empty directory.

        Raises:
            FileNotFoundError: If the path does not exist.
            NotADirectoryError: If the path is a file.
            OSError: ``ENOTEMPTY`` if the directory still has children.

        """
        parent, name = self._require_parent(path)
        child_ino = parent.children.get(name)
        if child_ino is None:
            msg = f"No such file or directory: {path}"
            raise FileNotFoundError(errno.ENOENT, msg)
        inode = self._inodes[child_ino]
        if inode.file_type is not FileType.DIRECTORY:
            msg = f"Not a directory: {path}"
            raise NotADirectoryError(errno.ENOTDIR, msg)
        if inode.children:
            msg = f"Directory not empty: {path}"
            raise OSError(errno.ENOTEMPTY, msg)
        del parent.children[name]
        del self._inodes[child_ino]
        parent.mtime_ms = self._clock()

    async def rename(self, old_path: str, new_path: str) -> None:
        """Move a name from one directory to another.

        The inode itself is untouched, so directories move with their
        whole subtree.

        Raises:
            FileNotFoundError: If the source or the target's parent is missing.
            FileExistsError: If the target already exists.
            OSError: ``EINVAL`` when moving a directory inside itself.

        """
        old_parent, old_name = self._require_parent(old_path)
        ino = old_parent.children.get(old_name)
        if ino is None:
            msg = f"No such file or directory: {old_path}"
            raise FileNotFoundError(errno.ENOENT, msg)
        if new_path.startswith(old_path.rstrip("/") + "/"):
            msg = f"Cannot move {old_path} inside itself"
            raise OSError(errno.EINVAL, msg)
        new_parent, new_name = self._require_parent(new_path)
        if new_name in new_parent.children:
            msg = f"File exists: {new_path}"
            raise FileExistsError(errno.EEXIST, msg)
        del old_parent.children[old_name]
        new_parent.children[new_name] = ino
        now = self._clock()
        old_parent.mtime_ms = now
        new_parent.mtime_ms = now

    # -- serialization ----------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        """Serialize the filesystem to a JSON-compatible dictionary."""
        inodes = {}
        for ino_num, inode in self._inodes.items():
            inodes[str(ino_num)] = {
                "inode_number": inode.inode_number,
                "file_type": inode.file_type.value,
                "mtime_ms": inode.mtime_ms,
                "data": inode.data.decode(),
                "children": dict(inode.children),
            }
        return {"root_ino": self._root_ino, "inodes": inodes}

    @classmethod
    def from_dict(cls, data: dict[str, Any], *, clock: Clock = _now_ms) -> MemoryFileSystem:
        """Rebuild a filesystem from the output of ``to_dict()``."""
        fs = cls(clock=clock)
        fs._root_ino = data["root_ino"]
        fs._inodes = {}
        for ino_data in data["inodes"].values():
            inode = _Inode(
                inode_number=ino_data["inode_number"],
                file_type=FileType(ino_data["file_type"]),
                mtime_ms=ino_data.get("mtime_ms", fs._clock()),
                data=ino_data.get("data", "").encode(),
                children=ino_data.get("children", {}),
            )
            fs._inodes[inode.inode_number] = inode
        fs._inode_counter = count(start=max(fs._inodes, default=0) + 1)
        return fs
