"""Virtual filesystem: the capability protocol and an in-memory backend.

Re-exports public symbols so callers can write::

    from sandbox_shell.fs import MemoryFileSystem, VirtualFileSystem
"""

from sandbox_shell.fs.memory import MemoryFileSystem
from sandbox_shell.fs.persistence import dump_filesystem, load_filesystem
from sandbox_shell.fs.protocol import DirEntry, FileType, StatResult, VirtualFileSystem
from sandbox_shell.fs.walk import WalkEntry, walk

__all__ = [
    "DirEntry",
    "FileType",
    "MemoryFileSystem",
    "StatResult",
    "VirtualFileSystem",
    "WalkEntry",
    "dump_filesystem",
    "load_filesystem",
    "walk",
]
