"""Depth-first directory traversal built only from ``readdir`` and ``stat``.

Recursive commands (``cp -r``, ``rm -r``) need to visit every path under
a directory.  Rather than reaching into a backend's internals, the
walker composes the two public listing operations of
``VirtualFileSystem``, awaiting each one in turn.  There is no parallel
fan-out across entries, so a walk observes the filesystem exactly as a
sequence of single operations would.
"""

from __future__ import annotations

import posixpath
from collections.abc import AsyncIterator
from dataclasses import dataclass

from sandbox_shell.fs.protocol import VirtualFileSystem


@dataclass(frozen=True)
class WalkEntry:
    """A path visited during a walk, relative to the walk's starting point."""

    path: str
    relative: str
    is_directory: bool


async def walk(
    fs: VirtualFileSystem, top: str, *, topdown: bool = True
) -> AsyncIterator[WalkEntry]:
    """Yield every path below *top* (excluding *top* itself).

    Args:
        fs: The filesystem to traverse.
        top: Absolute path of a directory.
        topdown: Yield a directory before its contents when True (copy
            order), after them when False (removal order).

    """
    for entry in await fs.readdir(top):
        path = posixpath.join(top, entry.name)
        relative = posixpath.relpath(path, top)
        if entry.is_directory():
            node = WalkEntry(path=path, relative=relative, is_directory=True)
            if topdown:
                yield node
            async for child in walk(fs, path, topdown=topdown):
                yield WalkEntry(
                    path=child.path,
                    relative=posixpath.join(relative, child.relative),
                    is_directory=child.is_directory,
                )
            if not topdown:
                yield node
        else:
            yield WalkEntry(path=path, relative=relative, is_directory=False)
