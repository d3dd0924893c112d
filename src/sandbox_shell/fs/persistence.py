"""Project snapshots: save a ``MemoryFileSystem`` to JSON and back.

The in-memory filesystem vanishes with the process.  ``sandbox-shell
project.json`` loads a snapshot at start-up and writes it back on exit,
so a project survives between sessions.

A snapshot is the ``to_dict()`` inode table plus a ``format`` version
tag.  File content is stored as text, since the shell only deals in
text files.
"""

import json
from pathlib import Path

from sandbox_shell.fs.memory import MemoryFileSystem

SNAPSHOT_FORMAT = 1


def dump_filesystem(fs: MemoryFileSystem, path: Path) -> None:
    """Write *fs* to *path*, replacing any previous snapshot.

    The JSON is written to a sibling temporary file first and then
    renamed over *path*, so an interrupted save leaves the old snapshot
    intact.
    """
    data = {"format": SNAPSHOT_FORMAT, **fs.to_dict()}
    partial = path.with_name(path.name + ".partial")
    partial.write_text(json.dumps(data, indent=2), encoding="utf-8")
    partial.replace(path)


def load_filesystem(path: Path) -> MemoryFileSystem:
    """Rebuild the filesystem stored at *path*.

    Raises:
        FileNotFoundError: If *path* does not exist.
        ValueError: If the file is not a snapshot this version can read.

    """
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict) or "inodes" not in data:
        msg = f"{path} is not a filesystem snapshot"
        raise ValueError(msg)
    version = data.get("format", SNAPSHOT_FORMAT)
    if version != SNAPSHOT_FORMAT:
        msg = f"{path}: unsupported snapshot format {version}"
        raise ValueError(msg)
    return MemoryFileSystem.from_dict(data)
