"""A sandboxed POSIX-like shell over a virtual project filesystem.

Quick start::

    import asyncio
    from sandbox_shell import MemoryFileSystem, Shell, format_result

    shell = Shell(fs=MemoryFileSystem.from_files({"/README.md": "hi\n"}))
    print(format_result(asyncio.run(shell.execute("cat README.md"))))
"""

from sandbox_shell.commands.base import CommandInfo, CommandResult
from sandbox_shell.fs import MemoryFileSystem, VirtualFileSystem
from sandbox_shell.shell import Shell, format_result

__all__ = [
    "CommandInfo",
    "CommandResult",
    "MemoryFileSystem",
    "Shell",
    "VirtualFileSystem",
    "format_result",
]
