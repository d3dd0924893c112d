"""The command set and its registry.

``build_registry`` constructs every utility once and returns a
read-only ``name -> Command`` mapping.  ``which`` and ``help`` receive
the same view, so introspection always matches what the shell can run.
"""

from collections.abc import Mapping
from types import MappingProxyType

from sandbox_shell.commands.base import (
    EXIT_FAILURE,
    EXIT_SUCCESS,
    Command,
    CommandInfo,
    CommandResult,
    FileCommand,
)
from sandbox_shell.commands.cat import CatCommand
from sandbox_shell.commands.cd import CdCommand
from sandbox_shell.commands.cp import CpCommand
from sandbox_shell.commands.cut import CutCommand
from sandbox_shell.commands.diff import DiffCommand
from sandbox_shell.commands.echo import EchoCommand
from sandbox_shell.commands.find import FindCommand
from sandbox_shell.commands.grep import GrepCommand
from sandbox_shell.commands.head import HeadCommand
from sandbox_shell.commands.help import HelpCommand
from sandbox_shell.commands.ls import LsCommand
from sandbox_shell.commands.mkdir import MkdirCommand
from sandbox_shell.commands.mv import MvCommand
from sandbox_shell.commands.pwd import PwdCommand
from sandbox_shell.commands.rm import RmCommand
from sandbox_shell.commands.sort import SortCommand
from sandbox_shell.commands.tail import TailCommand
from sandbox_shell.commands.touch import TouchCommand
from sandbox_shell.commands.tr import TrCommand
from sandbox_shell.commands.uniq import UniqCommand
from sandbox_shell.commands.wc import WcCommand
from sandbox_shell.commands.which import WhichCommand
from sandbox_shell.fs.protocol import VirtualFileSystem
from sandbox_shell.logging import Logger
from sandbox_shell.paths import ROOT

__all__ = [
    "EXIT_FAILURE",
    "EXIT_SUCCESS",
    "CatCommand",
    "CdCommand",
    "Command",
    "CommandInfo",
    "CommandResult",
    "CpCommand",
    "CutCommand",
    "DiffCommand",
    "EchoCommand",
    "FileCommand",
    "FindCommand",
    "GrepCommand",
    "HeadCommand",
    "HelpCommand",
    "LsCommand",
    "MkdirCommand",
    "MvCommand",
    "PwdCommand",
    "RmCommand",
    "SortCommand",
    "TailCommand",
    "TouchCommand",
    "TrCommand",
    "UniqCommand",
    "WcCommand",
    "WhichCommand",
    "build_registry",
]

_FILE_COMMANDS: tuple[type[FileCommand], ...] = (
    CatCommand,
    CdCommand,
    CpCommand,
    CutCommand,
    DiffCommand,
    FindCommand,
    GrepCommand,
    HeadCommand,
    LsCommand,
    MkdirCommand,
    MvCommand,
    RmCommand,
    SortCommand,
    TailCommand,
    TouchCommand,
    TrCommand,
    UniqCommand,
    WcCommand,
)


def build_registry(
    fs: VirtualFileSystem,
    *,
    root: str = ROOT,
    logger: Logger | None = None,
) -> Mapping[str, Command]:
    """Construct every command and return the immutable registry.

    Args:
        fs: The filesystem every file command operates on.
        root: The project root no operand may escape.
        logger: Audit log shared by all commands.

    """
    commands: dict[str, Command] = {
        cls.name: cls(fs, root=root, logger=logger) for cls in _FILE_COMMANDS
    }
    commands[EchoCommand.name] = EchoCommand(root=root, logger=logger)
    commands[PwdCommand.name] = PwdCommand(root=root, logger=logger)

    view = MappingProxyType(commands)
    commands[WhichCommand.name] = WhichCommand(view, root=root, logger=logger)
    commands[HelpCommand.name] = HelpCommand(view, root=root, logger=logger)
    return view
