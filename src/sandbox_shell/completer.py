"""Tab completer for the sandbox shell.

The completer separates **what to complete** (pure logic, fully
testable) from **how to wire it** (readline integration in the REPL).

The ``complete(text, state)`` method is the readline callback.  It
delegates to ``completions(text, line)`` which looks at the input line
and returns a list of candidate strings.  Only relative paths are
offered, since the shell rejects absolute ones.
"""

from __future__ import annotations

import asyncio
import posixpath
import readline
from typing import TYPE_CHECKING

from sandbox_shell.errors import ShellError
from sandbox_shell.paths import is_absolute, resolve

if TYPE_CHECKING:
    from sandbox_shell.shell import Shell

# Commands whose operands are never paths.
_NON_PATH_COMMANDS: frozenset[str] = frozenset(["echo", "help", "pwd", "which"])

# Segment separators after which a new command name starts.
_COMMAND_STARTERS: frozenset[str] = frozenset(["&&", "||", ";", "|"])


class Completer:
    """Context-aware tab completer for the sandbox shell."""

    def __init__(self, shell: Shell) -> None:
        """Create a completer attached to a shell instance.

        Args:
            shell: The shell whose commands, filesystem, and working
                   directory are used to generate candidates.

        """
        self._shell = shell

    def complete(self, text: str, state: int) -> str | None:
        """Readline callback: return the *state*-th candidate for *text*.

        Args:
            text: The partial word being completed.
            state: Index into the candidate list (0, 1, 2, ...).

        Returns:
            The candidate at *state*, or ``None`` when exhausted.

        """
        line = readline.get_line_buffer()
        candidates = self.completions(text, line)
        if state < len(candidates):
            return candidates[state]
        return None

    def completions(self, text: str, line: str) -> list[str]:
        """Return completion candidates based on context.

        Args:
            text: The partial word under the cursor.
            line: The full input line so far.

        Returns:
            Sorted list of matching candidates.

        """
        words = line.split()
        if not line.endswith(" ") and words:
            words = words[:-1]

        # Start of the line, or right after an operator: command name.
        if not words or words[-1] in _COMMAND_STARTERS:
            return self._complete_commands(text)

        command = words[0]
        for index, word in enumerate(words):
            if word in _COMMAND_STARTERS and index + 1 < len(words):
                command = words[index + 1]
        if command in _NON_PATH_COMMANDS:
            return []
        return self._complete_paths(text)

    # -- private completers ------------------------------------------------

    def _complete_commands(self, text: str) -> list[str]:
        """Complete command names from the shell's registry."""
        return [cmd for cmd in self._shell.command_names if cmd.startswith(text)]

    def _complete_paths(self, text: str) -> list[str]:
        """Complete relative paths below the shell's working directory.

        Split the partial path into a directory and a name prefix,
        list the directory, and filter by prefix.  Directories get a
        trailing ``/`` suffix.  Hidden entries are offered only when the
        prefix itself starts with ``.``.
        """
        if is_absolute(text):
            return []

        directory, prefix = posixpath.split(text)
        try:
            path = resolve(directory, self._shell.cwd, self._shell.root)
            entries = asyncio.run(self._shell.fs.readdir(path))
        except (ShellError, OSError):
            return []

        candidates: list[str] = []
        for entry in entries:
            if not entry.name.startswith(prefix):
                continue
            if entry.name.startswith(".") and not prefix.startswith("."):
                continue
            full = posixpath.join(directory, entry.name) if directory else entry.name
            if entry.is_directory():
                full += "/"
            candidates.append(full)
        return sorted(candidates)

