"""Interactive REPL (Read-Eval-Print Loop) for the sandbox shell.

The REPL is the terminal interface.  It loads (or creates) a project
filesystem, creates a shell, and enters the classic loop:

    1. **Read**: display a prompt and read user input.
    2. **Eval**: pass the line to ``shell.execute()``.
    3. **Print**: display the formatted result.
    4. **Loop**: repeat until ``exit`` or end of input.

Lines starting with ``:`` are REPL meta-commands rather than shell
commands: ``:log`` prints the audit log, ``:log N`` its newest N
entries, and ``:log clear`` empties it.

The helper functions (``build_prompt``, ``format_banner``,
``handle_meta``) are pure and testable.  ``run()`` is the I/O
entrypoint.
"""

import asyncio
import readline
import sys
from pathlib import Path

from sandbox_shell.completer import Completer
from sandbox_shell.fs import MemoryFileSystem, dump_filesystem, load_filesystem
from sandbox_shell.shell import Shell, format_result

_BANNER_WIDTH = 38
_EXIT_WORDS = frozenset(["exit", "quit"])


def format_banner(snapshot: Path | None) -> str:
    """Format the start-up banner.

    Args:
        snapshot: The snapshot file backing the session, if any.

    Returns:
        A formatted string suitable for printing to the console.

    """
    border = "=" * _BANNER_WIDTH
    header = (
        f"\n  {border}\n"
        "            sandbox-shell\n"
        "     A shell for virtual projects\n"
        f"  {border}\n\n"
    )
    source = f"  Project: {snapshot}" if snapshot is not None else "  Project: (in memory)"
    footer = "\nType 'help' for commands, 'exit' to quit.\n"
    return header + source + "\n" + footer


def build_prompt(shell: Shell) -> str:
    """Build the prompt string showing the working directory.

    Returns:
        A prompt string like ``sandbox:/src $ ``.

    """
    return f"sandbox:{shell.cwd} $ "


def handle_meta(shell: Shell, line: str) -> str:
    """Run a ``:``-prefixed REPL command and return its output."""
    match line.split():
        case [":log"]:
            return "\n".join(str(entry) for entry in shell.log.entries) or "(log is empty)"
        case [":log", "clear"]:
            shell.log.clear()
            return "Log cleared."
        case [":log", count] if count.isdigit():
            return "\n".join(str(entry) for entry in shell.log.tail(int(count))) or "(log is empty)"
        case _:
            return f"Unknown meta-command: {line}"


def open_project(snapshot: Path | None) -> MemoryFileSystem:
    """Load the snapshot if it exists, otherwise start an empty project."""
    if snapshot is not None and snapshot.exists():
        return load_filesystem(snapshot)
    return MemoryFileSystem()


def run(argv: list[str] | None = None) -> None:
    """Run the interactive REPL.

    This is the ``sandbox-shell`` console entry point.  An optional
    argument names a JSON snapshot that is loaded at start-up and
    written back on exit.
    """
    args = sys.argv[1:] if argv is None else argv
    snapshot = Path(args[0]) if args else None
    fs = open_project(snapshot)
    shell = Shell(fs=fs)

    # Wire up tab completion via readline.
    completer = Completer(shell)
    readline.set_completer(completer.complete)
    readline.set_completer_delims(" \t")
    readline.parse_and_bind("tab: complete")

    print(format_banner(snapshot))  # noqa: T201

    try:
        while True:
            try:
                line = input(build_prompt(shell))
            except EOFError:
                # Ctrl+D: graceful exit
                print()  # noqa: T201
                break

            stripped = line.strip()
            if stripped in _EXIT_WORDS:
                break
            if stripped.startswith(":"):
                print(handle_meta(shell, stripped))  # noqa: T201
                continue
            if not stripped:
                continue

            result = asyncio.run(shell.execute(line))
            print(format_result(result).removesuffix("\n"))  # noqa: T201

    except KeyboardInterrupt:
        # Ctrl+C: graceful exit
        print("\nInterrupted.")  # noqa: T201

    finally:
        if snapshot is not None:
            dump_filesystem(fs, snapshot)
            print(f"Saved {snapshot}.")  # noqa: T201
