"""The shell: command dispatcher for the sandboxed project.

The shell reads a command line, splits it into segments, tokenizes each
segment, dispatches to the registered command, and returns a single
``CommandResult``.  It owns the only piece of session state, the
working directory.

Design choices:
    - **Returns results, not prints.**  The caller (REPL, web UI, agent
      tool) decides how to display output; ``format_result`` is the
      shared rendering.
    - **Command dispatch via an immutable mapping.**  The registry is
      built once by ``build_registry`` and shared read-only with
      ``which`` and ``help``.
    - **Commands are the catch boundary.**  ``Command.run`` never
      raises, so the dispatcher has no error handling of its own beyond
      the unknown-command case.

Compound lines follow the usual shell rules: ``a && b`` runs ``b`` only
after a success, ``a || b`` only after a failure, ``a ; b`` always, and
``a | b`` hands ``a``'s stdout to ``b`` as its input once ``a`` has
finished.
"""

from sandbox_shell.commands import build_registry
from sandbox_shell.commands.base import CommandInfo, CommandResult
from sandbox_shell.fs.protocol import VirtualFileSystem
from sandbox_shell.logging import Logger, LogLevel
from sandbox_shell.paths import ROOT, is_within
from sandbox_shell.tokenizer import Operator, split_compound, tokenize

EXIT_NOT_FOUND = 127

_SOURCE = "shell"


def format_result(result: CommandResult) -> str:
    """Render a result as terminal text.

    Stdout comes first, then stderr on its own line, then
    ``Exit code: N`` when the command failed.  A result with nothing to
    show renders as ``(no output)``.
    """
    output = result.stdout
    trailer = [result.stderr] if result.stderr else []
    if not result.ok:
        trailer.append(f"Exit code: {result.exit_code}")
    if trailer:
        if output and not output.endswith("\n"):
            output += "\n"
        output += "\n".join(trailer)
    return output or "(no output)"


class Shell:
    """Command interpreter over a virtual filesystem."""

    def __init__(
        self,
        *,
        fs: VirtualFileSystem,
        cwd: str = ROOT,
        root: str = ROOT,
        logger: Logger | None = None,
    ) -> None:
        """Create a shell bound to a filesystem.

        Args:
            fs: The project's virtual filesystem.
            cwd: The initial working directory (absolute, inside *root*).
            root: The project root no command may leave.
            logger: Audit log; a fresh one is created when omitted.

        Raises:
            ValueError: If *cwd* lies outside *root*.

        """
        if not is_within(cwd, root):
            msg = f"Working directory {cwd!r} is outside the project root {root!r}"
            raise ValueError(msg)

        self._fs = fs
        self._cwd = cwd
        self._root = root
        self._logger = logger if logger is not None else Logger()
        self._commands = build_registry(fs, root=root, logger=self._logger)

    @property
    def cwd(self) -> str:
        """Return the current working directory."""
        return self._cwd

    @property
    def root(self) -> str:
        """Return the project root."""
        return self._root

    @property
    def fs(self) -> VirtualFileSystem:
        """Return the filesystem the shell operates on."""
        return self._fs

    @property
    def log(self) -> Logger:
        """Return the shell's audit log."""
        return self._logger

    @property
    def command_names(self) -> list[str]:
        """Return the sorted names of every registered command."""
        return sorted(self._commands)

    def list_commands(self) -> list[CommandInfo]:
        """Return a descriptor for every command, sorted by name."""
        return [self._commands[name].info for name in self.command_names]

    async def execute(self, line: str, cwd: str | None = None) -> CommandResult:
        """Run a (possibly compound) command line.

        Args:
            line: The raw command line, e.g. ``"cd src && ls -l"``.
            cwd: Working directory to run in; defaults to the shell's own.

        Returns:
            The combined result.  Stdout and stderr of every segment that
            ran are concatenated (a segment feeding a pipe contributes
            only its stderr); the exit code is that of the last segment
            that ran; ``new_cwd`` is set when the line changed directory.

        Raises:
            ValueError: If *cwd* lies outside the project root.

        """
        start = self._cwd if cwd is None else cwd
        if not is_within(start, self._root):
            msg = f"Working directory {start!r} is outside the project root {self._root!r}"
            raise ValueError(msg)

        current = start
        stdout: list[str] = []
        stderr: list[str] = []
        exit_code = 0
        previous: Operator | None = None
        piped: str | None = None
        skipped = False

        for segment in split_compound(line):
            if previous is Operator.PIPE:
                # A pipeline runs or is skipped as a whole.
                skip = skipped
            else:
                skip = (previous is Operator.AND and exit_code != 0) or (
                    previous is Operator.OR and exit_code == 0
                )
            stdin = piped if previous is Operator.PIPE else None
            previous = segment.operator
            piped = None
            skipped = skip
            if skip:
                continue

            result = await self._execute_segment(segment.text, current, stdin)
            exit_code = result.exit_code
            if result.new_cwd is not None and result.new_cwd != current:
                self._logger.log(
                    LogLevel.INFO, f"cwd {current} -> {result.new_cwd}", source=_SOURCE
                )
                current = result.new_cwd
            if result.stderr:
                stderr.append(result.stderr)
            if segment.operator is Operator.PIPE:
                piped = result.stdout
            else:
                stdout.append(result.stdout)

        self._cwd = current
        return CommandResult(
            exit_code=exit_code,
            stdout="".join(stdout),
            stderr="\n".join(stderr),
            new_cwd=current if current != start else None,
        )

    async def _execute_segment(self, text: str, cwd: str, stdin: str | None) -> CommandResult:
        """Tokenize and dispatch one simple command."""
        tokens = tokenize(text)
        if not tokens:
            return CommandResult(exit_code=0)

        name, args = tokens[0], tokens[1:]
        self._logger.log(LogLevel.DEBUG, f"run {text!r} in {cwd}", source=_SOURCE)

        command = self._commands.get(name)
        if command is None:
            self._logger.log(LogLevel.WARNING, f"command not found: {name}", source=_SOURCE)
            return CommandResult(
                exit_code=EXIT_NOT_FOUND, stderr=f"{name}: command not found"
            )

        result = await command.run(args, cwd, stdin)
        if not result.ok:
            self._logger.log(
                LogLevel.WARNING, f"exit {result.exit_code}: {text}", source=_SOURCE
            )
        return result
