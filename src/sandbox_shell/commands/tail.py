"""tail: print the last lines of files."""

from sandbox_shell.commands.head import HeadCommand


class TailCommand(HeadCommand):
    """Print the last N lines (default 10) of each file.

    Argument handling, headers and error reporting are shared with
    ``head``; only the line selection differs.
    """

    name = "tail"
    description = "Display the last lines of files"
    usage = "tail [-n lines] [file...]"

    def select(self, lines: list[str], count: int) -> list[str]:
        """Pick the last *count* lines."""
        return lines[max(len(lines) - count, 0) :]
