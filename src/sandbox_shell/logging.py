"""Shell audit log.

Every command line a shell runs leaves a trail here: which segments were
dispatched and in what directory, where ``cd`` moved the session, which
names were unknown, which commands failed, and any exception a command
let escape.  An embedding layer (the REPL's ``:log``, the web UI's
``/api/log``, an agent harness) reads it back to see exactly what ran.

The buffer is bounded.  A web session can live for a long time, so once
``capacity`` entries are held the oldest ones are dropped first.
"""

from collections import deque
from dataclasses import dataclass
from enum import IntEnum

DEFAULT_CAPACITY = 1000


class LogLevel(IntEnum):
    """How serious an event is; levels compare with ``<``."""

    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3


@dataclass(frozen=True)
class LogEntry:
    """One audit record.

    Attributes:
        level: Severity of the event.
        message: What happened, e.g. ``"cwd / -> /src"``.
        source: ``"shell"`` for dispatcher events, otherwise the name of
            the command that failed.

    """

    level: LogLevel
    message: str
    source: str

    def __str__(self) -> str:
        """Render as ``[LEVEL] source: message``."""
        return f"[{self.level.name}] {self.source}: {self.message}"


class Logger:
    """Bounded, append-only buffer of ``LogEntry`` records."""

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        """Create an empty log holding at most *capacity* entries."""
        if capacity < 1:
            msg = f"capacity must be positive, got {capacity}"
            raise ValueError(msg)
        self._entries: deque[LogEntry] = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        """Return the maximum number of entries kept."""
        return self._entries.maxlen or DEFAULT_CAPACITY

    @property
    def entries(self) -> list[LogEntry]:
        """Return a copy of every entry, oldest first."""
        return list(self._entries)

    def log(self, level: LogLevel, message: str, *, source: str) -> None:
        """Record an event, evicting the oldest entry when full."""
        self._entries.append(LogEntry(level=level, message=message, source=source))

    def filter(
        self,
        *,
        min_level: LogLevel | None = None,
        source: str | None = None,
    ) -> list[LogEntry]:
        """Return the entries at or above *min_level* from *source*.

        Either criterion may be omitted.
        """
        return [
            entry
            for entry in self._entries
            if (min_level is None or entry.level >= min_level)
            and (source is None or entry.source == source)
        ]

    def tail(self, count: int) -> list[LogEntry]:
        """Return the newest *count* entries, oldest first."""
        if count <= 0:
            return []
        return list(self._entries)[-count:]

    def clear(self) -> None:
        """Drop every entry."""
        self._entries.clear()
