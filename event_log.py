"""
Session event log for aodvsim.

Keeps the most recent simulator events (who, what, detail) in memory for
whatever displays them, and forwards each one to the ``aodvsim`` logger.
"""

from collections import deque
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Deque, Iterator, List, Optional
import json
import logging
import sys

LOGGER_NAME = "aodvsim"


@dataclass(frozen=True)
class LogEntry:
    """One row of the session log."""

    time: datetime
    source: str   # subsystem, e.g. "Graph", "Sim", "UI"
    event: str    # short tag, e.g. "Add", "Path", "Fail"
    detail: str

    def __str__(self) -> str:
        return f"{self.time:%H:%M:%S} [{self.source}:{self.event}] {self.detail}"


class _JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "level": record.levelname,
            "msg": record.getMessage(),
            "logger": record.name,
        }
        extra = getattr(record, "extra", None)
        if isinstance(extra, dict):
            payload.update(extra)
        return json.dumps(payload)


def configure_logging(level: str = "INFO", json_output: bool = False) -> logging.Logger:
    """
    Attach a stdout handler to the ``aodvsim`` logger once.

    Subsequent calls only adjust the level.
    """
    logger = logging.getLogger(LOGGER_NAME)
    if not logger.handlers:
        h = logging.StreamHandler(sys.stdout)
        if json_output:
            h.setFormatter(_JsonFormatter())
        else:
            h.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
        logger.addHandler(h)
    logger.setLevel(level)
    return logger


class EventLog:
    """
    Bounded in-memory log; oldest entries fall off once ``capacity`` is hit.
    """

    def __init__(
        self,
        capacity: int = 500,
        logger: Optional[logging.Logger] = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._entries: Deque[LogEntry] = deque(maxlen=capacity)
        self._log = logger or logging.getLogger(LOGGER_NAME)
        self._clock = clock

    def record(self, source: str, event: str, detail: str, level: int = logging.INFO) -> LogEntry:
        entry = LogEntry(self._clock(), source, event, detail)
        self._entries.append(entry)
        self._log.log(
            level,
            "%s:%s %s",
            source,
            event,
            detail,
            extra={"extra": {"source": source, "event": event, "detail": detail}},
        )
        return entry

    def entries(self) -> List[LogEntry]:
        return list(self._entries)

    def last(self) -> Optional[LogEntry]:
        return self._entries[-1] if self._entries else None

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[LogEntry]:
        return iter(list(self._entries))
