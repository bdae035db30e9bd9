"""In-memory debug log.

Captures records from Python's logging module into a ring buffer so a host
(or ``actionbar --debug``) can inspect what the dialogs did without writing a
log file on every keystroke.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING

from actionbar.limits import MAX_LOG_LINES, MAX_LOG_MESSAGE_LENGTH

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

log = logging.getLogger(__name__)


@dataclass(slots=True)
class LogEntry:
    """A captured log record."""

    level: str
    message: str
    timestamp: float


log_buffer: deque[LogEntry] = deque(maxlen=MAX_LOG_LINES)


def _truncate(message: str) -> str:
    if len(message) > MAX_LOG_MESSAGE_LENGTH:
        return message[:MAX_LOG_MESSAGE_LENGTH] + "... [truncated]"
    return message


class DebugLogHandler(logging.Handler):
    """Logging handler that appends records to the debug buffer."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            log_buffer.append(
                LogEntry(
                    level=record.levelname,
                    message=_truncate(self.format(record)),
                    timestamp=record.created,
                )
            )
        except Exception:
            self.handleError(record)


_debug_logging_initialized: bool = False


def setup_debug_logging(level: int = logging.DEBUG) -> None:
    """Attach the buffer handler to the ``actionbar`` logger.

    Idempotent: later calls only adjust the level.
    """
    global _debug_logging_initialized

    package_logger = logging.getLogger("actionbar")
    package_logger.setLevel(level)
    if _debug_logging_initialized:
        return

    handler = DebugLogHandler()
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    package_logger.addHandler(handler)
    _debug_logging_initialized = True
    log.debug("Debug logging initialized")


def clear_log_buffer() -> None:
    log_buffer.clear()


def format_entry(entry: LogEntry) -> str:
    ts = datetime.fromtimestamp(entry.timestamp).strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]
    return f"{ts} [{entry.level}] {entry.message}"


def iter_log_lines() -> Iterator[str]:
    for entry in list(log_buffer):
        yield format_entry(entry)


def export_logs_to_file(path: Path) -> int:
    """Write the buffer to ``path``.

    Returns:
        Number of log entries written.
    """
    entries = list(log_buffer)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        f.write("# actionbar debug log\n")
        f.write(f"# Total entries: {len(entries)}\n\n")
        for entry in entries:
            f.write(format_entry(entry) + "\n")
    return len(entries)
