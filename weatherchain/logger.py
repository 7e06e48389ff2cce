"""Thread-safe append-only log file."""

from __future__ import annotations

import threading
import time
from enum import Enum
from typing import TextIO


class LogLevel(Enum):
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"
    DEBUG = "DEBUG"


class LoggerNotOpenError(RuntimeError):
    """Raised when logging before a log file has been opened."""


class Logger:
    """Writes timestamped, levelled lines to a log file."""

    def __init__(self) -> None:
        self._file: TextIO | None = None
        self._lock = threading.Lock()

    def set_log_file(self, filename) -> None:
        """Open ``filename`` for appending, closing any previous file."""
        with self._lock:
            if self._file is not None:
                self._file.close()
                self._file = None
            self._file = open(filename, "a", encoding="utf-8")

    def close(self) -> None:
        with self._lock:
            if self._file is not None:
                self._file.close()
                self._file = None

    def log(self, level: LogLevel, message: str) -> None:
        with self._lock:
            if self._file is None:
                raise LoggerNotOpenError(
                    "Logfile not opened. Use set_log_file() to open a logfile."
                )
            stamp = time.strftime("%Y-%m-%d %H:%M:%S", time.localtime())
            label = level.value if isinstance(level, LogLevel) else "UNKNOWN"
            self._file.write(f"[{stamp}] [{label}] {message}\n")
            self._file.flush()