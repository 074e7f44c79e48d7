"""Thread-aware console and file logger with coloured level prefixes."""

from __future__ import annotations

import sys
import threading
import time
from enum import Enum
from typing import Callable, Optional, TextIO

__all__ = [
    "LogLevel",
    "ThreadLogger",
    "get_logger",
    "log_info",
    "log_warn",
    "log_error",
    "log_debug",
]


class LogLevel(Enum):
    """Severity of a log record."""

    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"
    DEBUG = "DEBUG"


_COLORS = {
    LogLevel.INFO: "\033[32m",
    LogLevel.WARN: "\033[33m",
    LogLevel.ERROR: "\033[31m",
    LogLevel.DEBUG: "\033[36m",
}
_RESET = "\033[0m"


class ThreadLogger:
    """Serialises log output from many threads to stdout, a file and a callback."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._local = threading.local()
        self._file: Optional[TextIO] = None
        self._callback: Optional[Callable[[str], None]] = None

    @property
    def file_logging(self) -> bool:
        """Whether records are also appended to a file."""
        return self._file is not None

    def format_message(
        self, message: str, level: LogLevel = LogLevel.INFO, thread_id: int = -1
    ) -> str:
        """Build the uncoloured text of a record."""
        timestamp = time.strftime("%Y-%m-%d %H:%M:%S")
        prefix = "" if thread_id == -1 else f"Thread {thread_id}: "
        return f"[{timestamp}] [{level.value}] {prefix}{message}"

    def log(
        self, message: str, level: LogLevel = LogLevel.INFO, thread_id: int = -1
    ) -> None:
        """Write one record; nested calls from the same thread are dropped."""
        if getattr(self._local, "active", False):
            return
        self._local.active = True
        try:
            with self._lock:
                line = self.format_message(message, level, thread_id)
                sys.stdout.write(f"{_COLORS.get(level, '')}{line}{_RESET}\n")
                sys.stdout.flush()
                if self._file is not None:
                    self._file.write(line + "\n")
                    self._file.flush()
                if self._callback is not None:
                    self._callback(line)
        except Exception:
            sys.stderr.write("[ThreadLogger] Logging failed due to exception.\n")
        finally:
            self._local.active = False

    def enable_file_logging(self, filename: str = "thread.log") -> bool:
        """Append records to ``filename``; return whether the file could be opened."""
        with self._lock:
            if self._file is not None:
                self._file.close()
                self._file = None
            try:
                self._file = open(filename, "a", encoding="utf-8")
            except OSError:
                self._file = None
            return self._file is not None

    def disable_file_logging(self) -> None:
        """Stop writing records to a file."""
        with self._lock:
            if self._file is not None:
                self._file.close()
            self._file = None

    def set_callback(self, callback: Optional[Callable[[str], None]]) -> None:
        """Forward every formatted record to ``callback`` (or stop with ``None``)."""
        with self._lock:
            self._callback = callback


_default_logger = ThreadLogger()


def get_logger() -> ThreadLogger:
    """Return the process-wide logger."""
    return _default_logger


def log_info(message: str) -> None:
    _default_logger.log(message, LogLevel.INFO)


def log_warn(message: str) -> None:
    _default_logger.log(message, LogLevel.WARN)


def log_error(message: str) -> None:
    _default_logger.log(message, LogLevel.ERROR)


def log_debug(message: str) -> None:
    _default_logger.log(message, LogLevel.DEBUG)