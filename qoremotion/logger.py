"""Text logger keeping recent messages in memory and writing a daily log file."""

from __future__ import annotations

import enum
import sys
import threading
from collections import deque
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import ClassVar, TextIO

MAX_LOG_ENTRIES = 1000


class LogLevel(enum.IntEnum):
    """Severity of a log message, ordered from least to most severe."""

    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3

    @property
    def label(self) -> str:
        return self.name


@dataclass(frozen=True)
class LogMessage:
    """A logged message with its level and time of day."""

    text: str
    level: LogLevel
    timestamp: str

    def format(self) -> str:
        return f"[{self.timestamp}] [{self.level.label}] {self.text}"


class Logger:
    """Thread-safe logger writing to the console and to ``<log_dir>/log_<date>.txt``."""

    _instance: ClassVar[Logger | None] = None
    _instance_lock: ClassVar[threading.Lock] = threading.Lock()

    def __init__(self, log_dir: str | Path = "logs") -> None:
        self._log_dir = Path(log_dir)
        self._messages: deque[LogMessage] = deque(maxlen=MAX_LOG_ENTRIES)
        self._lock = threading.Lock()
        self._console_level = LogLevel.INFO
        self._file_level = LogLevel.DEBUG
        self._console_enabled = True
        self._file: TextIO | None = None
        self._current_date = self._today()
        self._open_log_file()

    @classmethod
    def get_instance(cls) -> Logger:
        """Return the shared logger, creating it on first use."""
        with cls._instance_lock:
            if cls._instance is None:
                cls._instance = cls()
            return cls._instance

    @staticmethod
    def _today() -> str:
        return datetime.now().strftime("%Y-%m-%d")

    @staticmethod
    def _timestamp() -> str:
        return datetime.now().strftime("%H:%M:%S")

    @property
    def log_file_path(self) -> Path:
        return self._log_dir / f"log_{self._current_date}.txt"

    def _open_log_file(self) -> None:
        if self._file is not None:
            self._file.close()
            self._file = None
        path = self.log_file_path
        try:
            self._log_dir.mkdir(parents=True, exist_ok=True)
            self._file = open(path, "a", encoding="utf-8")
        except OSError:
            print(f"ERROR: Failed to open log file: {path}", file=sys.stderr)

    def _check_date(self) -> None:
        today = self._today()
        if today != self._current_date:
            self._current_date = today
            self._open_log_file()

    def log(self, message: str, level: LogLevel = LogLevel.INFO) -> None:
        """Record a message, echoing it to the console and log file as configured."""
        with self._lock:
            self._check_date()
            entry = LogMessage(message, LogLevel(level), self._timestamp())
            self._messages.append(entry)
            formatted = entry.format()

            if self._console_enabled and entry.level >= self._console_level:
                stream = sys.stderr if entry.level == LogLevel.ERROR else sys.stdout
                print(formatted, file=stream, flush=True)

            if self._file is not None and entry.level >= self._file_level:
                self._file.write(formatted + "\n")
                self._file.flush()

    def debug(self, message: str) -> None:
        self.log(message, LogLevel.DEBUG)

    def info(self, message: str) -> None:
        self.log(message, LogLevel.INFO)

    def warning(self, message: str) -> None:
        self.log(message, LogLevel.WARNING)

    def error(self, message: str) -> None:
        self.log(message, LogLevel.ERROR)

    def clear(self) -> None:
        """Forget all messages held in memory."""
        with self._lock:
            self._messages.clear()

    def messages(self) -> list[LogMessage]:
        """Return the messages held in memory, oldest first."""
        with self._lock:
            return list(self._messages)

    def set_console_level(self, level: LogLevel) -> None:
        self._console_level = LogLevel(level)

    def set_file_level(self, level: LogLevel) -> None:
        self._file_level = LogLevel(level)

    def enable_console_output(self, enable: bool) -> None:
        self._console_enabled = enable

    def save_logs_to_file(self, filename: str | Path) -> bool:
        """Write the in-memory messages to ``filename``; return whether it succeeded."""
        with self._lock:
            try:
                self._log_dir.mkdir(parents=True, exist_ok=True)
                with open(filename, "w", encoding="utf-8") as out:
                    for entry in self._messages:
                        out.write(entry.format() + "\n")
            except OSError:
                return False
            return True

    def close(self) -> None:
        """Close the current log file."""
        with self._lock:
            if self._file is not None:
                self._file.close()
                self._file = None

    def __enter__(self) -> Logger:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()