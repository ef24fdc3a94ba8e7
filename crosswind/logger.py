"""Levelled printf-style logging service writing to a text stream."""

from __future__ import annotations

import enum
import sys
import threading
from typing import Any, TextIO

from crosswind.framework import Service


class LogLevel(enum.IntEnum):
    """Severity; lower values are more severe."""

    CRITICAL = 0
    ERROR = 1
    WARN = 2
    INFO = 3
    DEBUG = 4


class Logger(Service):
    """Writes messages at or above the configured severity to a stream."""

    SERVICE_NAME = "Logger"

    def __init__(self) -> None:
        self._stream: TextIO | None = None
        self._level = LogLevel.INFO
        self._lock = threading.Lock()
        self._enabled = True

    def name(self) -> str:
        return self.SERVICE_NAME

    def init(self, stream: TextIO | None = None, level: LogLevel = LogLevel.INFO) -> None:
        """Attach the output stream (standard output by default) and level."""
        self._stream = sys.stdout if stream is None else stream
        self._level = LogLevel(level)

    def loop(self) -> None:
        """Nothing to do periodically."""

    def suspend(self) -> None:
        self._enabled = False

    def resume(self) -> None:
        self._enabled = True

    def log(self, level: LogLevel, fmt: str, *args: Any) -> None:
        """Write ``fmt % args`` if enabled and ``level`` is severe enough."""
        if self._enabled and level <= self._level and self._stream is not None:
            with self._lock:
                self._stream.write(fmt % args)

    def debug(self, fmt: str, *args: Any) -> None:
        self.log(LogLevel.DEBUG, fmt, *args)

    def info(self, fmt: str, *args: Any) -> None:
        self.log(LogLevel.INFO, fmt, *args)

    def warn(self, fmt: str, *args: Any) -> None:
        self.log(LogLevel.WARN, fmt, *args)

    def error(self, fmt: str, *args: Any) -> None:
        self.log(LogLevel.ERROR, fmt, *args)

    def critical(self, fmt: str, *args: Any) -> None:
        self.log(LogLevel.CRITICAL, fmt, *args)