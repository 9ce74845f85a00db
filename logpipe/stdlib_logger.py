# SPDX-License-Identifier: MIT
# Copyright (c) 2025 logpipe contributors

"""Logger that hands entries to the standard library ``logging`` module."""

import logging
import threading
from typing import Optional

from .entry import LogEntry
from .levels import LogLevel
from .logger import FatalHandler, Logger

_LEVEL_MAP = {
    LogLevel.ALL: logging.DEBUG,
    LogLevel.TRACE: logging.DEBUG,
    LogLevel.INFO: logging.INFO,
    LogLevel.WARNING: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
    LogLevel.CRITICAL: logging.CRITICAL,
    LogLevel.FATAL: logging.CRITICAL,
}


def to_stdlib_level(level: LogLevel) -> int:
    """Map a LogLevel to the closest standard ``logging`` level."""
    return _LEVEL_MAP.get(level, logging.CRITICAL)


def _thread_name(thread_id: int) -> Optional[str]:
    """Name of the live thread with this ident, or None if it has exited."""
    current = threading.current_thread()
    if current.ident == thread_id:
        return current.name
    for thread in threading.enumerate():
        if thread.ident == thread_id:
            return thread.name
    return None


class StdlibLogger(Logger):
    """Logger that emits entries as ``logging.LogRecord``s.

    Records carry the entry's source location, thread and timestamp, so
    handlers and formatters configured for the standard ``logging`` module
    (and pytest's ``caplog``) see the original call site. The standard
    logger's own level and handlers apply after this logger's threshold.

    The original level name is available on the record as ``logpipe_level``.
    """

    def __init__(
        self,
        logger_name: str = "logpipe",
        log_level: "LogLevel | int | str" = LogLevel.ALL,
        fatal_handler: Optional[FatalHandler] = None,
        name: Optional[str] = None,
    ):
        """Initialize stdlib bridge logger.

        Args:
            logger_name: Name passed to ``logging.getLogger``
            log_level: Threshold for this logger
            fatal_handler: Fatal handler, see ``Logger``
            name: Optional logpipe logger name (defaults to ``logger_name``)
        """
        super().__init__(log_level, fatal_handler, name or logger_name)
        self._stdlib_logger = logging.getLogger(logger_name)

    @property
    def stdlib_logger(self) -> logging.Logger:
        """The standard library logger records are sent to."""
        return self._stdlib_logger

    def write_log_msg(self, entry: LogEntry) -> None:
        level = to_stdlib_level(entry.log_level)
        if not self._stdlib_logger.isEnabledFor(level):
            return
        record = self._stdlib_logger.makeRecord(
            self._stdlib_logger.name,
            level,
            entry.file,
            entry.line,
            entry.msg,
            (),
            None,
            func=entry.func_name,
            extra={"logpipe_level": str(entry.log_level), "logpipe_logger": entry.logger_name},
        )
        record.created = entry.timestamp.timestamp()
        record.msecs = (record.created - int(record.created)) * 1000
        record.thread = entry.thread_id
        record.threadName = _thread_name(entry.thread_id)
        self._stdlib_logger.handle(record)
