# SPDX-License-Identifier: MIT
# Copyright (c) 2025 logpipe contributors

"""Base logger with the logging API and the emission protocol."""

import os
import sys
import threading
from collections.abc import Mapping
from datetime import datetime
from typing import Any, Callable, Optional

from .entry import LogEntry, make_entry
from .levels import LogLevel, is_logging_enabled, parse_log_level
from .state import STATE

FatalHandler = Callable[[LogEntry], None]


def abort_process(entry: LogEntry) -> None:
    """Default fatal handler: flush the standard streams and abort the process.

    Runs after the fatal entry was written, so the message is visible in the
    sink before the process dies.
    """
    for stream in (sys.stdout, sys.stderr):
        if stream is None:
            continue
        try:
            stream.flush()
        except (OSError, ValueError):
            # Closed or broken stream; aborting anyway.
            continue
    os.abort()


def _render(args: tuple[Any, ...], fmt: Optional[str]) -> tuple[str, ...]:
    """Turn log-call arguments into message parts."""
    if fmt is None:
        return tuple(str(arg) for arg in args)
    if not args:
        return (fmt,)
    # Same convention as logging.LogRecord: a lone mapping feeds %(key)s
    if len(args) == 1 and isinstance(args[0], Mapping) and args[0]:
        return (fmt % args[0],)
    return (fmt % args,)


class Logger:
    """Base class for all loggers.

    A logger owns a threshold (``log_level``) and a fatal handler. Log calls
    below the threshold or below the global log level are dropped before any
    entry is built.

    Subclasses write output by overriding either ``write_log_msg`` or the
    three granular hooks ``begin_log_msg``, ``log_msg_part`` and
    ``finish_log_msg``. The default ``write_log_msg`` drives the hooks.
    The base class itself writes nothing: the hooks raise
    ``NotImplementedError`` until a subclass provides an output.

    Example:
        >>> class ListLogger(Logger):
        ...     def __init__(self):
        ...         super().__init__(LogLevel.INFO)
        ...         self.lines = []
        ...     def write_log_msg(self, entry):
        ...         self.lines.append(entry.msg)
        >>> logger = ListLogger()
        >>> logger.info("Hello ", "world")
        >>> logger.lines
        ['Hello world']
    """

    def __init__(
        self,
        log_level: "LogLevel | int | str" = LogLevel.ALL,
        fatal_handler: Optional[FatalHandler] = None,
        name: Optional[str] = None,
    ):
        """Initialize logger.

        Args:
            log_level: Threshold for messages handled by this logger
            fatal_handler: Called with the entry after a fatal message was
                written. Defaults to ``abort_process``.
            name: Optional name recorded in every entry this logger builds
        """
        self._lock = threading.RLock()
        self._log_level = parse_log_level(log_level)
        self._fatal_handler: FatalHandler = fatal_handler or abort_process
        self.name = name

    @property
    def log_level(self) -> LogLevel:
        """Threshold of this logger."""
        with self._lock:
            return self._log_level

    @log_level.setter
    def log_level(self, value: "LogLevel | int | str") -> None:
        level = parse_log_level(value)
        with self._lock:
            self._log_level = level

    @property
    def fatal_handler(self) -> FatalHandler:
        """Callback run after a fatal entry was written."""
        with self._lock:
            return self._fatal_handler

    @fatal_handler.setter
    def fatal_handler(self, handler: FatalHandler) -> None:
        with self._lock:
            self._fatal_handler = handler

    def __repr__(self) -> str:
        return f"{type(self).__name__}(log_level={self._log_level!s}, name={self.name!r})"

    # -- emission protocol -------------------------------------------------

    def forward_msg(self, entry: LogEntry, *, handle_fatal: bool = True) -> None:
        """Emit an already built entry if it passes this logger's filters.

        Used to pass entries between loggers: the thread-local logger forwards
        to the shared logger, and composites forward to their children.
        """
        if self._admits(entry):
            self.emit(entry, handle_fatal=handle_fatal)

    def _admits(self, entry: LogEntry) -> bool:
        return is_logging_enabled(entry.log_level, self._log_level, STATE.global_log_level, entry.condition)

    def emit(self, entry: LogEntry, *, handle_fatal: bool = True) -> None:
        """Write an entry without filtering and run the fatal handler if needed.

        The fatal handler runs even if writing raised; the write failure then
        propagates once the handler returns.

        Args:
            entry: Entry to write
            handle_fatal: Run the fatal handler for fatal entries. Composites
                pass False to their children and run the children's handlers
                after the whole fan-out.
        """
        try:
            with self._lock:
                self.write_log_msg(entry)
        finally:
            if handle_fatal and entry.log_level == LogLevel.FATAL:
                self.run_fatal_handler(entry)

    def run_fatal_handler(self, entry: LogEntry) -> None:
        """Run the fatal handler for an entry this logger emitted."""
        self.fatal_handler(entry)

    def write_log_msg(self, entry: LogEntry) -> None:
        """Write one entry by driving the begin/part/finish hooks."""
        self.begin_log_msg(
            entry.file,
            entry.line,
            entry.func_name,
            entry.module_name,
            entry.log_level,
            entry.thread_id,
            entry.timestamp,
            entry.logger_name,
        )
        for part in entry.parts:
            self.log_msg_part(part)
        self.finish_log_msg()

    def begin_log_msg(
        self,
        file: str,
        line: int,
        func_name: str,
        module_name: str,
        log_level: LogLevel,
        thread_id: int,
        timestamp: datetime,
        logger_name: Optional[str],
    ) -> None:
        """Start writing an entry; receives everything but the message."""
        raise NotImplementedError(
            f"{type(self).__name__} must override write_log_msg or begin_log_msg, "
            "log_msg_part and finish_log_msg"
        )

    def log_msg_part(self, text: str) -> None:
        """Write one message fragment of the current entry."""
        raise NotImplementedError(
            f"{type(self).__name__} must override write_log_msg or log_msg_part"
        )

    def finish_log_msg(self) -> None:
        """Finish writing the current entry."""
        raise NotImplementedError(
            f"{type(self).__name__} must override write_log_msg or finish_log_msg"
        )

    # -- log calls -----------------------------------------------------------

    def _enabled(self, level: LogLevel, condition: bool) -> bool:
        return is_logging_enabled(level, self._log_level, STATE.global_log_level, condition)

    def _log(
        self,
        level: LogLevel,
        condition: bool,
        args: tuple[Any, ...],
        fmt: Optional[str],
        stacklevel: int,
    ) -> None:
        """Filter, build and emit one entry.

        Must be called directly from the public log method so ``stacklevel``
        counts frames from the user's call site.
        """
        if not self._enabled(level, condition):
            return
        entry = make_entry(level, _render(args, fmt), stacklevel + 1, self.name)
        self.emit(entry)

    def log(
        self,
        *args: Any,
        level: "LogLevel | int | str | None" = None,
        condition: bool = True,
        stacklevel: int = 1,
    ) -> None:
        """Log a message at an explicit level.

        Args:
            *args: Message parts, each converted with ``str()`` only if the
                message passes the filters
            level: Level of the message. Defaults to this logger's threshold.
            condition: The message is dropped if False
            stacklevel: Which caller frame to record as the source location
        """
        lvl = self.log_level if level is None else parse_log_level(level)
        self._log(lvl, condition, args, None, stacklevel)

    def logf(
        self,
        fmt: str,
        *args: Any,
        level: "LogLevel | int | str | None" = None,
        condition: bool = True,
        stacklevel: int = 1,
    ) -> None:
        """Log a printf-style message at an explicit level.

        ``fmt % args`` is only evaluated if the message passes the filters.
        """
        lvl = self.log_level if level is None else parse_log_level(level)
        self._log(lvl, condition, args, fmt, stacklevel)

    def trace(self, *args: Any, condition: bool = True, stacklevel: int = 1) -> None:
        """Log a trace-level message."""
        self._log(LogLevel.TRACE, condition, args, None, stacklevel)

    def tracef(self, fmt: str, *args: Any, condition: bool = True, stacklevel: int = 1) -> None:
        """Log a printf-style trace-level message."""
        self._log(LogLevel.TRACE, condition, args, fmt, stacklevel)

    def info(self, *args: Any, condition: bool = True, stacklevel: int = 1) -> None:
        """Log an info-level message."""
        self._log(LogLevel.INFO, condition, args, None, stacklevel)

    def infof(self, fmt: str, *args: Any, condition: bool = True, stacklevel: int = 1) -> None:
        """Log a printf-style info-level message."""
        self._log(LogLevel.INFO, condition, args, fmt, stacklevel)

    def warning(self, *args: Any, condition: bool = True, stacklevel: int = 1) -> None:
        """Log a warning-level message."""
        self._log(LogLevel.WARNING, condition, args, None, stacklevel)

    def warningf(self, fmt: str, *args: Any, condition: bool = True, stacklevel: int = 1) -> None:
        """Log a printf-style warning-level message."""
        self._log(LogLevel.WARNING, condition, args, fmt, stacklevel)

    def error(self, *args: Any, condition: bool = True, stacklevel: int = 1) -> None:
        """Log an error-level message."""
        self._log(LogLevel.ERROR, condition, args, None, stacklevel)

    def errorf(self, fmt: str, *args: Any, condition: bool = True, stacklevel: int = 1) -> None:
        """Log a printf-style error-level message."""
        self._log(LogLevel.ERROR, condition, args, fmt, stacklevel)

    def critical(self, *args: Any, condition: bool = True, stacklevel: int = 1) -> None:
        """Log a critical-level message."""
        self._log(LogLevel.CRITICAL, condition, args, None, stacklevel)

    def criticalf(self, fmt: str, *args: Any, condition: bool = True, stacklevel: int = 1) -> None:
        """Log a printf-style critical-level message."""
        self._log(LogLevel.CRITICAL, condition, args, fmt, stacklevel)

    def fatal(self, *args: Any, condition: bool = True, stacklevel: int = 1) -> None:
        """Log a fatal-level message, then run the fatal handler.

        With the default handler the process is aborted after the message
        was written.
        """
        self._log(LogLevel.FATAL, condition, args, None, stacklevel)

    def fatalf(self, fmt: str, *args: Any, condition: bool = True, stacklevel: int = 1) -> None:
        """Log a printf-style fatal-level message, then run the fatal handler."""
        self._log(LogLevel.FATAL, condition, args, fmt, stacklevel)
