# SPDX-License-Identifier: MIT
# Copyright (c) 2025 logpipe contributors

"""Process-wide log configuration and the free logging functions.

A free function call such as ``info("Started")`` is first checked against
the global log level and the calling thread's logger. If it passes, an entry
is built and handed to the thread's logger, which by default forwards it to
the shared logger. The shared logger applies its own threshold and writes it.

Defaults are chosen for code that does not configure logging at all:

- global log level: ``LogLevel.ALL``
- shared logger: ``FileLogger(sys.stderr, LogLevel.INFO)``, created on first use
- thread-local logger: ``ForwardingLogger(LogLevel.ALL)``, created per thread
  on first use

So ``trace()`` and ``log()`` print nothing until the shared logger's level is
lowered, and libraries that log heavily stay quiet for their users.
"""

import sys
import threading
from typing import Any, Optional

from .entry import LogEntry
from .file_logger import FileLogger
from .levels import LogLevel, is_logging_enabled, parse_log_level
from .logger import FatalHandler, Logger
from .state import STATE

_thread_state = threading.local()


def _ignore_fatal(entry: LogEntry) -> None:
    pass


class ForwardingLogger(Logger):
    """Per-thread logger that forwards every entry to the shared logger.

    Its own threshold filters this thread's messages before they reach the
    shared logger. Fatal handling is left to the shared logger, so the
    default fatal handler here does nothing.
    """

    def __init__(
        self,
        log_level: "LogLevel | int | str" = LogLevel.ALL,
        fatal_handler: Optional[FatalHandler] = None,
        name: Optional[str] = None,
    ):
        super().__init__(log_level, fatal_handler or _ignore_fatal, name)

    def _enabled(self, level: LogLevel, condition: bool) -> bool:
        # Skip building entries the shared logger would drop anyway.
        return super()._enabled(level, condition) and is_logging_enabled(
            level, get_shared_log().log_level, STATE.global_log_level
        )

    def write_log_msg(self, entry: LogEntry) -> None:
        get_shared_log().forward_msg(entry)


# -- process-wide state -------------------------------------------------------


def get_global_log_level() -> LogLevel:
    """Return the global log level every log call is checked against."""
    return STATE.global_log_level


def set_global_log_level(level: "LogLevel | int | str") -> None:
    """Set the global log level.

    Args:
        level: New level; messages below it are dropped by every logger
    """
    parsed = parse_log_level(level)
    with STATE.lock:
        STATE.global_log_level = parsed


def get_shared_log() -> Logger:
    """Return the shared logger, creating the default one on first use."""
    shared = STATE.shared_log
    if shared is None:
        with STATE.lock:
            if STATE.shared_log is None:
                STATE.shared_log = FileLogger(sys.stderr, LogLevel.INFO)
            shared = STATE.shared_log
    return shared


def set_shared_log(logger: Optional[Logger]) -> None:
    """Replace the shared logger.

    Args:
        logger: New shared logger, or None to go back to the default
            stderr logger on next use
    """
    with STATE.lock:
        STATE.shared_log = logger


def get_thread_local_log() -> Logger:
    """Return the calling thread's logger, creating a ForwardingLogger on first use."""
    logger = getattr(_thread_state, "logger", None)
    if logger is None:
        logger = ForwardingLogger()
        _thread_state.logger = logger
    return logger


def set_thread_local_log(logger: Optional[Logger]) -> None:
    """Replace the calling thread's logger.

    Only the calling thread is affected. None restores a fresh
    ForwardingLogger on next use.
    """
    _thread_state.logger = logger


# -- free functions -----------------------------------------------------------


def log(
    *args: Any,
    level: "LogLevel | int | str | None" = None,
    condition: bool = True,
    stacklevel: int = 1,
) -> None:
    """Log a message through the calling thread's logger.

    Args:
        *args: Message parts, converted with ``str()`` only if the message
            passes the filters
        level: Level of the message. Defaults to the thread logger's threshold.
        condition: The message is dropped if False
        stacklevel: Which caller frame to record as the source location
    """
    logger = get_thread_local_log()
    lvl = logger.log_level if level is None else parse_log_level(level)
    logger._log(lvl, condition, args, None, stacklevel)


def logf(
    fmt: str,
    *args: Any,
    level: "LogLevel | int | str | None" = None,
    condition: bool = True,
    stacklevel: int = 1,
) -> None:
    """Log a printf-style message through the calling thread's logger."""
    logger = get_thread_local_log()
    lvl = logger.log_level if level is None else parse_log_level(level)
    logger._log(lvl, condition, args, fmt, stacklevel)


def trace(*args: Any, condition: bool = True, stacklevel: int = 1) -> None:
    """Log a trace-level message."""
    get_thread_local_log()._log(LogLevel.TRACE, condition, args, None, stacklevel)


def tracef(fmt: str, *args: Any, condition: bool = True, stacklevel: int = 1) -> None:
    """Log a printf-style trace-level message."""
    get_thread_local_log()._log(LogLevel.TRACE, condition, args, fmt, stacklevel)


def info(*args: Any, condition: bool = True, stacklevel: int = 1) -> None:
    """Log an info-level message."""
    get_thread_local_log()._log(LogLevel.INFO, condition, args, None, stacklevel)


def infof(fmt: str, *args: Any, condition: bool = True, stacklevel: int = 1) -> None:
    """Log a printf-style info-level message."""
    get_thread_local_log()._log(LogLevel.INFO, condition, args, fmt, stacklevel)


def warning(*args: Any, condition: bool = True, stacklevel: int = 1) -> None:
    """Log a warning-level message."""
    get_thread_local_log()._log(LogLevel.WARNING, condition, args, None, stacklevel)


def warningf(fmt: str, *args: Any, condition: bool = True, stacklevel: int = 1) -> None:
    """Log a printf-style warning-level message."""
    get_thread_local_log()._log(LogLevel.WARNING, condition, args, fmt, stacklevel)


def error(*args: Any, condition: bool = True, stacklevel: int = 1) -> None:
    """Log an error-level message."""
    get_thread_local_log()._log(LogLevel.ERROR, condition, args, None, stacklevel)


def errorf(fmt: str, *args: Any, condition: bool = True, stacklevel: int = 1) -> None:
    """Log a printf-style error-level message."""
    get_thread_local_log()._log(LogLevel.ERROR, condition, args, fmt, stacklevel)


def critical(*args: Any, condition: bool = True, stacklevel: int = 1) -> None:
    """Log a critical-level message."""
    get_thread_local_log()._log(LogLevel.CRITICAL, condition, args, None, stacklevel)


def criticalf(fmt: str, *args: Any, condition: bool = True, stacklevel: int = 1) -> None:
    """Log a printf-style critical-level message."""
    get_thread_local_log()._log(LogLevel.CRITICAL, condition, args, fmt, stacklevel)


def fatal(*args: Any, condition: bool = True, stacklevel: int = 1) -> None:
    """Log a fatal-level message.

    If the message reaches the shared logger, its fatal handler runs after
    the message was written; by default that aborts the process.
    """
    get_thread_local_log()._log(LogLevel.FATAL, condition, args, None, stacklevel)


def fatalf(fmt: str, *args: Any, condition: bool = True, stacklevel: int = 1) -> None:
    """Log a printf-style fatal-level message."""
    get_thread_local_log()._log(LogLevel.FATAL, condition, args, fmt, stacklevel)
