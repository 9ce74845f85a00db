# SPDX-License-Identifier: MIT
# Copyright (c) 2025 logpipe contributors

"""logpipe: level-filtered logging shared by a program and its libraries.

Log calls pass through a pipeline of thresholds before reaching a sink:
the global log level, the calling thread's logger, and the shared logger.
Loggers are plain objects, so a program can swap the shared logger, fan
messages out to several sinks, or silence a thread without touching the
code that logs.

Example:
    >>> import logpipe
    >>> from logpipe import LogLevel
    >>>
    >>> logpipe.info("Works out of the box")   # written to stderr
    >>> logpipe.trace("Not shown")              # shared logger is at INFO
    >>>
    >>> logpipe.get_shared_log().log_level = LogLevel.TRACE
    >>> logpipe.tracef("%d items loaded", 42)
    >>>
    >>> # Log to a file and to stderr
    >>> multi = logpipe.MultiLogger()
    >>> multi.insert_logger("file", logpipe.FileLogger("app.log"))
    >>> multi.insert_logger("console", logpipe.FileLogger(sys.stderr, LogLevel.WARNING))
    >>> logpipe.set_shared_log(multi)
"""

__version__ = "0.1.0"

from .config import LoggingConfig
from .core import (
    ForwardingLogger,
    critical,
    criticalf,
    error,
    errorf,
    fatal,
    fatalf,
    get_global_log_level,
    get_shared_log,
    get_thread_local_log,
    info,
    infof,
    log,
    logf,
    set_global_log_level,
    set_shared_log,
    set_thread_local_log,
    trace,
    tracef,
    warning,
    warningf,
)
from .entry import LogEntry
from .errors import InvalidLogLevelError, LoggingError, SinkFanOutError
from .factory import LOGGER_TYPES, configure_from_env, create_logger, create_logger_from_config
from .file_logger import FileLogger, parse_log_line
from .levels import LogLevel, is_logging_enabled, parse_log_level
from .logger import FatalHandler, Logger, abort_process
from .memory_logger import MemoryLogger
from .multi_logger import ArrayLogger, MultiLogger
from .null_logger import NullLogger
from .stdlib_logger import StdlibLogger

__all__ = [
    "__version__",
    # Levels and entries
    "LogLevel",
    "LogEntry",
    "parse_log_level",
    "is_logging_enabled",
    # Loggers
    "Logger",
    "FatalHandler",
    "abort_process",
    "FileLogger",
    "parse_log_line",
    "MultiLogger",
    "ArrayLogger",
    "NullLogger",
    "MemoryLogger",
    "StdlibLogger",
    "ForwardingLogger",
    # Process-wide configuration
    "get_global_log_level",
    "set_global_log_level",
    "get_shared_log",
    "set_shared_log",
    "get_thread_local_log",
    "set_thread_local_log",
    "LoggingConfig",
    "LOGGER_TYPES",
    "create_logger",
    "create_logger_from_config",
    "configure_from_env",
    # Free functions
    "log",
    "logf",
    "trace",
    "tracef",
    "info",
    "infof",
    "warning",
    "warningf",
    "error",
    "errorf",
    "critical",
    "criticalf",
    "fatal",
    "fatalf",
    # Errors
    "LoggingError",
    "InvalidLogLevelError",
    "SinkFanOutError",
]
