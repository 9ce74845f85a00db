# SPDX-License-Identifier: MIT
# Copyright (c) 2025 logpipe contributors

"""Factory functions for creating logger instances."""

import os
import sys
from typing import Mapping, Optional

from .config import LoggingConfig
from .core import set_global_log_level, set_shared_log
from .file_logger import FileLogger
from .levels import LogLevel
from .logger import Logger
from .memory_logger import MemoryLogger
from .null_logger import NullLogger
from .state import STATE
from .stdlib_logger import StdlibLogger

LOGGER_TYPES = ("stderr", "stdout", "file", "null", "memory", "stdlib")


def create_logger_from_config(config: LoggingConfig) -> Logger:
    """Create a logger described by a LoggingConfig.

    Raises:
        ValueError: If ``config.logger_type`` is not recognized
    """
    logger_type = config.logger_type
    if logger_type == "stderr":
        return FileLogger(sys.stderr, config.level, name=config.name)
    elif logger_type == "stdout":
        return FileLogger(sys.stdout, config.level, name=config.name)
    elif logger_type == "file":
        return FileLogger(config.file, config.level, append=config.append, name=config.name)
    elif logger_type == "null":
        return NullLogger(config.level, name=config.name)
    elif logger_type == "memory":
        return MemoryLogger(config.level, name=config.name)
    elif logger_type == "stdlib":
        return StdlibLogger(config.name, config.level)
    else:
        raise ValueError(
            f"Unknown logger_type: {logger_type}. "
            f"Must be one of: {', '.join(LOGGER_TYPES)}"
        )


def create_logger(
    logger_type: Optional[str] = None,
    level: "LogLevel | int | str | None" = None,
    name: Optional[str] = None,
    file: "str | os.PathLike[str] | None" = None,
    append: Optional[bool] = None,
) -> Logger:
    """Factory function to create a logger instance.

    Arguments that are not given are read from the environment (LOG_TYPE,
    LOG_LEVEL, LOG_NAME, LOG_FILE, LOG_APPEND) and fall back to a stderr
    logger at INFO.

    Args:
        logger_type: One of "stderr", "stdout", "file", "null", "memory",
            "stdlib"
        level: Threshold of the new logger
        name: Logger name for identification
        file: Log file path for the "file" type
        append: Append to (True) or truncate (False) the log file

    Returns:
        Logger instance

    Raises:
        ValueError: If logger_type is not recognized
        InvalidLogLevelError: If level is not a log level

    Example:
        >>> logger = create_logger(logger_type="stdout", level="TRACE")
        >>> logger.trace("Now trace messages are visible")
        >>>
        >>> # Create a memory logger for testing
        >>> logger = create_logger(logger_type="memory")
    """
    config = LoggingConfig.from_env(
        logger_type=logger_type,
        level=level,
        name=name,
        file=os.fspath(file) if file is not None else None,
        append=append,
    )
    return create_logger_from_config(config)


def configure_from_env(environ: Optional[Mapping[str, str]] = None) -> Logger:
    """Set the global log level and the shared logger from the environment.

    Call once at program start, before other threads start logging. A
    previous shared ``FileLogger`` is closed once it has been replaced.

    Args:
        environ: Mapping to read variables from (defaults to ``os.environ``)

    Returns:
        The new shared logger
    """
    config = LoggingConfig.from_env(environ)
    logger = create_logger_from_config(config)
    previous = STATE.shared_log
    set_global_log_level(config.global_level)
    set_shared_log(logger)
    if isinstance(previous, FileLogger):
        previous.close()
    return logger
