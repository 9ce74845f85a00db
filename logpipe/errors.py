# SPDX-License-Identifier: MIT
# Copyright (c) 2025 logpipe contributors

"""Exception types raised by logpipe."""

from typing import Any, Hashable


class LoggingError(Exception):
    """Base class for logpipe errors."""


class InvalidLogLevelError(LoggingError, ValueError):
    """Raised when a value cannot be converted to a log level."""

    def __init__(self, value: Any):
        self.value = value
        super().__init__(
            f"Invalid log level: {value!r}. Must be one of "
            "ALL, TRACE, INFO, WARNING, ERROR, CRITICAL, FATAL, OFF"
        )


class SinkFanOutError(LoggingError):
    """Raised by composite loggers when one or more children failed.

    The fan-out continues past a failing child, so every child got its chance
    to write the entry before this is raised.

    Attributes:
        failures: ``(key, exception)`` pairs in fan-out order. The key is the
            child's name for a MultiLogger and its index for an ArrayLogger.
    """

    def __init__(self, failures: list[tuple[Hashable, Exception]]):
        self.failures = failures
        keys = ", ".join(repr(key) for key, _ in failures)
        super().__init__(f"{len(failures)} child logger(s) failed: {keys}")
