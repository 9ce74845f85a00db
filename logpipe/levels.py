# SPDX-License-Identifier: MIT
# Copyright (c) 2025 logpipe contributors

"""Log levels and the filtering predicate shared by every log call."""

from enum import IntEnum

from .errors import InvalidLogLevelError


class LogLevel(IntEnum):
    """Ordered log severities.

    ``ALL`` is the lowest level and admits every message, ``OFF`` is the
    highest and admits none. Filtering only ever compares members by this
    order.
    """

    ALL = 1
    TRACE = 32
    INFO = 64
    WARNING = 96
    ERROR = 128
    CRITICAL = 160
    FATAL = 192
    OFF = 255

    def __str__(self) -> str:
        return self.name.lower()

    def __format__(self, format_spec: str) -> str:
        # IntEnum formats as its integer value unless told otherwise
        return format(str(self), format_spec)


_ALIASES = {
    "WARN": LogLevel.WARNING,
    "CRIT": LogLevel.CRITICAL,
}


def parse_log_level(value: "LogLevel | int | str") -> LogLevel:
    """Convert a level name, value or member into a ``LogLevel``.

    Args:
        value: A ``LogLevel``, its integer value, or a case-insensitive name

    Returns:
        The matching ``LogLevel``

    Raises:
        InvalidLogLevelError: If the value does not name a level
    """
    if isinstance(value, LogLevel):
        return value
    if isinstance(value, bool):
        raise InvalidLogLevelError(value)
    if isinstance(value, int):
        try:
            return LogLevel(value)
        except ValueError:
            raise InvalidLogLevelError(value) from None
    if isinstance(value, str):
        key = value.strip().upper()
        if key in LogLevel.__members__:
            return LogLevel[key]
        if key in _ALIASES:
            return _ALIASES[key]
    raise InvalidLogLevelError(value)


def is_logging_enabled(
    level: LogLevel,
    logger_level: LogLevel,
    global_level: LogLevel,
    condition: bool = True,
) -> bool:
    """Return True if a message at ``level`` passes all filters.

    The checks short-circuit in order: condition, logger threshold, global
    threshold. ``OFF`` on any side disables the message.
    """
    if not condition:
        return False
    if level == LogLevel.OFF or logger_level == LogLevel.OFF or level < logger_level:
        return False
    return global_level != LogLevel.OFF and level >= global_level
