# SPDX-License-Identifier: MIT
# Copyright (c) 2025 logpipe contributors

"""Logger that discards everything."""

from typing import Optional

from .entry import LogEntry
from .levels import LogLevel
from .logger import Logger


def _ignore_fatal(entry: LogEntry) -> None:
    pass


class NullLogger(Logger):
    """Logger that accepts every message and writes nothing.

    Fatal messages never reach the fatal handler, whatever handler is
    assigned. Use it to silence a library, or in tests that must not abort
    on fatal messages.
    """

    def __init__(self, log_level: "LogLevel | int | str" = LogLevel.ALL, name: Optional[str] = None):
        super().__init__(log_level, _ignore_fatal, name)

    def emit(self, entry: LogEntry, *, handle_fatal: bool = True) -> None:
        pass

    def run_fatal_handler(self, entry: LogEntry) -> None:
        pass

    def write_log_msg(self, entry: LogEntry) -> None:
        pass
