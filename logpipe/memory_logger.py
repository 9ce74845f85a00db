# SPDX-License-Identifier: MIT
# Copyright (c) 2025 logpipe contributors

"""In-memory logger for testing."""

from typing import Optional

from .entry import LogEntry
from .levels import LogLevel, parse_log_level
from .logger import FatalHandler, Logger


class MemoryLogger(Logger):
    """Logger that stores entries in memory without output.

    Useful for testing to verify logging behavior without cluttering test
    output. Unlike a plain list it still filters by its threshold, so tests
    see exactly what a real sink would have written.
    """

    def __init__(
        self,
        log_level: "LogLevel | int | str" = LogLevel.ALL,
        fatal_handler: Optional[FatalHandler] = None,
        name: Optional[str] = None,
    ):
        super().__init__(log_level, fatal_handler, name)
        self.entries: list[LogEntry] = []

    def write_log_msg(self, entry: LogEntry) -> None:
        self.entries.append(entry)

    @property
    def messages(self) -> list[str]:
        """Messages of the stored entries, oldest first."""
        return [entry.msg for entry in self.entries]

    def clear_logs(self) -> None:
        """Clear all stored entries."""
        with self._lock:
            self.entries.clear()

    def get_logs(self, level: "LogLevel | int | str | None" = None) -> list[LogEntry]:
        """Get stored entries, optionally only those of one level.

        Args:
            level: Optional level to filter by

        Returns:
            List of entries
        """
        if level is None:
            return list(self.entries)
        wanted = parse_log_level(level)
        return [entry for entry in self.entries if entry.log_level == wanted]

    def has_log(self, message: str, level: "LogLevel | int | str | None" = None) -> bool:
        """Check if a stored entry contains a message.

        Args:
            message: Text to search for (substring match)
            level: Optional level to filter by

        Returns:
            True if message is found, False otherwise
        """
        return any(message in entry.msg for entry in self.get_logs(level))
