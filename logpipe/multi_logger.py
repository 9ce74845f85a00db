# SPDX-License-Identifier: MIT
# Copyright (c) 2025 logpipe contributors

"""Composite loggers that fan one entry out to several child loggers."""

from typing import Hashable, Iterable, Optional

from .entry import LogEntry
from .errors import SinkFanOutError
from .levels import LogLevel
from .logger import FatalHandler, Logger


def _fan_out(children: Iterable[tuple[Hashable, Logger]], entry: LogEntry) -> None:
    """Forward an entry to every child, then raise if any of them failed.

    Each child applies its own threshold. Fatal handlers are not run here,
    see ``_run_fatal_handlers``.
    """
    failures: list[tuple[Hashable, Exception]] = []
    for key, child in children:
        try:
            child.forward_msg(entry, handle_fatal=False)
        except Exception as e:
            failures.append((key, e))
    if failures:
        raise SinkFanOutError(failures) from failures[0][1]


def _run_fatal_handlers(children: Iterable[Logger], entry: LogEntry) -> None:
    """Run the fatal handler of every child whose threshold admitted the entry.

    Called after the whole fan-out, so every sink has written the entry
    before the first handler can end the process.
    """
    for child in children:
        if child._admits(entry):
            child.run_fatal_handler(entry)


class MultiLogger(Logger):
    """Logger that forwards entries to named child loggers.

    Children receive entries in insertion order. Names are unique. For a
    fatal entry, the handlers of the children that accepted it run after the
    fan-out, followed by this logger's own handler.

    Example:
        >>> multi = MultiLogger()
        >>> multi.insert_logger("console", FileLogger(sys.stderr, LogLevel.INFO))
        >>> multi.insert_logger("audit", FileLogger("audit.log", LogLevel.WARNING))
        >>> multi.warning("Disk almost full")  # reaches both children
    """

    def __init__(
        self,
        log_level: "LogLevel | int | str" = LogLevel.ALL,
        fatal_handler: Optional[FatalHandler] = None,
        name: Optional[str] = None,
    ):
        super().__init__(log_level, fatal_handler, name)
        self._loggers: dict[str, Logger] = {}

    def insert_logger(self, name: str, logger: Logger) -> None:
        """Add a child logger under a unique name.

        Raises:
            ValueError: If a child with this name already exists
        """
        with self._lock:
            if name in self._loggers:
                raise ValueError(f"A logger named {name!r} is already registered")
            self._loggers[name] = logger

    def remove_logger(self, name: str) -> Optional[Logger]:
        """Remove and return the child with this name, or None if absent."""
        with self._lock:
            return self._loggers.pop(name, None)

    def get_logger(self, name: str) -> Optional[Logger]:
        """Return the child with this name, or None if absent."""
        with self._lock:
            return self._loggers.get(name)

    @property
    def names(self) -> list[str]:
        """Child names in fan-out order."""
        with self._lock:
            return list(self._loggers)

    @property
    def loggers(self) -> dict[str, Logger]:
        """Snapshot of the children in fan-out order."""
        with self._lock:
            return dict(self._loggers)

    def __len__(self) -> int:
        with self._lock:
            return len(self._loggers)

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._loggers

    def write_log_msg(self, entry: LogEntry) -> None:
        with self._lock:
            _fan_out(list(self._loggers.items()), entry)

    def run_fatal_handler(self, entry: LogEntry) -> None:
        with self._lock:
            children = list(self._loggers.values())
        _run_fatal_handlers(children, entry)
        self.fatal_handler(entry)


class ArrayLogger(Logger):
    """Logger that forwards entries to an ordered list of child loggers."""

    def __init__(
        self,
        log_level: "LogLevel | int | str" = LogLevel.ALL,
        loggers: Iterable[Logger] = (),
        fatal_handler: Optional[FatalHandler] = None,
        name: Optional[str] = None,
    ):
        super().__init__(log_level, fatal_handler, name)
        self._loggers: list[Logger] = list(loggers)

    def append_logger(self, logger: Logger) -> None:
        """Add a child logger at the end of the fan-out order."""
        with self._lock:
            self._loggers.append(logger)

    def remove_logger(self, logger: Logger) -> bool:
        """Remove the first child that is ``logger``.

        Returns:
            True if a child was removed
        """
        with self._lock:
            for index, child in enumerate(self._loggers):
                if child is logger:
                    del self._loggers[index]
                    return True
            return False

    @property
    def loggers(self) -> list[Logger]:
        """Snapshot of the children in fan-out order."""
        with self._lock:
            return list(self._loggers)

    def __len__(self) -> int:
        with self._lock:
            return len(self._loggers)

    def write_log_msg(self, entry: LogEntry) -> None:
        with self._lock:
            _fan_out(list(enumerate(self._loggers)), entry)

    def run_fatal_handler(self, entry: LogEntry) -> None:
        with self._lock:
            children = list(self._loggers)
        _run_fatal_handlers(children, entry)
        self.fatal_handler(entry)
