# SPDX-License-Identifier: MIT
# Copyright (c) 2025 logpipe contributors

"""Log entry record and caller-location capture."""

import sys
import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from .levels import LogLevel


@dataclass(frozen=True)
class LogEntry:
    """One log event, built on the calling thread for a single log call.

    Attributes:
        file: Source file of the log call
        line: Line number of the log call
        func_name: Name of the function containing the log call
        module_name: ``__name__`` of the module containing the log call
        log_level: Level of the message
        thread_id: ``threading.get_ident()`` of the calling thread
        timestamp: Time of the call (timezone-aware, UTC)
        parts: Rendered message fragments, one per log-call argument
        condition: Result of the caller's condition (always True once emitted)
        logger_name: Name of the logger that built the entry, if it has one
    """

    file: str
    line: int
    func_name: str
    module_name: str
    log_level: LogLevel
    thread_id: int
    timestamp: datetime
    parts: tuple[str, ...] = ()
    condition: bool = True
    logger_name: Optional[str] = None

    @property
    def msg(self) -> str:
        """The full message text."""
        return "".join(self.parts)


def caller_location(depth: int) -> tuple[str, int, str, str]:
    """Return ``(file, line, func_name, module_name)`` of a calling frame.

    Args:
        depth: How many frames above the caller of this function to look.
            ``0`` is the function calling ``caller_location``.
    """
    try:
        frame = sys._getframe(depth + 1)
    except ValueError:
        return "<unknown>", 0, "<unknown>", ""
    code = frame.f_code
    return code.co_filename, frame.f_lineno, code.co_name, frame.f_globals.get("__name__", "")


def make_entry(
    log_level: LogLevel,
    parts: tuple[str, ...],
    depth: int,
    logger_name: Optional[str] = None,
) -> LogEntry:
    """Build a LogEntry for a log call ``depth`` frames above the caller."""
    file, line, func_name, module_name = caller_location(depth + 1)
    return LogEntry(
        file=file,
        line=line,
        func_name=func_name,
        module_name=module_name,
        log_level=log_level,
        thread_id=threading.get_ident(),
        timestamp=datetime.now(timezone.utc),
        parts=parts,
        condition=True,
        logger_name=logger_name,
    )
