# SPDX-License-Identifier: MIT
# Copyright (c) 2025 logpipe contributors

r"""File logger writing one formatted line per entry.

Line format::

    {timestamp} [{level}] {file}:{line}:{func_name} [{thread_id}] {message}

- timestamp: ISO 8601 UTC with microseconds and a ``Z`` suffix
- level: lower-case level name
- file: base name of the source file
- thread_id: decimal ``threading.get_ident()`` of the logging thread
- message: backslash, line feed and carriage return are written as ``\\``,
  ``\n`` and ``\r``. The other line boundaries of ``str.splitlines`` become
  ``\xNN`` or ``\uNNNN``. Every entry is exactly one line; ``parse_log_line``
  restores the original message.

Example::

    2025-01-02T03:04:05.123456Z [info] app.py:42:main [140031946270528] Service started
"""

import logging
import os
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional, TextIO

from .levels import LogLevel, parse_log_level
from .logger import FatalHandler, Logger

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S.%fZ"

LINE_PATTERN = re.compile(
    r"(?P<timestamp>\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{6}Z)"
    r" \[(?P<level>[a-z]+)\]"
    r" (?P<file>[^:]*):(?P<line>\d+):(?P<func_name>\S+)"
    r" \[(?P<thread_id>\d+)\]"
    r" (?P<message>.*)"
)

_ESCAPES = {
    "\\": "\\\\",
    "\n": "\\n",
    "\r": "\\r",
    "\v": "\\x0b",
    "\f": "\\x0c",
    "\x1c": "\\x1c",
    "\x1d": "\\x1d",
    "\x1e": "\\x1e",
    "\x85": "\\x85",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}
_ESCAPE_TABLE = str.maketrans(_ESCAPES)
_UNESCAPE_PATTERN = re.compile(r"\\(?:x([0-9a-f]{2})|u([0-9a-f]{4})|(.))")
_SIMPLE_UNESCAPES = {"\\": "\\", "n": "\n", "r": "\r"}


def format_timestamp(timestamp: datetime) -> str:
    """Render a timestamp the way FileLogger writes it."""
    if timestamp.tzinfo is not None:
        timestamp = timestamp.astimezone(timezone.utc)
    return timestamp.strftime(TIMESTAMP_FORMAT)


def escape_message(text: str) -> str:
    """Escape line breaks and backslashes so ``text`` fits on one line."""
    return text.translate(_ESCAPE_TABLE)


def unescape_message(text: str) -> str:
    """Undo ``escape_message``."""

    def replace(match: "re.Match[str]") -> str:
        code = match.group(1) or match.group(2)
        if code is not None:
            return chr(int(code, 16))
        return _SIMPLE_UNESCAPES.get(match.group(3), match.group(0))

    return _UNESCAPE_PATTERN.sub(replace, text)


def parse_log_line(line: str) -> dict[str, Any]:
    """Parse one FileLogger line back into its fields.

    Args:
        line: A line written by FileLogger, with or without the trailing newline

    Returns:
        Dict with ``timestamp`` (datetime), ``level`` (LogLevel), ``file``,
        ``line`` (int), ``func_name``, ``thread_id`` (int) and ``message``

    Raises:
        ValueError: If the line does not match the format
    """
    match = LINE_PATTERN.fullmatch(line.rstrip("\n"))
    if match is None:
        raise ValueError(f"Not a logpipe log line: {line!r}")
    fields: dict[str, Any] = match.groupdict()
    fields["timestamp"] = datetime.strptime(fields["timestamp"], TIMESTAMP_FORMAT).replace(
        tzinfo=timezone.utc
    )
    fields["level"] = parse_log_level(fields["level"])
    fields["line"] = int(fields["line"])
    fields["thread_id"] = int(fields["thread_id"])
    fields["message"] = unescape_message(fields["message"])
    return fields


class FileLogger(Logger):
    """Logger that writes formatted lines to a file or an open text stream.

    Standard streams are files too, so ``FileLogger(sys.stdout)`` logs to
    stdout. A logger created from a path owns the file and closes it in
    ``close()``; a wrapped stream is left open.
    """

    def __init__(
        self,
        file: "str | os.PathLike[str] | TextIO",
        log_level: "LogLevel | int | str" = LogLevel.ALL,
        *,
        append: bool = True,
        create_dirs: bool = True,
        encoding: str = "utf-8",
        fatal_handler: Optional[FatalHandler] = None,
        name: Optional[str] = None,
    ):
        """Initialize file logger.

        Args:
            file: Path to open, or an already open text stream
            log_level: Threshold for this logger
            append: Append to an existing file instead of truncating it
            create_dirs: Create missing parent directories of ``file``
            encoding: Encoding used when opening a path
            fatal_handler: Fatal handler, see ``Logger``
            name: Optional logger name
        """
        super().__init__(log_level, fatal_handler, name)
        self._filename: Optional[str]
        if isinstance(file, (str, os.PathLike)):
            path = Path(file)
            if create_dirs:
                path.parent.mkdir(parents=True, exist_ok=True)
            self._file: TextIO = open(path, "a" if append else "w", encoding=encoding)
            self._filename = str(path)
            self._owns_file = True
        else:
            self._file = file
            self._filename = None
            self._owns_file = False

    @property
    def file(self) -> TextIO:
        """The stream this logger writes to."""
        return self._file

    @property
    def filename(self) -> Optional[str]:
        """Path of the log file, or None when wrapping a stream."""
        return self._filename

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
        self._file.write(
            f"{format_timestamp(timestamp)} [{log_level}] "
            f"{os.path.basename(file)}:{line}:{func_name} [{thread_id}] "
        )

    def log_msg_part(self, text: str) -> None:
        self._file.write(escape_message(text))

    def finish_log_msg(self) -> None:
        self._file.write("\n")
        self._file.flush()

    def close(self) -> None:
        """Close the log file if this logger opened it."""
        with self._lock:
            if self._owns_file and not self._file.closed:
                logger.debug("Closing log file %s", self._filename)
                self._file.close()

    def __enter__(self) -> "FileLogger":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
