# SPDX-License-Identifier: MIT
# Copyright (c) 2025 logpipe contributors

"""Test fixtures for logpipe."""

from __future__ import annotations

import os
from typing import Callable, Optional

import pytest

from logpipe import LogEntry, Logger, LogLevel, set_shared_log, set_thread_local_log
from logpipe.state import STATE


class RecordingLogger(Logger):
    """Logger that appends ``(label, message)`` to a record shared between loggers."""

    def __init__(
        self,
        label: str,
        record: list[tuple[str, str]],
        log_level: LogLevel = LogLevel.ALL,
        fatal_handler: Optional[Callable[[LogEntry], None]] = None,
    ):
        super().__init__(log_level, fatal_handler, name=label)
        self.label = label
        self.record = record

    def write_log_msg(self, entry: LogEntry) -> None:
        self.record.append((self.label, entry.msg))


def _unexpected_abort() -> None:
    raise AssertionError("os.abort() called by a fatal log message")


@pytest.fixture(autouse=True)
def reset_logging_state(monkeypatch: pytest.MonkeyPatch):
    """Reset process-wide logging state before and after each test.

    ``os.abort`` is replaced so a stray fatal message fails the test instead
    of killing the test run.
    """
    monkeypatch.setattr(os, "abort", _unexpected_abort)
    STATE.global_log_level = LogLevel.ALL
    set_shared_log(None)
    set_thread_local_log(None)
    yield
    STATE.global_log_level = LogLevel.ALL
    set_shared_log(None)
    set_thread_local_log(None)


@pytest.fixture
def record() -> list[tuple[str, str]]:
    """Shared append-order record for RecordingLogger instances."""
    return []


@pytest.fixture
def make_recorder(record: list[tuple[str, str]]) -> Callable[..., RecordingLogger]:
    """Factory for RecordingLoggers writing to the shared ``record``."""

    def _make(
        label: str,
        log_level: LogLevel = LogLevel.ALL,
        fatal_handler: Optional[Callable[[LogEntry], None]] = None,
    ) -> RecordingLogger:
        return RecordingLogger(label, record, log_level, fatal_handler)

    return _make


@pytest.fixture
def fatal_calls() -> list[LogEntry]:
    """List collecting entries passed to ``record_fatal``."""
    return []


@pytest.fixture
def record_fatal(fatal_calls: list[LogEntry]) -> Callable[[LogEntry], None]:
    """Fatal handler that records entries instead of aborting."""
    return fatal_calls.append
