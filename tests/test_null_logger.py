# SPDX-License-Identifier: MIT
# Copyright (c) 2025 logpipe contributors

"""Tests for NullLogger."""

from logpipe import LogLevel, MemoryLogger, NullLogger, fatal, info, set_shared_log


class TestNullLogger:
    """Tests for the discarding logger."""

    def test_default_threshold_is_all(self):
        assert NullLogger().log_level is LogLevel.ALL

    def test_never_runs_fatal_handler(self, record_fatal, fatal_calls):
        """Test that even an explicitly assigned handler is never called."""
        logger = NullLogger()
        logger.fatal_handler = record_fatal

        logger.fatal("ignored")
        logger.fatalf("%s", "ignored too")
        logger.log("explicit", level=LogLevel.FATAL, condition=True)

        assert fatal_calls == []

    def test_forwarded_fatal_is_discarded(self, record_fatal, fatal_calls):
        """Test that fatal entries passed in by other loggers are discarded too."""
        null = NullLogger()
        null.fatal_handler = record_fatal
        capture = MemoryLogger(fatal_handler=lambda entry: None)
        capture.fatal("entry")

        null.forward_msg(capture.entries[0])
        null.emit(capture.entries[0])

        assert fatal_calls == []

    def test_as_shared_log_silences_everything(self, capsys):
        """Test that a NullLogger shared log swallows free-function calls, fatal included."""
        set_shared_log(NullLogger())

        info("not printed")
        fatal("no abort")

        captured = capsys.readouterr()
        assert captured.err == ""
        assert captured.out == ""
