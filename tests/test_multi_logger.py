# SPDX-License-Identifier: MIT
# Copyright (c) 2025 logpipe contributors

"""Tests for MultiLogger and ArrayLogger."""

import threading

import pytest

from logpipe import ArrayLogger, Logger, LogLevel, MemoryLogger, MultiLogger, NullLogger, SinkFanOutError


class FailingLogger(Logger):
    """Logger whose sink always fails."""

    def write_log_msg(self, entry):
        raise OSError(f"cannot write {entry.msg!r}")


class TestMultiLogger:
    """Tests for the name-keyed composite."""

    def test_children_apply_their_own_threshold(self, make_recorder, record):
        """Test that a warning reaches the info child but not the error child."""
        multi = MultiLogger()
        multi.insert_logger("a", make_recorder("a", LogLevel.INFO))
        multi.insert_logger("b", make_recorder("b", LogLevel.ERROR))

        multi.warning("disk almost full")

        assert record == [("a", "disk almost full")]

    def test_fan_out_follows_insertion_order(self, make_recorder, record):
        multi = MultiLogger()
        for label in ("z", "a", "m"):
            multi.insert_logger(label, make_recorder(label))

        multi.info("hello")

        assert [label for label, _ in record] == ["z", "a", "m"]
        assert multi.names == ["z", "a", "m"]

    def test_own_threshold_filters_before_children(self, make_recorder, record):
        multi = MultiLogger(LogLevel.ERROR)
        multi.insert_logger("a", make_recorder("a"))

        multi.info("dropped")
        multi.error("kept")

        assert record == [("a", "kept")]

    def test_duplicate_name_raises(self):
        multi = MultiLogger()
        multi.insert_logger("console", MemoryLogger())

        with pytest.raises(ValueError, match="already registered"):
            multi.insert_logger("console", MemoryLogger())

    def test_remove_logger(self):
        multi = MultiLogger()
        child = MemoryLogger()
        multi.insert_logger("memory", child)

        assert multi.remove_logger("memory") is child
        assert multi.remove_logger("memory") is None
        assert "memory" not in multi
        assert len(multi) == 0

        multi.info("nobody listens")
        assert child.entries == []

    def test_lookup_and_snapshot(self):
        multi = MultiLogger()
        child = MemoryLogger()
        multi.insert_logger("memory", child)

        snapshot = multi.loggers
        snapshot.clear()

        assert multi.get_logger("memory") is child
        assert multi.get_logger("other") is None
        assert len(multi) == 1

    def test_failing_child_does_not_stop_fan_out(self, make_recorder, record):
        """Test that later children still receive the entry and failures are aggregated."""
        multi = MultiLogger()
        multi.insert_logger("first", make_recorder("first"))
        multi.insert_logger("broken", FailingLogger())
        multi.insert_logger("last", make_recorder("last"))

        with pytest.raises(SinkFanOutError) as exc_info:
            multi.error("boom")

        assert record == [("first", "boom"), ("last", "boom")]
        error = exc_info.value
        assert [key for key, _ in error.failures] == ["broken"]
        assert isinstance(error.failures[0][1], OSError)
        assert error.__cause__ is error.failures[0][1]

    def test_child_fatal_handlers_run_after_fan_out(self, make_recorder, record):
        """Test that each accepting child handles the fatal entry once, after every child wrote it."""

        def handler(label):
            return lambda entry: record.append((f"{label}:fatal", entry.msg))

        multi = MultiLogger(fatal_handler=handler("multi"))
        multi.insert_logger("a", make_recorder("a", fatal_handler=handler("a")))
        multi.insert_logger("b", make_recorder("b", fatal_handler=handler("b")))

        multi.fatal("going down")

        assert record == [
            ("a", "going down"),
            ("b", "going down"),
            ("a:fatal", "going down"),
            ("b:fatal", "going down"),
            ("multi:fatal", "going down"),
        ]

    def test_child_that_rejects_fatal_does_not_handle_it(self, make_recorder, record, record_fatal, fatal_calls):
        child_fatal = []
        silent = NullLogger()
        silent.fatal_handler = child_fatal.append
        multi = MultiLogger(fatal_handler=record_fatal)
        multi.insert_logger("off", make_recorder("off", LogLevel.OFF, fatal_handler=child_fatal.append))
        multi.insert_logger("null", silent)
        multi.insert_logger("on", make_recorder("on", fatal_handler=child_fatal.append))

        multi.fatal("going down")

        assert record == [("on", "going down")]
        assert [entry.msg for entry in child_fatal] == ["going down"]
        assert len(fatal_calls) == 1

    def test_child_fatal_handler_runs_when_another_child_fails(self, make_recorder, record_fatal, fatal_calls):
        child_fatal = []
        multi = MultiLogger(fatal_handler=record_fatal)
        multi.insert_logger("broken", FailingLogger(fatal_handler=child_fatal.append))
        multi.insert_logger("ok", make_recorder("ok", fatal_handler=child_fatal.append))

        with pytest.raises(SinkFanOutError):
            multi.fatal("going down")

        assert len(child_fatal) == 2
        assert len(fatal_calls) == 1

    def test_concurrent_mutation_and_logging(self):
        """Test that children can be added while other threads log."""
        multi = MultiLogger()
        first = MemoryLogger()
        multi.insert_logger("first", first)
        errors = []

        def writer():
            try:
                for i in range(200):
                    multi.info("message ", i)
            except Exception as e:
                errors.append(e)

        threads = [threading.Thread(target=writer) for _ in range(4)]
        for t in threads:
            t.start()
        for i in range(50):
            multi.insert_logger(f"extra-{i}", MemoryLogger())
        for t in threads:
            t.join()

        assert errors == []
        assert len(first.entries) == 800
        assert len(multi) == 51


class TestArrayLogger:
    """Tests for the ordered composite."""

    def test_fan_out_preserves_order(self, make_recorder, record):
        """Test that children inserted as X, Y, Z receive entries in that order."""
        array = ArrayLogger()
        for label in ("X", "Y", "Z"):
            array.append_logger(make_recorder(label))

        array.info("first")
        array.info("second")

        assert record == [
            ("X", "first"),
            ("Y", "first"),
            ("Z", "first"),
            ("X", "second"),
            ("Y", "second"),
            ("Z", "second"),
        ]

    def test_initial_loggers(self, make_recorder, record):
        array = ArrayLogger(LogLevel.ALL, [make_recorder("a"), make_recorder("b")])

        array.critical("hi")

        assert record == [("a", "hi"), ("b", "hi")]
        assert len(array) == 2

    def test_children_apply_their_own_threshold(self, make_recorder, record):
        array = ArrayLogger(loggers=[make_recorder("a", LogLevel.INFO), make_recorder("b", LogLevel.ERROR)])

        array.warning("partial")

        assert record == [("a", "partial")]

    def test_remove_logger_by_identity(self):
        same_config_a = MemoryLogger()
        same_config_b = MemoryLogger()
        array = ArrayLogger(loggers=[same_config_a, same_config_b])

        assert array.remove_logger(same_config_b) is True
        assert array.remove_logger(same_config_b) is False
        assert array.loggers == [same_config_a]

    def test_failing_child_reports_index(self, make_recorder, record):
        array = ArrayLogger(loggers=[FailingLogger(), make_recorder("ok"), FailingLogger()])

        with pytest.raises(SinkFanOutError) as exc_info:
            array.info("boom")

        assert record == [("ok", "boom")]
        assert [key for key, _ in exc_info.value.failures] == [0, 2]

    def test_nested_composites(self, make_recorder, record):
        inner = ArrayLogger(LogLevel.WARNING, [make_recorder("inner")])
        outer = MultiLogger()
        outer.insert_logger("inner", inner)
        outer.insert_logger("outer", make_recorder("outer"))

        outer.info("low")
        outer.error("high")

        assert record == [("outer", "low"), ("inner", "high"), ("outer", "high")]

    def test_nested_composites_handle_fatal_bottom_up(self, make_recorder, record):
        def handler(label):
            return lambda entry: record.append((f"{label}:fatal", entry.msg))

        leaf = make_recorder("leaf", fatal_handler=handler("leaf"))
        sibling = make_recorder("sibling", fatal_handler=handler("sibling"))
        inner = ArrayLogger(loggers=[leaf], fatal_handler=handler("inner"))
        outer = ArrayLogger(loggers=[inner, sibling], fatal_handler=handler("outer"))

        outer.fatal("bye")

        assert record == [
            ("leaf", "bye"),
            ("sibling", "bye"),
            ("leaf:fatal", "bye"),
            ("inner:fatal", "bye"),
            ("sibling:fatal", "bye"),
            ("outer:fatal", "bye"),
        ]
