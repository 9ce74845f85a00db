#!/usr/bin/env python3
# SPDX-License-Identifier: MIT
# Copyright (c) 2025 logpipe contributors

"""Example usage of the logpipe package.

This script demonstrates the logging pipeline: the free functions, the
shared logger, per-thread filtering and composite loggers.
"""

import sys
import tempfile
import threading
from pathlib import Path

import logpipe
from logpipe import ArrayLogger, FileLogger, LogLevel, MultiLogger, NullLogger


def main():
    """Demonstrate logging functionality."""

    print("=" * 60)
    print("logpipe Examples")
    print("=" * 60)
    print()

    # Example 1: Defaults
    print("Example 1: Default shared logger (stderr, INFO)")
    print("-" * 60)
    logpipe.info("Works out of the box.")
    logpipe.warning("Works out of the box.")
    logpipe.trace("Does *not* work out of the box.")
    logpipe.infof("%s=%d", "count", 5)
    print()

    # Example 2: Lower the shared logger's level
    print("Example 2: Shared logger at TRACE")
    print("-" * 60)
    logpipe.get_shared_log().log_level = LogLevel.TRACE
    logpipe.trace("Tracing the World")
    logpipe.warning("Only if 5 is less than 6", condition=5 < 6)
    print()

    # Example 3: Silence one thread
    print("Example 3: Per-thread threshold")
    print("-" * 60)

    def noisy_worker():
        logpipe.get_thread_local_log().log_level = LogLevel.ERROR
        logpipe.info("This worker's info messages are dropped")
        logpipe.error("But its errors still get through")

    worker = threading.Thread(target=noisy_worker)
    worker.start()
    worker.join()
    logpipe.info("The main thread is unaffected")
    print()

    # Example 4: Fan out to a file and stdout
    print("Example 4: MultiLogger with a file and stdout")
    print("-" * 60)
    with tempfile.TemporaryDirectory() as tmp:
        log_path = Path(tmp) / "app.log"
        file_logger = FileLogger(log_path, LogLevel.ALL)
        multi = MultiLogger()
        multi.insert_logger("file", file_logger)
        multi.insert_logger("console", FileLogger(sys.stdout, LogLevel.WARNING))
        logpipe.set_shared_log(multi)

        logpipe.info("Only in the file")
        logpipe.error("In the file and on stdout")

        file_logger.close()
        print("File contents:")
        print(log_path.read_text(encoding="utf-8"), end="")
    print()

    # Example 5: Discard everything, fatal included
    print("Example 5: NullLogger")
    print("-" * 60)
    logpipe.set_shared_log(ArrayLogger(loggers=[NullLogger()], fatal_handler=lambda entry: None))
    logpipe.fatal("Swallowed without aborting")
    print("Still running")


if __name__ == "__main__":
    main()
