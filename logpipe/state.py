# SPDX-License-Identifier: MIT
# Copyright (c) 2025 logpipe contributors

"""Process-wide logging state.

Writers hold ``lock``. Readers load the attributes directly; a single
attribute load is atomic, so a reader sees either the old or the new value.
Use the accessors in ``logpipe.core`` rather than touching this directly.
"""

import threading
from typing import TYPE_CHECKING, Optional

from .levels import LogLevel

if TYPE_CHECKING:
    from .logger import Logger


class ProcessState:
    """Holder for the global log level and the shared logger."""

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.global_log_level: LogLevel = LogLevel.ALL
        # Created lazily by logpipe.core.get_shared_log()
        self.shared_log: Optional["Logger"] = None


STATE = ProcessState()
