# SPDX-License-Identifier: MIT
# Copyright (c) 2025 logpipe contributors

"""Logging configuration loaded from explicit values and environment variables.

Environment variables:
    LOG_TYPE: Sink kind (stderr, stdout, file, null, memory, stdlib)
    LOG_LEVEL: Threshold of the created logger
    LOG_NAME: Logger name
    LOG_FILE: Path used by the ``file`` sink
    LOG_APPEND: Append to (true) or truncate (false) the log file
    LOG_GLOBAL_LEVEL: Global log level set by ``configure_from_env``
"""

import logging
import os
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from .levels import LogLevel, parse_log_level

logger = logging.getLogger(__name__)

_TRUE_VALUES = ("true", "1", "yes", "on")
_FALSE_VALUES = ("false", "0", "no", "off")


def get_bool(environ: Mapping[str, str], key: str, default: bool = False) -> bool:
    """Read a boolean environment variable, falling back to ``default``."""
    value = environ.get(key)
    if value is None:
        return default

    value_lower = value.strip().lower()
    if value_lower in _TRUE_VALUES:
        return True
    if value_lower in _FALSE_VALUES:
        return False
    logger.warning("Ignoring %s=%r: expected true or false, using %s", key, value, default)
    return default


@dataclass
class LoggingConfig:
    """Settings used to build a logger and configure global logging.

    Attributes:
        logger_type: Sink kind, see ``logpipe.factory.LOGGER_TYPES``
        level: Threshold of the created logger
        name: Logger name
        file: Path used by the ``file`` sink
        append: Append to an existing log file instead of truncating it
        global_level: Global log level applied by ``configure_from_env``
    """

    logger_type: str = "stderr"
    level: LogLevel = LogLevel.INFO
    name: str = "logpipe"
    file: str = "logpipe.log"
    append: bool = True
    global_level: LogLevel = LogLevel.ALL

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        **overrides: Any,
    ) -> "LoggingConfig":
        """Build a config from explicit values, then environment, then defaults.

        Args:
            environ: Mapping to read variables from (defaults to ``os.environ``)
            **overrides: Field values that take precedence over the environment.
                None values are ignored.

        Returns:
            LoggingConfig instance

        Raises:
            InvalidLogLevelError: If a level does not name a log level
            TypeError: If an override does not name a field
        """
        env = environ if environ is not None else os.environ
        values = {key: value for key, value in overrides.items() if value is not None}
        unknown = set(values) - set(cls.__dataclass_fields__)
        if unknown:
            raise TypeError(f"Unknown LoggingConfig fields: {sorted(unknown)}")

        def pick(field_name: str, env_var: str, fallback: Any) -> Any:
            if field_name in values:
                return values[field_name]
            return env.get(env_var) or fallback

        if "append" in values:
            append = bool(values["append"])
        else:
            append = get_bool(env, "LOG_APPEND", cls.append)

        return cls(
            logger_type=str(pick("logger_type", "LOG_TYPE", cls.logger_type)).strip().lower(),
            level=parse_log_level(pick("level", "LOG_LEVEL", cls.level)),
            name=pick("name", "LOG_NAME", cls.name),
            file=str(pick("file", "LOG_FILE", cls.file)),
            append=append,
            global_level=parse_log_level(pick("global_level", "LOG_GLOBAL_LEVEL", cls.global_level)),
        )
