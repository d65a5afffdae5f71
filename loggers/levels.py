"""
Log levels and their mapping onto the stdlib `logging` levels.

Level from environment, first match wins:
1) RNL_LOG_LEVEL
2) LOG_LEVEL
3) ENV: production -> WARN, test -> ERROR, anything else -> DEBUG
"""

from __future__ import annotations

import logging
import os
from enum import IntEnum
from typing import Mapping, Optional, Union


class LogLevel(IntEnum):
    DEBUG = 0
    INFO = 1
    WARN = 2
    ERROR = 3

    @property
    def stdlib_level(self) -> int:
        return _STDLIB_LEVELS[self]

    @classmethod
    def parse(cls, raw: Union[str, int, "LogLevel"]) -> "LogLevel":
        """Accept a LogLevel, its int value, or a name ("warn" and "warning" both work)."""
        if isinstance(raw, LogLevel):
            return raw
        if isinstance(raw, int):
            return cls(raw)
        name = raw.strip().upper()
        if name == "WARNING":
            name = "WARN"
        try:
            return cls[name]
        except KeyError:
            raise ValueError(f"Unknown log level: {raw!r}") from None


_STDLIB_LEVELS = {
    LogLevel.DEBUG: logging.DEBUG,
    LogLevel.INFO: logging.INFO,
    LogLevel.WARN: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
}

_ENV_DEFAULTS = {
    "production": LogLevel.WARN,
    "test": LogLevel.ERROR,
}


def level_from_env(environ: Optional[Mapping[str, str]] = None) -> LogLevel:
    env = os.environ if environ is None else environ
    custom = env.get("RNL_LOG_LEVEL") or env.get("LOG_LEVEL")
    if custom:
        try:
            return LogLevel.parse(custom)
        except ValueError:
            pass  # fall through to the ENV mapping
    return _ENV_DEFAULTS.get(env.get("ENV", "development"), LogLevel.DEBUG)
