"""
Shared logger core: level gating, payload masking, emission through stdlib logging.

Subclasses choose the formatter and may reshape the payload before masking
(see `_prepare_data`). Each instance owns a private `logging.Logger` that is
not registered in the global logger tree, so creating many loggers does not
leak handlers into the root configuration.
"""

from __future__ import annotations

import logging
import sys
from typing import Any, Optional, TextIO, Union

from loggers.levels import LogLevel
from redaction.log_value import error_info
from redaction.mask_engine import MaskingEngine

LevelLike = Union[LogLevel, int, str]


class BaseLogger:
    source = "base"

    def __init__(
        self,
        level: LevelLike = LogLevel.INFO,
        *,
        formatter: Optional[logging.Formatter] = None,
        stream: Optional[TextIO] = None,
        name: Optional[str] = None,
        engine: Optional[MaskingEngine] = None,
    ) -> None:
        self.level = LogLevel.parse(level)
        self.engine = engine if engine is not None else MaskingEngine()

        self._logger = logging.Logger(name or self.source, level=logging.DEBUG)
        self._logger.propagate = False
        handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
        handler.setFormatter(formatter or logging.Formatter("%(message)s"))
        self._logger.addHandler(handler)

    @property
    def handlers(self) -> list[logging.Handler]:
        return list(self._logger.handlers)

    def set_level(self, level: LevelLike) -> None:
        self.level = LogLevel.parse(level)

    def is_enabled_for(self, level: LevelLike) -> bool:
        return LogLevel.parse(level) >= self.level

    def _prepare_data(self, data: Any) -> Any:
        if isinstance(data, BaseException):
            return error_info(data)
        return data

    def log(self, level: LevelLike, message: str, data: Any = None) -> None:
        lvl = LogLevel.parse(level)
        if lvl < self.level:
            return

        payload = self._prepare_data(data)
        masked = self.engine.mask(payload) if payload is not None else None
        self._logger.log(
            lvl.stdlib_level,
            message,
            extra={"log_level": lvl, "log_data": masked},
        )

    def debug(self, message: str, data: Any = None) -> None:
        self.log(LogLevel.DEBUG, message, data)

    def info(self, message: str, data: Any = None) -> None:
        self.log(LogLevel.INFO, message, data)

    def warn(self, message: str, data: Any = None) -> None:
        self.log(LogLevel.WARN, message, data)

    warning = warn

    def error(self, message: str, data: Any = None) -> None:
        self.log(LogLevel.ERROR, message, data)
