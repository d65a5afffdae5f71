"""Minimal client-side logger: "[LEVEL] message" plus masked data."""

from __future__ import annotations

from typing import Optional, TextIO

from loggers.base import BaseLogger, LevelLike
from loggers.formatter import ClientFormatter
from loggers.levels import LogLevel
from redaction.mask_engine import MaskingEngine


class ClientLogger(BaseLogger):
    source = "client"

    def __init__(
        self,
        level: LevelLike = LogLevel.INFO,
        *,
        stream: Optional[TextIO] = None,
        name: Optional[str] = None,
        engine: Optional[MaskingEngine] = None,
    ) -> None:
        super().__init__(level, formatter=ClientFormatter(), stream=stream, name=name, engine=engine)
