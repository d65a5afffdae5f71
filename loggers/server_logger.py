"""
Server-side logger with a context prefix, optional colors, and JSON output.

JSON output is switched on by RNL_SERVER_LOG_JSON or LOG_JSON set to "1" or
"true". Context fields shown in the prefix (service/app/name, env, version)
are not repeated in the data payload.
"""

from __future__ import annotations

import os
import socket
from typing import Any, Mapping, Optional, TextIO

from loggers.base import BaseLogger, LevelLike
from loggers.formatter import JsonFormatter, ServerFormatter
from loggers.levels import LogLevel, level_from_env
from redaction.mask_engine import MaskingEngine

PREFIX_FIELDS = ("service", "app", "name", "env", "version")


def json_output_from_env(environ: Optional[Mapping[str, str]] = None) -> bool:
    env = os.environ if environ is None else environ
    raw = env.get("RNL_SERVER_LOG_JSON") or env.get("LOG_JSON")
    return raw in ("1", "true")


class ServerLogger(BaseLogger):
    source = "server"

    def __init__(
        self,
        level: LevelLike = LogLevel.INFO,
        colors: bool = True,
        context: Optional[Mapping[str, Any]] = None,
        *,
        json_output: Optional[bool] = None,
        hostname: Optional[str] = None,
        stream: Optional[TextIO] = None,
        name: Optional[str] = None,
        engine: Optional[MaskingEngine] = None,
    ) -> None:
        self.hostname = hostname or socket.gethostname()
        self.context = dict(context) if context else None
        self.json_output = json_output_from_env() if json_output is None else json_output
        self.colors = colors and not self.json_output

        if self.json_output:
            formatter = JsonFormatter(hostname=self.hostname, context=self.context)
        else:
            formatter = ServerFormatter(hostname=self.hostname, context=self.context, colors=self.colors)

        super().__init__(level, formatter=formatter, stream=stream, name=name, engine=engine)

    def _prepare_data(self, data: Any) -> Any:
        data = super()._prepare_data(data)
        if not self.context:
            return data
        if data is not None and not isinstance(data, Mapping):
            return data

        combined = {**self.context, **(data or {})}
        # Only strip when the prefix actually shows something from the context.
        if any(self.context.get(k) for k in PREFIX_FIELDS):
            for key in PREFIX_FIELDS:
                combined.pop(key, None)
        return combined or None


def create_server_logger(
    level: Optional[LevelLike] = None,
    colors: bool = True,
    context: Optional[Mapping[str, Any]] = None,
    **kwargs: Any,
) -> ServerLogger:
    """Build a ServerLogger, taking the level from the environment when not given."""
    if level is None:
        level = level_from_env()
    return ServerLogger(level, colors, context, **kwargs)
