"""
Message formatting: plain helpers plus the `logging.Formatter` subclasses
used by the server and client loggers.

Records emitted by our loggers carry two extra attributes:
- log_level: the LogLevel of the call
- log_data:  the already-masked payload (dict) or None
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any, Mapping, Optional

from loggers.levels import LogLevel

# ANSI color codes for terminal output
COLORS = {
    "reset": "\x1b[0m",
    "bright": "\x1b[1m",
    "dim": "\x1b[2m",
    "red": "\x1b[31m",
    "yellow": "\x1b[33m",
    "blue": "\x1b[34m",
    "cyan": "\x1b[36m",
    "gray": "\x1b[90m",
}

LEVEL_COLORS = {
    LogLevel.DEBUG: "cyan",
    LogLevel.INFO: "blue",
    LogLevel.WARN: "yellow",
    LogLevel.ERROR: "red",
}


def iso_timestamp(when: Optional[datetime] = None) -> str:
    """UTC ISO-8601 with milliseconds and a trailing Z, e.g. 2025-12-10T08:00:00.000Z."""
    if when is None:
        when = datetime.now(timezone.utc)
    elif when.tzinfo is None:
        when = when.replace(tzinfo=timezone.utc)
    return when.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def format_log_message(level: str, message: str, timestamp: Optional[datetime] = None) -> str:
    return f"[{iso_timestamp(timestamp)}] [{level}] {message}"


def format_error_message(error: BaseException, context: Optional[str] = None) -> str:
    error_message = f"{context}: {error}" if context else str(error)
    return format_log_message("ERROR", error_message)


def dump_data(data: Any) -> str:
    # Masked payloads may still hold datetimes or opaque objects.
    return json.dumps(data, ensure_ascii=False, default=str)


def has_data(data: Any) -> bool:
    # Falsy scalars such as 0 or False are still payloads; only None and {} are not.
    return data is not None and not (isinstance(data, Mapping) and not data)


def service_name(context: Optional[Mapping[str, Any]]) -> Optional[Any]:
    if not context:
        return None
    return context.get("service") or context.get("app") or context.get("name")


def _record_level(record: logging.LogRecord) -> LogLevel:
    level = getattr(record, "log_level", None)
    if isinstance(level, LogLevel):
        return level
    if record.levelno >= logging.ERROR:
        return LogLevel.ERROR
    if record.levelno >= logging.WARNING:
        return LogLevel.WARN
    if record.levelno >= logging.INFO:
        return LogLevel.INFO
    return LogLevel.DEBUG


def _record_time(record: logging.LogRecord) -> str:
    return iso_timestamp(datetime.fromtimestamp(record.created, tz=timezone.utc))


class ServerFormatter(logging.Formatter):
    """
    Human-readable server line:
    [ts] [SERVER] [LEVEL] [Context:svc] [Host:h] [Env:e] [v1.2.0] message {data}
    """

    def __init__(
        self,
        *,
        hostname: str,
        context: Optional[Mapping[str, Any]] = None,
        colors: bool = False,
    ) -> None:
        super().__init__()
        self.hostname = hostname
        self.context = dict(context) if context else None
        self.colors = colors

    def _c(self, name: str) -> str:
        return COLORS[name] if self.colors else ""

    def context_prefix(self) -> str:
        if not self.context:
            return ""
        gray, reset = self._c("gray"), self._c("reset")
        parts: list[str] = []

        svc = service_name(self.context)
        if svc:
            parts.append(f"{gray}[Context:{svc}]{reset}")
        parts.append(f"{gray}[Host:{self.hostname}]{reset}")
        if self.context.get("env"):
            parts.append(f"{gray}[Env:{self.context['env']}]{reset}")
        if self.context.get("version"):
            parts.append(f"{gray}[v{self.context['version']}]{reset}")
        return " " + " ".join(parts)

    def format(self, record: logging.LogRecord) -> str:
        level = _record_level(record)
        reset = self._c("reset")
        line = (
            f"{self._c('gray')}[{_record_time(record)}]{reset} "
            f"{self._c('bright')}[SERVER]{reset} "
            f"{self._c(LEVEL_COLORS[level])}[{level.name}]{reset}"
            f"{self.context_prefix()} {record.getMessage()}"
        )
        data = getattr(record, "log_data", None)
        if has_data(data):
            line = f"{line} {dump_data(data)}"
        return line


class JsonFormatter(logging.Formatter):
    """One JSON object per line; context metadata promoted to top-level keys."""

    def __init__(self, *, hostname: str, context: Optional[Mapping[str, Any]] = None) -> None:
        super().__init__()
        self.hostname = hostname
        self.context = dict(context) if context else None

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": _record_time(record),
            "level": _record_level(record).name,
            "message": record.getMessage(),
            "source": "server",
            "hostname": self.hostname,
        }
        if self.context:
            svc = service_name(self.context)
            if svc:
                payload["service"] = svc
            if self.context.get("env"):
                payload["env"] = self.context["env"]
            if self.context.get("version"):
                payload["version"] = self.context["version"]

        data = getattr(record, "log_data", None)
        if has_data(data):
            payload["data"] = data
        return dump_data(payload)


class ClientFormatter(logging.Formatter):
    """[LEVEL] message {data}"""

    def format(self, record: logging.LogRecord) -> str:
        line = f"[{_record_level(record).name}] {record.getMessage()}"
        data = getattr(record, "log_data", None)
        if has_data(data):
            line = f"{line} {dump_data(data)}"
        return line
