"""
WSGI middleware that logs each request and its response status.

Query parameters are logged as data, so parameters like ?token=... go through
the same field-name masking as any other payload.
"""

from __future__ import annotations

from typing import Any, Callable, Iterable, Optional
from urllib.parse import parse_qsl

from loggers.base import BaseLogger
from loggers.server_logger import ServerLogger


class LoggingMiddleware:
    def __init__(self, app: Callable[..., Iterable[bytes]], logger: Optional[BaseLogger] = None) -> None:
        self.app = app
        self.logger = logger if logger is not None else ServerLogger()

    def __call__(self, environ: dict[str, Any], start_response: Callable[..., Any]) -> Iterable[bytes]:
        method = environ.get("REQUEST_METHOD", "GET")
        path = environ.get("PATH_INFO", "") or "/"
        query = dict(parse_qsl(environ.get("QUERY_STRING", ""), keep_blank_values=True))

        self.logger.info(f"Request: {method} {path}", {"query": query} if query else None)

        def logging_start_response(status: str, headers: list, exc_info: Any = None) -> Any:
            code = status.split(" ", 1)[0]
            self.logger.info(f"Response: {code} {method} {path}")
            if exc_info is None:
                return start_response(status, headers)
            return start_response(status, headers, exc_info)

        return self.app(environ, logging_start_response)
