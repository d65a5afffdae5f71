"""
Closed set of value kinds understood by the masking engine.

Every Python value handed to a logger falls into exactly one kind. The engine
dispatches on the kind instead of probing types at each step, so adding a new
kind means touching `kind_of` and the dispatch in `mask_engine.py` only.
"""

from __future__ import annotations

import dataclasses
import datetime
import numbers
import traceback
from collections.abc import Mapping
from typing import Any, Literal, TypedDict


LogValueKind = Literal[
    "null",
    "bool",
    "number",
    "string",
    "array",
    "object",
    "error",
    "timestamp",
    "opaque",
]

CONTAINER_KINDS: frozenset[LogValueKind] = frozenset({"array", "object"})


class ErrorInfo(TypedDict):
    error: str
    name: str
    stack: str


class CyclicStructureError(ValueError):
    """Raised when a value tree references one of its own ancestors."""

    def __init__(self, path: str) -> None:
        super().__init__(f"cyclic structure detected at {path}")
        self.path = path


def kind_of(value: Any) -> LogValueKind:
    """
    Classify a value into its LogValue kind.

    Order matters: bool is checked before number (bool is an int subclass) and
    str before array (str is a sequence, but we never iterate it).
    """
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, numbers.Number):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, tuple) and hasattr(value, "_fields"):
        # namedtuple: field names must go through the classifier
        return "object"
    if isinstance(value, (list, tuple, set, frozenset)):
        return "array"
    if isinstance(value, Mapping):
        return "object"
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return "object"
    if isinstance(value, BaseException):
        return "error"
    if isinstance(value, (datetime.date, datetime.time)):
        return "timestamp"
    return "opaque"


def object_items(value: Any) -> list[tuple[Any, Any]]:
    """Key/value pairs of an "object" kind value, in their natural order."""
    if isinstance(value, Mapping):
        return list(value.items())
    if isinstance(value, tuple):
        return list(value._asdict().items())
    # Dataclass instance: shallow field read, nested values are walked later.
    return [(f.name, getattr(value, f.name)) for f in dataclasses.fields(value)]


def error_info(exc: BaseException) -> ErrorInfo:
    """Flatten an exception into message, class name and formatted stack."""
    stack = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    return {
        "error": str(exc),
        "name": type(exc).__name__,
        "stack": stack,
    }
