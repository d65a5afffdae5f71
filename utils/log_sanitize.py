"""
Mask sensitive fields in structures handed to any stdlib logger.

Our own loggers mask their payloads already. This module covers the rest:
third-party or legacy code that calls `logging.getLogger(...).info(...)` with
dict arguments or a `data` extra. Attach `MaskingFilter` to the handlers
(`install_masking_filter()` does this for the root handlers) and those
structures are masked before any formatter sees them.

Privacy motivation:
- Logs may be persisted or shipped to an aggregator; logging a raw password,
  token or document number there extends its exposure.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Optional

from redaction.log_value import CONTAINER_KINDS, kind_of
from redaction.mask_engine import MaskingEngine

# Extra attribute inspected on each record, e.g. logger.info("x", extra={"data": {...}}).
DATA_ATTR = "data"

# Set on a record once it has been masked.
MASKED_ATTR = "_masking_applied"


def sanitize_for_log(obj: Any, *, engine: Optional[MaskingEngine] = None) -> Any:
    """
    Return a copy of obj safe for logging under the active (or given) policy.

    Nested dicts, lists and tuples are processed; the input is never mutated.
    """
    return (engine or MaskingEngine()).mask(obj)


class MaskingFilter(logging.Filter):
    """Masks mapping args, a mapping msg, and the `data` extra of each record."""

    def __init__(self, name: str = "", *, engine: Optional[MaskingEngine] = None) -> None:
        super().__init__(name)
        self.engine = engine or MaskingEngine()

    def filter(self, record: logging.LogRecord) -> bool:
        if not super().filter(record):
            return False
        # A record can pass several handlers that share this filter.
        if getattr(record, MASKED_ATTR, False):
            return True

        if isinstance(record.msg, Mapping):
            record.msg = self.engine.mask(record.msg)

        args = record.args
        if isinstance(args, Mapping):
            record.args = self.engine.mask(args)
        elif isinstance(args, tuple) and args:
            record.args = tuple(
                self.engine.mask(a) if kind_of(a) in CONTAINER_KINDS else a for a in args
            )

        if hasattr(record, DATA_ATTR):
            setattr(record, DATA_ATTR, self.engine.mask(getattr(record, DATA_ATTR)))
        setattr(record, MASKED_ATTR, True)
        return True


def install_masking_filter(
    logger: logging.Logger | str | None = None,
    *,
    engine: Optional[MaskingEngine] = None,
) -> MaskingFilter:
    """
    Attach a MaskingFilter to every handler of a logger (by object or name; None = root).

    Handler filters also see records propagated from child loggers, which
    logger filters do not, so `install_masking_filter()` covers everything
    that reaches the root handlers. Handlers added later are not covered;
    install after logging is configured.

    Raises ValueError if the logger has no handlers.
    """
    if not isinstance(logger, logging.Logger):
        logger = logging.getLogger(logger)
    if not logger.handlers:
        raise ValueError(
            f"logger {logger.name!r} has no handlers; configure logging before installing the filter"
        )

    masking_filter: Optional[MaskingFilter] = None
    for handler in logger.handlers:
        for existing in handler.filters:
            if isinstance(existing, MaskingFilter):
                masking_filter = existing
                break
    if masking_filter is None:
        masking_filter = MaskingFilter(engine=engine)

    for handler in logger.handlers:
        if not any(isinstance(f, MaskingFilter) for f in handler.filters):
            handler.addFilter(masking_filter)
    return masking_filter
