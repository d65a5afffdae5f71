"""
Masking engine: returns a copy of a value tree that is safe to log.

Walk rules, per LogValue kind:
- null / bool / number / string / opaque: returned as is
- array:     every element masked, order and length kept (tuples stay tuples,
             sets become lists)
- error:     flattened to {"error", "name", "stack"}, reported verbatim
- timestamp: the same object, untouched
- object:    mappings, dataclasses and namedtuples become dicts with the same
             keys in the same order; a sensitive key gets
             `mask_sensitive(value)` and is never descended into, any other
             key is walked

The walk uses an explicit stack instead of recursion, so very deep payloads
do not hit the interpreter recursion limit. Containers on the current path are
tracked by identity; meeting one again raises CyclicStructureError.
"""

from __future__ import annotations

from typing import Any, Optional

from redaction.log_value import (
    CONTAINER_KINDS,
    CyclicStructureError,
    LogValueKind,
    error_info,
    kind_of,
    object_items,
)
from redaction.sensitivity import SensitivityClassifier, active_classifier
from redaction.value_masker import mask_sensitive, mask_value

__all__ = ["MaskingEngine", "mask", "mask_value", "CyclicStructureError"]

_VISIT = 0
_LEAVE = 1


def _render_path(path: Optional[tuple]) -> str:
    # Paths are stored as (parent, segment) links and only rendered on error.
    segments: list[str] = []
    while path is not None:
        path, segment = path
        segments.append(segment)
    return "$" + "".join(reversed(segments))


def _mask_leaf(value: Any, kind: LogValueKind) -> Any:
    if kind == "error":
        return error_info(value)
    # null, bool, number, string, timestamp, opaque
    return value


class MaskingEngine:
    """
    Masks value trees with a given classifier.

    Without a classifier the engine follows the active process policy, so a
    `reset()` is picked up by the next call.
    """

    def __init__(self, classifier: Optional[SensitivityClassifier] = None) -> None:
        self.classifier = classifier

    def mask(self, value: Any) -> Any:
        classifier = self.classifier if self.classifier is not None else active_classifier()

        result: list[Any] = [None]
        stack: list[tuple] = [(_VISIT, value, result, 0, None)]
        on_path: set[int] = set()

        while stack:
            frame = stack.pop()

            if frame[0] == _LEAVE:
                _, node, target, slot, out = frame
                on_path.discard(id(node))
                if isinstance(node, tuple) and isinstance(out, list):
                    target[slot] = tuple(out)
                continue

            _, node, target, slot, path = frame
            kind = kind_of(node)
            if kind not in CONTAINER_KINDS:
                target[slot] = _mask_leaf(node, kind)
                continue

            if id(node) in on_path:
                raise CyclicStructureError(_render_path(path))
            on_path.add(id(node))

            if kind == "array":
                items = list(node)
                out_list: list[Any] = [None] * len(items)
                target[slot] = out_list
                stack.append((_LEAVE, node, target, slot, out_list))
                for i in reversed(range(len(items))):
                    stack.append((_VISIT, items[i], out_list, i, (path, f"[{i}]")))
                continue

            # kind == "object"
            out_map: dict[Any, Any] = {}
            target[slot] = out_map
            stack.append((_LEAVE, node, target, slot, out_map))
            pending: list[tuple[Any, Any]] = []
            for key, child in object_items(node):
                if classifier.is_sensitive(key):
                    out_map[key] = mask_sensitive(child)
                else:
                    # Placeholder keeps the input key order.
                    out_map[key] = None
                    pending.append((key, child))
            for key, child in reversed(pending):
                stack.append((_VISIT, child, out_map, key, (path, f".{key}")))

        return result[0]


_default_engine = MaskingEngine()


def mask(value: Any) -> Any:
    """Mask a value tree under the active process policy."""
    return _default_engine.mask(value)
