"""
Field-by-field report of how a payload is masked under a policy.

Used by the Streamlit preview (`app.py`) to show which paths were masked
and what ends up in the log. Only masked values are reported, never raw ones.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Iterator, Optional, TypedDict

import pandas as pd

from redaction.log_value import CyclicStructureError, LogValueKind, kind_of, object_items
from redaction.sensitivity import SensitivityClassifier, active_classifier
from redaction.value_masker import mask_sensitive


class MaskedFieldRow(TypedDict):
    path: str
    kind: LogValueKind
    masked: Any


REPORT_COLUMNS = ["path", "kind", "masked"]


def _iter_masked(value: Any, classifier: SensitivityClassifier) -> Iterator[MaskedFieldRow]:
    # (path, node) visits; (None, node) marks leaving a container.
    stack: list[tuple[Optional[str], Any]] = [("$", value)]
    on_path: set[int] = set()
    while stack:
        path, node = stack.pop()
        if path is None:
            on_path.discard(id(node))
            continue

        kind = kind_of(node)
        if kind not in ("array", "object"):
            continue
        if id(node) in on_path:
            raise CyclicStructureError(path)
        on_path.add(id(node))
        stack.append((None, node))

        if kind == "array":
            for i, child in reversed(list(enumerate(node))):
                stack.append((f"{path}[{i}]", child))
        else:
            children: list[tuple[str, Any]] = []
            for key, child in object_items(node):
                child_path = f"{path}.{key}"
                if classifier.is_sensitive(key):
                    yield {
                        "path": child_path,
                        "kind": kind_of(child),
                        "masked": mask_sensitive(child),
                    }
                else:
                    children.append((child_path, child))
            stack.extend(reversed(children))


def masked_field_rows(
    value: Any,
    *,
    classifier: Optional[SensitivityClassifier] = None,
) -> list[MaskedFieldRow]:
    """
    List every sensitive field in `value` with its original kind and masked value.

    Raises CyclicStructureError for cyclic input.
    """
    return list(_iter_masked(value, classifier or active_classifier()))


def mask_report_frame(
    value: Any,
    *,
    classifier: Optional[SensitivityClassifier] = None,
) -> pd.DataFrame:
    rows = masked_field_rows(value, classifier=classifier)
    if not rows:
        return pd.DataFrame(columns=REPORT_COLUMNS)
    df = pd.DataFrame(rows, columns=REPORT_COLUMNS)
    # Mixed masked values (str / None) display better as text.
    df["masked"] = df["masked"].map(lambda v: "" if v is None else str(v))
    return df


def summarize(value: Any, *, classifier: Optional[SensitivityClassifier] = None) -> Mapping[str, int]:
    """Count of masked fields per original kind."""
    counts: dict[str, int] = {}
    for row in masked_field_rows(value, classifier=classifier):
        counts[row["kind"]] = counts.get(row["kind"], 0) + 1
    return counts
