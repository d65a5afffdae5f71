"""
Redaction policy: which field names are masked, and how names are matched.

The policy is a frozen object. Code that wants isolation (tests, a worker with
its own rules) builds a `MaskPolicy` and hands it to a classifier/engine.
Code that just wants "the process policy" uses the active one, which is read
from the environment at import and can only be replaced through
`initialize()` or `reset()`.

Environment:
- LOG_DEFAULT_MASK:    anything but "false" (any case) keeps the default fields on
- LOG_MASK_FIELDS:     comma-separated extra field names, e.g. "matricula,rg"
- LOG_MASK_MATCH_MODE: "contains" (default), "exact" or "affix"
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from typing import Literal, Mapping, Optional

logger = logging.getLogger(__name__)

MatchMode = Literal["contains", "exact", "affix"]

MATCH_MODES: tuple[MatchMode, ...] = ("contains", "exact", "affix")
DEFAULT_MATCH_MODE: MatchMode = "contains"

ENV_DEFAULT_MASK = "LOG_DEFAULT_MASK"
ENV_MASK_FIELDS = "LOG_MASK_FIELDS"
ENV_MATCH_MODE = "LOG_MASK_MATCH_MODE"

_POLICY_JSON_KEYS = ("enable_default_mask", "custom_fields", "match_mode")


@dataclass(frozen=True, slots=True)
class MaskPolicy:
    """
    - enable_default_mask: include the built-in sensitive field names
    - custom_fields: extra field names (already trimmed and lowercased)
    - match_mode: how a field name is compared against the tokens
    """

    enable_default_mask: bool = True
    custom_fields: tuple[str, ...] = ()
    match_mode: MatchMode = DEFAULT_MATCH_MODE

    def __post_init__(self) -> None:
        validate_policy(self)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "MaskPolicy":
        env = os.environ if environ is None else environ
        mode = env.get(ENV_MATCH_MODE, "").strip().lower() or DEFAULT_MATCH_MODE
        if mode not in MATCH_MODES:
            logger.warning(
                "Ignoring %s=%r; expected one of %s", ENV_MATCH_MODE, mode, ", ".join(MATCH_MODES)
            )
            mode = DEFAULT_MATCH_MODE
        return cls(
            enable_default_mask=parse_enable_flag(env.get(ENV_DEFAULT_MASK)),
            custom_fields=parse_field_list(env.get(ENV_MASK_FIELDS)),
            match_mode=mode,  # type: ignore[arg-type]
        )


def validate_policy(policy: MaskPolicy) -> None:
    if not isinstance(policy.enable_default_mask, bool):
        raise ValueError(
            f"enable_default_mask must be a bool, got {policy.enable_default_mask!r}"
        )
    if policy.match_mode not in MATCH_MODES:
        raise ValueError(
            f"match_mode must be one of {MATCH_MODES!r}, got {policy.match_mode!r}"
        )
    for field in policy.custom_fields:
        if not isinstance(field, str):
            raise ValueError(f"custom field names must be strings, got {field!r}")


def parse_enable_flag(raw: Optional[str]) -> bool:
    """Only the literal "false" (case-insensitive) disables; unset means enabled."""
    if raw is None:
        return True
    return raw.lower() != "false"


def parse_field_list(raw: Optional[str]) -> tuple[str, ...]:
    if not raw:
        return ()
    fields = (part.strip().lower() for part in raw.split(","))
    return tuple(f for f in fields if f)


def load_policy_from_json(path: str) -> MaskPolicy:
    """
    Load a policy from a JSON file.

    Expected JSON shape (every key optional):
    {
      "enable_default_mask": true,
      "custom_fields": ["matricula", "rg"],
      "match_mode": "contains"
    }
    """
    with open(path, "r", encoding="utf-8") as f:
        raw = json.load(f)

    unknown = set(raw) - set(_POLICY_JSON_KEYS)
    if unknown:
        raise ValueError(f"Unknown keys in policy JSON: {sorted(unknown)!r}")

    custom = raw.get("custom_fields", [])
    if isinstance(custom, str):
        fields = parse_field_list(custom)
    else:
        fields = tuple(str(f).strip().lower() for f in custom if str(f).strip())

    enabled = raw.get("enable_default_mask", True)
    if isinstance(enabled, str):
        enabled = parse_enable_flag(enabled)

    return MaskPolicy(
        enable_default_mask=enabled,
        custom_fields=fields,
        match_mode=raw.get("match_mode", DEFAULT_MATCH_MODE),
    )


# Active process policy. Replaced as a whole, never mutated in place.
_active_policy: MaskPolicy = MaskPolicy()


def current_policy() -> MaskPolicy:
    return _active_policy


def initialize(environ: Optional[Mapping[str, str]] = None) -> MaskPolicy:
    """Read the policy from the environment and make it the active one."""
    global _active_policy
    _active_policy = MaskPolicy.from_env(environ)
    logger.debug(
        "Mask policy initialized: default_mask=%s custom_fields=%d match_mode=%s",
        _active_policy.enable_default_mask,
        len(_active_policy.custom_fields),
        _active_policy.match_mode,
    )
    return _active_policy


def reset(environ: Optional[Mapping[str, str]] = None) -> MaskPolicy:
    """Drop any previous policy back to defaults, then re-read the environment."""
    global _active_policy
    _active_policy = MaskPolicy()
    return initialize(environ)


initialize()
