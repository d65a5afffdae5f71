"""
Field-name based sensitivity classification.

This module intentionally:
- looks at field NAMES only, never at values (no content scanning)
- normalizes names by lowercasing and dropping "_" and "-", so
  "user_password", "User-Password" and "userPassword" all compare equal
- defaults to substring matching, which over-matches short tokens
  ("pin" flags "pingback"). Use match_mode="exact" or "affix" to tighten it.
"""

from __future__ import annotations

from typing import Any, Optional

from redaction.mask_config import MaskPolicy, current_policy


DEFAULT_SENSITIVE_FIELDS: tuple[str, ...] = (
    # Credentials
    "password",
    "senha",
    "pass",
    "pwd",
    "secret",
    "token",
    "accesstoken",
    "refreshtoken",
    "apikey",
    "api_key",
    "authorization",
    # Identity
    "email",
    "username",
    "e-mail",
    "cpf",
    "cnpj",
    "document",
    "documento",
    "ssn",
    # Payment
    "creditcard",
    "credit_card",
    "cartao",
    "cvv",
    "cvc",
    "pin",
    # Contact
    "phone",
    "telefone",
    "celular",
    "mobile",
)


def normalize_field_name(name: Any) -> str:
    return str(name).lower().replace("_", "").replace("-", "")


class SensitivityClassifier:
    """Decides whether a field name is sensitive under one fixed policy."""

    def __init__(self, policy: Optional[MaskPolicy] = None) -> None:
        self.policy = policy if policy is not None else MaskPolicy()
        tokens: set[str] = set()
        if self.policy.enable_default_mask:
            tokens.update(normalize_field_name(f) for f in DEFAULT_SENSITIVE_FIELDS)
        tokens.update(normalize_field_name(f) for f in self.policy.custom_fields)
        tokens.discard("")
        self.tokens: frozenset[str] = frozenset(tokens)

    def is_sensitive(self, field_name: Any) -> bool:
        name = normalize_field_name(field_name)
        mode = self.policy.match_mode
        if mode == "exact":
            return name in self.tokens
        if mode == "affix":
            return any(name.startswith(t) or name.endswith(t) for t in self.tokens)
        return any(t in name for t in self.tokens)

    def __repr__(self) -> str:
        return f"SensitivityClassifier(policy={self.policy!r})"


_cached: Optional[SensitivityClassifier] = None


def active_classifier() -> SensitivityClassifier:
    """Classifier for the active policy; rebuilt when the policy is replaced."""
    global _cached
    policy = current_policy()
    classifier = _cached
    if classifier is None or classifier.policy is not policy:
        classifier = SensitivityClassifier(policy)
        _cached = classifier
    return classifier


def is_sensitive(field_name: Any) -> bool:
    return active_classifier().is_sensitive(field_name)
