"""Tests for partial-reveal masking of single values."""

import datetime

import pytest

from redaction.value_masker import MASK, mask_sensitive, mask_value


def test_mask_value_short_strings_fully_hidden():
    assert mask_value("abc") == "***"
    assert mask_value("ab") == "***"
    assert mask_value("a") == "***"


def test_mask_value_medium_strings_keep_prefix():
    assert mask_value("abcd") == "abc***"
    assert mask_value("abcdef") == "abc***"


def test_mask_value_long_strings_keep_prefix_and_suffix():
    assert mask_value("user@example.com") == "use***com"
    assert mask_value("mypassword123") == "myp***123"
    assert mask_value("1234567890") == "123***890"
    assert mask_value("abcdefg") == "abc***efg"


@pytest.mark.parametrize("value", ["", None, 12345678, 3.14, ["abcdefgh"], {"a": "b"}])
def test_mask_value_invalid_input_is_constant(value):
    assert mask_value(value) == MASK


def test_mask_value_holds_for_every_length():
    s = "abcdefghijklmnop"
    for n in range(len(s) + 1):
        part = s[:n]
        if n <= 3:
            expected = "***"
        elif n <= 6:
            expected = part[:3] + "***"
        else:
            expected = part[:3] + "***" + part[-3:]
        assert mask_value(part) == expected


def test_mask_sensitive_dispatches_by_kind():
    assert mask_sensitive("secret123") == "sec***123"
    assert mask_sensitive(1234) == MASK
    assert mask_sensitive(12.5) == MASK
    assert mask_sensitive(True) == MASK
    assert mask_sensitive(None) is None
    assert mask_sensitive({"nested": "abcdefgh"}) == MASK
    assert mask_sensitive(["abcdefgh"]) == MASK
    assert mask_sensitive(datetime.date(2025, 12, 10)) == MASK
