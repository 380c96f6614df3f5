"""
Tests for exact fixed-point amount rendering and address encoding.
"""

from __future__ import annotations

import base58
import pytest

from tron_ledger.addresses import hex_to_base58, is_hex_address
from tron_ledger.amounts import is_positive_amount, scale_amount


@pytest.mark.parametrize("decimals", [0, 6, 8, 18])
@pytest.mark.parametrize("raw", [0, 1, 7, 999999, 10**6, 123456789012345678, 2**128 + 1])
def test_scaled_amount_is_exact(raw, decimals):
    text = scale_amount(raw, decimals)
    if decimals == 0:
        assert "." not in text
    else:
        whole, fraction = text.split(".")
        assert len(fraction) == decimals
        assert whole == whole.lstrip("0") or whole == "0"
    assert int(text.replace(".", "")) == raw


@pytest.mark.parametrize(
    "raw,decimals,expected",
    [
        (5000000, 6, "5.000000"),
        (1, 6, "0.000001"),
        ("1000000000000000001", 18, "1.000000000000000001"),
        ("000123", 2, "1.23"),
        (42, 0, "42"),
        (0, 8, "0.00000000"),
    ],
)
def test_scale_amount_examples(raw, decimals, expected):
    assert scale_amount(raw, decimals) == expected


@pytest.mark.parametrize("raw", [-1, "-5", "1.5", 1.5, "", None, True])
def test_scale_amount_rejects_non_integers(raw):
    with pytest.raises(ValueError):
        scale_amount(raw, 6)


def test_scale_amount_rejects_negative_precision():
    with pytest.raises(ValueError):
        scale_amount(1, -1)


@pytest.mark.parametrize("raw,expected", [(1, True), ("3", True), (0, False), ("0", False), (None, False), (-2, False), (True, False)])
def test_is_positive_amount(raw, expected):
    assert is_positive_amount(raw) is expected


def test_hex_address_round_trip():
    hex_address = "41" + "ab" * 20
    address = hex_to_base58(hex_address)
    assert address.startswith("T")
    assert len(address) == 34
    assert base58.b58decode_check(address).hex() == hex_address


def test_zero_x_prefix_is_accepted():
    assert hex_to_base58("0x" + "ab" * 20) == hex_to_base58("41" + "ab" * 20)


def test_empty_address_stays_none():
    assert hex_to_base58(None) is None
    assert hex_to_base58("") is None


def test_malformed_hex_address_raises():
    with pytest.raises(ValueError):
        hex_to_base58("41abcd")


@pytest.mark.parametrize("raw", ["٣", "１２", "12٣"])
def test_non_ascii_digits_are_not_amounts(raw):
    assert is_positive_amount(raw) is False
    with pytest.raises(ValueError):
        scale_amount(raw, 6)


@pytest.mark.parametrize(
    "value,expected",
    [
        ("41" + "ab" * 20, True),
        ("0x" + "AB" * 20, True),
        ("41zz", False),
        ("4112", False),
        ("41" + "zz" * 20, False),
        (7, False),
        (None, False),
    ],
)
def test_is_hex_address(value, expected):
    assert is_hex_address(value) is expected
