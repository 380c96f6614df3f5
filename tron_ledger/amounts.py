"""Exact fixed-point amount conversion"""
import re
from typing import Union

_DIGITS = re.compile(r"\d+", re.ASCII)


def scale_amount(raw: Union[int, str], decimals: int) -> str:
    """
    Render an integer on-chain amount as a decimal string.

    The result has exactly `decimals` fraction digits and equals
    raw / 10**decimals with no rounding. Works on the digit string so
    precision is not bounded by a decimal context.

    Raises:
        ValueError: If raw is negative, not an integer, or decimals is negative
    """
    if decimals < 0:
        raise ValueError(f"Negative precision {decimals}")
    if isinstance(raw, bool) or not isinstance(raw, (int, str)):
        raise ValueError(f"Amount must be an integer, got {raw!r}")

    digits = str(raw).strip()
    if not is_digits(digits):
        raise ValueError(f"Amount must be a non-negative integer, got {raw!r}")

    digits = digits.lstrip('0') or '0'
    if decimals == 0:
        return digits

    digits = digits.rjust(decimals + 1, '0')
    return f"{digits[:-decimals]}.{digits[-decimals:]}"


def is_positive_amount(raw) -> bool:
    """True for an integer (or integer string) amount above zero"""
    if isinstance(raw, bool):
        return False
    if isinstance(raw, int):
        return raw > 0
    if isinstance(raw, str) and is_digits(raw.strip()):
        return int(raw) > 0
    return False


def is_digits(text: str) -> bool:
    """True for a non-empty run of ASCII digits"""
    return _DIGITS.fullmatch(text) is not None
