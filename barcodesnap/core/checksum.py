"""
EAN13 check digit (weighted modulo-10, as used by EAN/UPC).

Positions are counted from the left starting at 0: even positions weigh 1,
odd positions weigh 3.

Example:
    >>> compute_ean13_check_digit("012345678905")
    0
    >>> is_valid_ean13("4006381333931")
    True
"""

from __future__ import annotations

import re
from typing import Final, Pattern

__all__ = [
    "EAN13_BASE_PATTERN",
    "EAN13_FULL_PATTERN",
    "compute_ean13_check_digit",
    "is_valid_ean13",
]

# ASCII only: str.isdigit() and \d also accept other Unicode digits.
EAN13_BASE_PATTERN: Final[Pattern[str]] = re.compile(r"[0-9]{12}")
EAN13_FULL_PATTERN: Final[Pattern[str]] = re.compile(r"[0-9]{13}")


def compute_ean13_check_digit(base12: str) -> int:
    """
    Compute the EAN13 check digit for exactly 12 ASCII digits.

    Raises:
        ValueError: if ``base12`` is not exactly 12 ASCII digits.
    """
    if not isinstance(base12, str) or not EAN13_BASE_PATTERN.fullmatch(base12):
        raise ValueError(f"EAN13 check digit requires exactly 12 digits, got {base12!r}")
    total = sum(
        int(digit) * (1 if i % 2 == 0 else 3) for i, digit in enumerate(base12)
    )
    mod = total % 10
    return 0 if mod == 0 else 10 - mod


def is_valid_ean13(full13: str) -> bool:
    """
    Check the 13th digit of a 13-digit value against its first 12.

    Raises:
        ValueError: if ``full13`` is not exactly 13 ASCII digits.
    """
    if not isinstance(full13, str) or not EAN13_FULL_PATTERN.fullmatch(full13):
        raise ValueError(f"EAN13 value must be exactly 13 digits, got {full13!r}")
    return int(full13[12]) == compute_ean13_check_digit(full13[:12])
