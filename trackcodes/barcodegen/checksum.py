"""
UPC-A check digit.

Weights run left to right over the 11-digit base: 1 at even (0-based)
positions, 3 at odd positions. ``check = (10 - sum % 10) % 10``.
Scanners validate against exactly this weighting.
"""

from __future__ import annotations

import re
from typing import Final

from trackcodes.exceptions import ContractViolation, InvalidInput

__all__ = [
    "compute_check_digit",
    "verify_check_digit",
]

_ELEVEN_DIGITS: Final = re.compile(r"[0-9]{11}")
_TWELVE_DIGITS: Final = re.compile(r"[0-9]{12}")


def _weighted_sum(digits: str) -> int:
    return sum(int(d) * (1 if i % 2 == 0 else 3) for i, d in enumerate(digits))


def compute_check_digit(eleven_digits: str) -> int:
    """
    Compute the UPC-A check digit for an 11-digit base.

    Raises:
        ContractViolation: argument is not a string.
        InvalidInput: argument is not exactly 11 ASCII digits.

    Example:
        >>> compute_check_digit("12300000100")
        9
    """
    if not isinstance(eleven_digits, str):
        raise ContractViolation(
            f"UPC-A base must be a string, got {type(eleven_digits).__name__}",
            code_type="barcode",
        )
    if not _ELEVEN_DIGITS.fullmatch(eleven_digits):
        raise InvalidInput(
            "UPC-A base must be exactly 11 digits",
            code_type="barcode",
            context={"length": len(eleven_digits)},
        )
    return (10 - _weighted_sum(eleven_digits) % 10) % 10


def verify_check_digit(twelve_digits: str) -> bool:
    """True if the 12th digit matches the check digit of the first 11."""
    if not isinstance(twelve_digits, str) or not _TWELVE_DIGITS.fullmatch(
        twelve_digits
    ):
        return False
    return compute_check_digit(twelve_digits[:11]) == int(twelve_digits[11])
