"""Validation helpers shared by the converters."""

from __future__ import annotations

import re

from pydevutils._constants import DIGITS, MAX_BASE, MIN_BASE
from pydevutils._errors import ERR_MSG_INVALID_BASE, InvalidBaseError


def _base_pattern(base: int) -> re.Pattern[str]:
    alphabet = re.escape(DIGITS[:base])
    return re.compile(rf"^[{alphabet}]*(\.[{alphabet}]*)?$", re.IGNORECASE | re.ASCII)


BASE_PATTERNS: dict[int, re.Pattern[str]] = {
    base: _base_pattern(base) for base in range(MIN_BASE, MAX_BASE + 1)
}

# Keystroke filters for the time converter input
NUMERIC_INPUT_RE = re.compile(r"^[0-9+\-*/ ().\s]*$")
ISO_INPUT_RE = re.compile(r"^[0-9\-:T.Z+]*$")


def validate_base(base: int) -> int:
    """Return ``base`` unchanged or raise InvalidBaseError."""
    if isinstance(base, bool) or not isinstance(base, int):
        raise InvalidBaseError(
            ERR_MSG_INVALID_BASE,
            f"base must be an int, got {type(base).__name__}",
        )
    if not MIN_BASE <= base <= MAX_BASE:
        raise InvalidBaseError(
            ERR_MSG_INVALID_BASE,
            f"base {base} outside [{MIN_BASE}, {MAX_BASE}]",
        )
    return base


def is_valid_for_base(text: str, base: int) -> bool:
    """Check that ``text`` is a (possibly fractional) number in ``base``.

    The empty string is valid and stands for "no value". Digits are
    matched case-insensitively and at most one ``.`` is allowed.
    """
    validate_base(base)
    if not text:
        return True
    return BASE_PATTERNS[base].fullmatch(text) is not None


def digit_value(char: str) -> int:
    """Value of a single digit character in the base-36 alphabet."""
    return DIGITS.index(char.lower())
