"""Positional number base conversion with fractional part support."""

from __future__ import annotations

from pydevutils._constants import DIGITS, MAX_FRACTION_DIGITS
from pydevutils._errors import ERR_MSG_INVALID_DIGITS, InvalidDigitError
from pydevutils._utils import digit_value, is_valid_for_base, validate_base


def parse_integer(text: str, base: int) -> int:
    """Parse an unsigned digit string in ``base`` into an int.

    An empty string parses as zero.
    """
    validate_base(base)
    value = 0
    for char in text:
        digit = _checked_digit(char, base, text)
        value = value * base + digit
    return value


def render_integer(value: int, base: int) -> str:
    """Render ``value`` in ``base`` with lowercase digits."""
    validate_base(base)
    if value == 0:
        return "0"
    sign = ""
    if value < 0:
        sign = "-"
        value = -value
    digits: list[str] = []
    while value:
        value, remainder = divmod(value, base)
        digits.append(DIGITS[remainder])
    return sign + "".join(reversed(digits))


def parse_fraction(text: str, base: int) -> float:
    """Value of the digits after the radix point, accumulated as a float."""
    validate_base(base)
    value = 0.0
    for i, char in enumerate(text):
        value += _checked_digit(char, base, text) * base ** -(i + 1)
    return value


def render_fraction(
    value: float, base: int, max_digits: int = MAX_FRACTION_DIGITS
) -> str:
    """Expand a fraction in [0, 1) into at most ``max_digits`` digits.

    Stops early once the remainder is exactly zero.
    """
    validate_base(base)
    digits: list[str] = []
    while value and len(digits) < max_digits:
        value *= base
        # value * base can round up to base when value is just below 1
        digit = min(int(value), base - 1)
        digits.append(DIGITS[digit])
        value -= digit
    return "".join(digits)


def convert_base(text: str, from_base: int, to_base: int) -> str:
    """Convert a numeric string from ``from_base`` to ``to_base``.

    Args:
        text: Digits in ``from_base``, optionally with one ``.``.
        from_base: Source radix in [2, 36].
        to_base: Target radix in [2, 36].

    Returns:
        The value rendered in ``to_base`` with lowercase digits, or the
        empty string for empty input. The fractional part is limited to
        eight digits and computed in floating point, so it may be rounded.

    Raises:
        InvalidBaseError: If either base is outside [2, 36].
        InvalidDigitError: If ``text`` is not a number in ``from_base``.
    """
    validate_base(from_base)
    validate_base(to_base)
    if not text:
        return ""
    if not is_valid_for_base(text, from_base):
        raise InvalidDigitError(
            ERR_MSG_INVALID_DIGITS,
            f"{text!r} is not a number in base {from_base}",
        )

    integer_part, dot, fraction_part = text.partition(".")
    integer = parse_integer(integer_part, from_base)
    fraction = parse_fraction(fraction_part, from_base) if dot else 0.0
    if fraction >= 1.0:
        # Float sum of a long all-max-digit fraction rounded up to one
        integer += 1
        fraction = 0.0

    result = render_integer(integer, to_base)
    fraction_digits = render_fraction(fraction, to_base)
    if fraction_digits:
        result = f"{result}.{fraction_digits}"
    return result


def _checked_digit(char: str, base: int, text: str) -> int:
    try:
        digit = digit_value(char)
    except ValueError as e:
        raise InvalidDigitError(
            ERR_MSG_INVALID_DIGITS,
            f"character {char!r} in {text!r} is not a base-36 digit",
            wrapped=e,
        ) from e
    if digit >= base:
        raise InvalidDigitError(
            ERR_MSG_INVALID_DIGITS,
            f"digit {char!r} in {text!r} is out of range for base {base}",
        )
    return digit
