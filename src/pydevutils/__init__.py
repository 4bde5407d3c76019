"""pydevutils - Number base and unix time conversion engines."""

from __future__ import annotations

try:
    from pydevutils._version import __version__
except ModuleNotFoundError:  # editable install without VCS metadata
    __version__ = "0.0.0.dev0"

import datetime
import logging

from pydevutils._errors import (
    ConversionError,
    InvalidArgumentError,
    InvalidBaseError,
    InvalidDigitError,
    InvalidExpressionError,
    InvalidTimestampError,
    ParseError,
    UnsupportedExpressionError,
    UnsupportedFormatError,
)
from pydevutils._expression import evaluate_expression
from pydevutils._utils import is_valid_for_base
from pydevutils.base_state import (
    BaseValues,
    FieldKey,
    apply_edit,
    change_custom_base,
    clear_values,
)
from pydevutils.clipboard import copy_to_clipboard
from pydevutils.radix import convert_base
from pydevutils.ticker import RelativeTimeTicker
from pydevutils.time_state import (
    TimeState,
    TimeStatus,
    apply_input,
    change_format,
    press_now,
)
from pydevutils.timeconv import (
    InputFormat,
    TimeDisplay,
    describe_instant,
    format_time,
    parse_time,
    relative_time,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "validate",
    "convert",
    "describe",
    "apply_edit",
    "apply_input",
    "change_custom_base",
    "change_format",
    "clear_values",
    "convert_base",
    "copy_to_clipboard",
    "evaluate_expression",
    "format_time",
    "is_valid_for_base",
    "parse_time",
    "press_now",
    "relative_time",
    "BaseValues",
    "FieldKey",
    "InputFormat",
    "RelativeTimeTicker",
    "TimeDisplay",
    "TimeState",
    "TimeStatus",
    "ConversionError",
    "InvalidArgumentError",
    "InvalidBaseError",
    "InvalidDigitError",
    "InvalidExpressionError",
    "InvalidTimestampError",
    "ParseError",
    "UnsupportedExpressionError",
    "UnsupportedFormatError",
]


def validate(text: str, base: int) -> bool:
    """Check whether ``text`` is a valid number in ``base``.

    Args:
        text: Candidate digits, optionally with one ``.``. Empty is valid.
        base: Radix in [2, 36].

    Returns:
        True if every character is a digit of ``base`` (case-insensitive).

    Raises:
        InvalidBaseError: If ``base`` is outside [2, 36].
    """
    return is_valid_for_base(text, base)


def convert(text: str, from_base: int, to_base: int) -> str:
    """Convert a numeric string between bases.

    Args:
        text: Digits in ``from_base``, optionally with a fractional part.
        from_base: Source radix in [2, 36].
        to_base: Target radix in [2, 36].

    Returns:
        The converted string in lowercase, or "" for empty input.

    Raises:
        InvalidBaseError: If a base is outside [2, 36].
        InvalidDigitError: If ``text`` is not a number in ``from_base``.
    """
    return convert_base(text, from_base, to_base)


def describe(
    source: TimeState | datetime.datetime | None = None,
    now: datetime.datetime | None = None,
) -> TimeDisplay:
    """Derived display fields for a time converter state or an instant.

    Every field renders ``-`` when there is no valid instant.
    """
    if isinstance(source, TimeState):
        return source.describe(now)
    return describe_instant(source, now)
