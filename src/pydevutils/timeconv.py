"""Unix time, milliseconds and ISO-8601 conversion."""

from __future__ import annotations

import calendar
import datetime as _datetime
import enum
from dataclasses import dataclass

import pendulum
from pendulum.tz.timezone import FixedTimezone, Timezone

from pydevutils._constants import EMPTY_DISPLAY
from pydevutils._errors import (
    ERR_MSG_INVALID_TIMESTAMP,
    ERR_MSG_UNSUPPORTED_FORMAT,
    InvalidArgumentError,
    InvalidTimestampError,
    UnsupportedFormatError,
)
from pydevutils._expression import evaluate_expression

TzLike = str | Timezone | FixedTimezone | None


class InputFormat(enum.StrEnum):
    UNIX = "unix"
    MS = "ms"
    ISO = "iso"


ISO_PATTERN = "YYYY-MM-DD[T]HH:mm:ss.SSSZ"
LOCAL_PATTERN = "ddd MMM DD HH:mm:ss Z YYYY"
UTC_PATTERN = "YYYY-MM-DD[T]HH:mm:ss.SSS[Z]"

DATE_FORMAT_OPTIONS = (
    "dddd, MMM D, YYYY",
    "L",
    "YYYY-MM-DD",
    "MM-DD-YYYY HH:mm",
    "MMM D, h:mm A",
    "MMMM YYYY",
)

# (label, unit) in decreasing size
TIME_UNITS = (
    ("yr", "years"),
    ("mo", "months"),
    ("d", "days"),
    ("hr", "hours"),
    ("min", "minutes"),
    ("sec", "seconds"),
)

_EPOCH = _datetime.datetime(1970, 1, 1, tzinfo=_datetime.timezone.utc)
_US_PER_SECOND = 1_000_000
_US_PER_MINUTE = 60 * _US_PER_SECOND
_US_PER_HOUR = 60 * _US_PER_MINUTE
_US_PER_DAY = 24 * _US_PER_HOUR


def resolve_timezone(tz: TzLike = None) -> Timezone | FixedTimezone:
    """Return a pendulum timezone, defaulting to the local one."""
    if tz is None:
        return pendulum.local_timezone()
    if isinstance(tz, str):
        try:
            return pendulum.timezone(tz)
        except (KeyError, ValueError) as e:
            raise InvalidArgumentError(
                "unknown timezone",
                f"cannot load timezone {tz!r}",
                wrapped=e,
            ) from e
    return tz


def coerce_format(fmt: InputFormat | str) -> InputFormat:
    try:
        return InputFormat(fmt)
    except ValueError as e:
        raise UnsupportedFormatError(
            ERR_MSG_UNSUPPORTED_FORMAT,
            f"unknown input format {fmt!r}",
            wrapped=e,
        ) from e


def from_epoch_milliseconds(ms: int, tz: TzLike = None) -> pendulum.DateTime:
    """Instant ``ms`` milliseconds after the unix epoch, expressed in ``tz``."""
    zone = resolve_timezone(tz)
    try:
        utc = _EPOCH + _datetime.timedelta(milliseconds=ms)
        return pendulum.instance(utc).in_timezone(zone)
    except (OverflowError, ValueError) as e:
        raise InvalidTimestampError(
            ERR_MSG_INVALID_TIMESTAMP,
            f"{ms} ms since epoch is out of range",
            wrapped=e,
        ) from e


def epoch_microseconds(instant: _datetime.datetime) -> int:
    """Exact microseconds since the unix epoch."""
    seconds = calendar.timegm(instant.utctimetuple())
    return seconds * _US_PER_SECOND + instant.microsecond


def epoch_milliseconds(instant: _datetime.datetime) -> int:
    return epoch_microseconds(instant) // 1000


def epoch_seconds(instant: _datetime.datetime) -> int:
    return epoch_microseconds(instant) // _US_PER_SECOND


def parse_time(
    text: str, fmt: InputFormat | str, *, tz: TzLike = None
) -> pendulum.DateTime:
    """Parse ``text`` according to ``fmt`` into an instant.

    ``unix`` and ``ms`` input may be an arithmetic expression such as
    ``1704067200 + 60*60``. ISO-8601 text without an offset is read in ``tz``.

    Returns:
        The instant expressed in ``tz`` (the local timezone by default).

    Raises:
        ParseError: If the text cannot be parsed.
        UnsupportedFormatError: If ``fmt`` is unknown.
    """
    fmt = coerce_format(fmt)
    zone = resolve_timezone(tz)

    if fmt is InputFormat.UNIX:
        return from_epoch_milliseconds(_expression_milliseconds(text, 1000), zone)
    if fmt is InputFormat.MS:
        return from_epoch_milliseconds(_expression_milliseconds(text, 1), zone)
    return _parse_iso(text, zone)


def _expression_milliseconds(text: str, scale: int) -> int:
    value = evaluate_expression(text) * scale
    try:
        return int(value)
    except (OverflowError, ValueError) as e:
        raise InvalidTimestampError(
            ERR_MSG_INVALID_TIMESTAMP,
            f"{text!r} scaled by {scale} is not a finite millisecond count",
            wrapped=e,
        ) from e


def _parse_iso(text: str, zone: Timezone | FixedTimezone) -> pendulum.DateTime:
    try:
        parsed = pendulum.parse(text, tz=zone, strict=True, exact=True)
    except (ValueError, OverflowError) as e:
        raise InvalidTimestampError(
            ERR_MSG_INVALID_TIMESTAMP,
            f"cannot parse {text!r} as ISO-8601",
            wrapped=e,
        ) from e

    if isinstance(parsed, _datetime.datetime):
        instant = pendulum.instance(parsed, tz=zone)
    elif isinstance(parsed, _datetime.date):
        instant = pendulum.datetime(parsed.year, parsed.month, parsed.day, tz=zone)
    else:
        raise InvalidTimestampError(
            ERR_MSG_INVALID_TIMESTAMP,
            f"{text!r} is a {type(parsed).__name__}, not a date-time",
        )

    try:
        return instant.in_timezone(zone)
    except (OverflowError, ValueError) as e:
        raise InvalidTimestampError(
            ERR_MSG_INVALID_TIMESTAMP,
            f"{text!r} is out of range in {zone.name}",
            wrapped=e,
        ) from e


def format_time(instant: _datetime.datetime, fmt: InputFormat | str) -> str:
    """Render ``instant`` as an input format or a moment-style pattern.

    ``unix``, ``ms`` and ``iso`` produce the canonical input text for that
    format. Any other string is used as a pendulum format pattern.
    """
    instant = pendulum.instance(instant)
    if fmt == InputFormat.UNIX:
        return str(epoch_seconds(instant))
    if fmt == InputFormat.MS:
        return str(epoch_milliseconds(instant))
    if fmt == InputFormat.ISO:
        return instant.format(ISO_PATTERN)
    return instant.format(fmt)


def time_difference(
    earlier: pendulum.DateTime, later: pendulum.DateTime
) -> dict[str, int]:
    """Break ``later - earlier`` into calendar years, months, days and time.

    Each unit is the largest whole count that fits after the larger units
    have been taken, so months never exceed 11 and days never exceed the
    length of the month reached.
    """
    years = later.year - earlier.year
    months = later.month - earlier.month
    if months < 0:
        years -= 1
        months += 12

    cursor = earlier.add(years=years).add(months=months)
    if cursor > later:
        # Day of month (or time of day) not reached yet
        years, months = divmod(years * 12 + months - 1, 12)
        cursor = earlier.add(years=years).add(months=months)

    remaining = epoch_microseconds(later) - epoch_microseconds(cursor)
    days = remaining // _US_PER_DAY
    while cursor.add(days=days + 1) <= later:
        days += 1
    while days > 0 and cursor.add(days=days) > later:
        days -= 1
    cursor = cursor.add(days=days)

    remaining = epoch_microseconds(later) - epoch_microseconds(cursor)
    hours, remaining = divmod(remaining, _US_PER_HOUR)
    minutes, remaining = divmod(remaining, _US_PER_MINUTE)
    seconds = remaining // _US_PER_SECOND

    return {
        "years": years,
        "months": months,
        "days": days,
        "hours": hours,
        "minutes": minutes,
        "seconds": seconds,
    }


def relative_time(
    instant: _datetime.datetime, now: _datetime.datetime | None = None
) -> str:
    """Exact relative time such as ``1yr 2mo 3d ago`` or ``5min from now``."""
    instant = pendulum.instance(instant)
    now = pendulum.now() if now is None else pendulum.instance(now)
    if instant.timezone is not None:
        now = now.in_timezone(instant.timezone)

    is_past = instant < now
    earlier, later = (instant, now) if is_past else (now, instant)
    differences = time_difference(earlier, later)

    parts = [
        f"{differences[unit]}{label}"
        for label, unit in TIME_UNITS
        if differences[unit] > 0
    ]
    if not parts:
        parts.append("0sec")
    return f"{' '.join(parts)} {'ago' if is_past else 'from now'}"


@dataclass(frozen=True)
class TimeDisplay:
    """Derived read-only fields shown for one instant."""

    local: str = EMPTY_DISPLAY
    utc: str = EMPTY_DISPLAY
    relative: str = EMPTY_DISPLAY
    unix: str = EMPTY_DISPLAY
    day_of_year: str = EMPTY_DISPLAY
    week_of_year: str = EMPTY_DISPLAY
    leap_year: str = EMPTY_DISPLAY
    other_formats: tuple[str, ...] = (EMPTY_DISPLAY,) * len(DATE_FORMAT_OPTIONS)


def describe_instant(
    instant: _datetime.datetime | None, now: _datetime.datetime | None = None
) -> TimeDisplay:
    """Compute every display field for ``instant``, or placeholders for None."""
    if instant is None:
        return TimeDisplay()
    instant = pendulum.instance(instant)
    return TimeDisplay(
        local=instant.format(LOCAL_PATTERN),
        utc=instant.in_timezone("UTC").format(UTC_PATTERN),
        relative=relative_time(instant, now),
        unix=str(epoch_seconds(instant)),
        day_of_year=str(instant.day_of_year),
        week_of_year=str(instant.week_of_year),
        leap_year=str(instant.is_leap_year()).lower(),
        other_formats=tuple(instant.format(pattern) for pattern in DATE_FORMAT_OPTIONS),
    )
