"""Input state machine for the unix time converter."""

from __future__ import annotations

import datetime as _datetime
import enum
import logging
import re
from dataclasses import dataclass, replace

import pendulum

from pydevutils._errors import ERR_MSG_INVALID_INPUT, ParseError
from pydevutils._utils import ISO_INPUT_RE, NUMERIC_INPUT_RE
from pydevutils.timeconv import (
    InputFormat,
    TimeDisplay,
    TzLike,
    coerce_format,
    describe_instant,
    format_time,
    parse_time,
    resolve_timezone,
)

logger = logging.getLogger(__name__)


class TimeStatus(enum.StrEnum):
    EMPTY = "empty"
    VALID = "valid"
    INVALID = "invalid"


FORMAT_LABELS: dict[InputFormat, str] = {
    InputFormat.UNIX: "Unix time (seconds since epoch)",
    InputFormat.MS: "Milliseconds since epoch",
    InputFormat.ISO: "ISO 8601",
}

FORMAT_PLACEHOLDERS: dict[InputFormat, str] = {
    InputFormat.ISO: "2024-01-01T00:00:00.000+07:00",
    InputFormat.MS: "1704067200000",
    InputFormat.UNIX: "1704067200",
}

FORMAT_HINTS: dict[InputFormat, str] = {
    InputFormat.ISO: "Format: YYYY-MM-DDTHH:mm:ss.SSS±HH:mm",
    InputFormat.MS: "Tips: Mathematical operators + - * / are supported",
    InputFormat.UNIX: "Tips: Mathematical operators + - * / are supported",
}


def input_filter(fmt: InputFormat | str) -> re.Pattern[str]:
    """Keystroke filter for the input box under ``fmt``."""
    if coerce_format(fmt) is InputFormat.ISO:
        return ISO_INPUT_RE
    return NUMERIC_INPUT_RE


@dataclass(frozen=True)
class TimeState:
    """Raw input, active format and the instant it resolves to."""

    raw: str = ""
    format: InputFormat = InputFormat.UNIX
    instant: pendulum.DateTime | None = None
    error: str | None = None
    tz: TzLike = None

    @property
    def status(self) -> TimeStatus:
        if self.instant is not None:
            return TimeStatus.VALID
        if self.raw:
            return TimeStatus.INVALID
        return TimeStatus.EMPTY

    @property
    def placeholder(self) -> str:
        return FORMAT_PLACEHOLDERS[self.format]

    @property
    def hint(self) -> str:
        return FORMAT_HINTS[self.format]

    def describe(self, now: _datetime.datetime | None = None) -> TimeDisplay:
        return describe_instant(self.instant, now)


def _resolve(state: TimeState, raw: str) -> TimeState:
    if not raw:
        return replace(state, raw=raw, instant=None, error=None)
    try:
        instant = parse_time(raw, state.format, tz=state.tz)
    except ParseError as e:
        logger.debug("invalid %s input %r: %s", state.format, raw, e.internal())
        return replace(state, raw=raw, instant=None, error=ERR_MSG_INVALID_INPUT)
    return replace(state, raw=raw, instant=instant, error=None)


def apply_input(state: TimeState, text: str) -> TimeState:
    """Apply a change of the input text.

    Text containing characters outside the active format's keystroke
    filter is rejected and ``state`` is returned unchanged.
    """
    if text and not input_filter(state.format).fullmatch(text):
        logger.debug("rejected keystroke for %s input: %r", state.format, text)
        return state
    return _resolve(state, text)


def change_format(state: TimeState, fmt: InputFormat | str) -> TimeState:
    """Switch the input format, re-rendering the current instant.

    The instant is kept. Without an instant the input is cleared.
    """
    fmt = coerce_format(fmt)
    if state.instant is None:
        return replace(state, format=fmt, raw="", instant=None, error=None)
    return replace(state, format=fmt, raw=format_time(state.instant, fmt), error=None)


def press_now(state: TimeState, now: _datetime.datetime | None = None) -> TimeState:
    """Write the current instant into the input as if it had been typed."""
    zone = resolve_timezone(state.tz)
    now = pendulum.now(zone) if now is None else pendulum.instance(now).in_timezone(zone)
    return apply_input(state, format_time(now, state.format))
