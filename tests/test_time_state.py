"""Time converter input state machine tests."""

import pendulum
import pytest

from pydevutils import (
    InputFormat,
    TimeState,
    TimeStatus,
    apply_input,
    change_format,
    describe,
    press_now,
)
from pydevutils._errors import UnsupportedFormatError
from pydevutils._utils import ISO_INPUT_RE, NUMERIC_INPUT_RE
from pydevutils.time_state import FORMAT_HINTS, FORMAT_LABELS, input_filter


class TestStatus:
    def test_initial_state_is_empty(self, utc_state):
        assert utc_state.status is TimeStatus.EMPTY
        assert utc_state.format is InputFormat.UNIX
        assert utc_state.error is None

    def test_valid(self, utc_state, new_year):
        state = apply_input(utc_state, "1704067200")
        assert state.status is TimeStatus.VALID
        assert state.instant == new_year
        assert state.error is None

    def test_invalid(self, utc_state):
        state = apply_input(utc_state, "1 +")
        assert state.status is TimeStatus.INVALID
        assert state.instant is None
        assert state.error == "Invalid input"
        assert state.raw == "1 +"

    def test_division_by_zero_is_invalid(self, utc_state):
        assert apply_input(utc_state, "1/0").status is TimeStatus.INVALID

    def test_back_to_empty(self, utc_state):
        state = apply_input(apply_input(utc_state, "1 +"), "")
        assert state.status is TimeStatus.EMPTY
        assert state.error is None

    def test_invalid_to_valid(self, utc_state):
        state = apply_input(apply_input(utc_state, "1 +"), "1 + 1")
        assert state.status is TimeStatus.VALID


class TestKeystrokeFilter:
    def test_letters_rejected_for_numeric_formats(self, utc_state):
        state = apply_input(utc_state, "17040")
        assert apply_input(state, "17040a") is state

    def test_iso_characters_rejected_for_unix(self, utc_state):
        assert apply_input(utc_state, "2024-01-01T") is utc_state

    def test_arithmetic_characters_accepted(self, utc_state):
        state = apply_input(utc_state, "(1 + 2) * 3 / 4 - 5.5")
        assert state.raw == "(1 + 2) * 3 / 4 - 5.5"

    def test_space_rejected_for_iso(self, utc_state):
        state = change_format(utc_state, "iso")
        assert apply_input(state, "2024-01-01 00:00") is state

    def test_iso_accepts_offset(self, utc_state, new_year):
        state = change_format(utc_state, InputFormat.ISO)
        state = apply_input(state, "2024-01-01T07:00:00.000+07:00")
        assert state.instant == new_year

    def test_filter_per_format(self):
        assert input_filter("unix") is NUMERIC_INPUT_RE
        assert input_filter(InputFormat.MS) is NUMERIC_INPUT_RE
        assert input_filter("iso") is ISO_INPUT_RE


class TestChangeFormat:
    def test_rerenders_instant(self, utc_state, new_year):
        state = apply_input(utc_state, "1704067200")
        state = change_format(state, "ms")
        assert state.format is InputFormat.MS
        assert state.raw == "1704067200000"
        assert state.instant == new_year

    def test_to_iso(self, utc_state):
        state = change_format(apply_input(utc_state, "1704067200"), "iso")
        assert state.raw == "2024-01-01T00:00:00.000+00:00"

    def test_from_iso_to_unix(self, utc_state, new_year):
        state = change_format(utc_state, "iso")
        state = apply_input(state, "2024-01-01T00:00:00Z")
        state = change_format(state, "unix")
        assert state.raw == "1704067200"
        assert state.instant == new_year

    def test_keeps_sub_second_instant(self, utc_state):
        state = apply_input(change_format(utc_state, "ms"), "1704067200123")
        state = change_format(state, "unix")
        assert state.raw == "1704067200"
        assert state.instant.microsecond == 123000

    def test_clears_without_instant(self, utc_state):
        state = change_format(apply_input(utc_state, "1 +"), "iso")
        assert state.raw == ""
        assert state.status is TimeStatus.EMPTY
        assert state.error is None

    def test_placeholder_and_hint_follow_format(self, utc_state):
        state = change_format(utc_state, "iso")
        assert state.placeholder == "2024-01-01T00:00:00.000+07:00"
        assert state.hint.startswith("Format:")
        assert change_format(state, "ms").placeholder == "1704067200000"

    def test_unknown_format(self, utc_state):
        with pytest.raises(UnsupportedFormatError):
            change_format(utc_state, "rfc2822")

    def test_labels_cover_every_format(self):
        assert set(FORMAT_LABELS) == set(InputFormat)
        assert set(FORMAT_HINTS) == set(InputFormat)


class TestPressNow:
    def test_unix(self, utc_state, new_year):
        state = press_now(utc_state, now=new_year.add(microseconds=250000))
        assert state.raw == "1704067200"
        assert state.instant == new_year

    def test_iso(self, utc_state, new_year):
        state = press_now(change_format(utc_state, "iso"), now=new_year)
        assert state.raw == "2024-01-01T00:00:00.000+00:00"
        assert state.status is TimeStatus.VALID

    def test_uses_state_timezone(self, new_year):
        state = TimeState(format=InputFormat.ISO, tz="Asia/Jakarta")
        assert press_now(state, now=new_year).raw == "2024-01-01T07:00:00.000+07:00"

    def test_current_time(self, utc_state):
        before = pendulum.now("UTC").subtract(seconds=1)
        state = press_now(utc_state)
        assert state.instant >= before.start_of("second")


class TestDescribe:
    def test_empty_state(self, utc_state):
        assert describe(utc_state).utc == "-"

    def test_invalid_state(self, utc_state):
        assert describe(apply_input(utc_state, "1 +")).unix == "-"

    def test_valid_state(self, utc_state, new_year):
        state = apply_input(utc_state, "1704067200")
        display = describe(state, now=new_year.add(years=1, months=2, days=3))
        assert display.relative == "1yr 2mo 3d ago"
        assert display.utc == "2024-01-01T00:00:00.000Z"

    def test_instant_source(self, new_year):
        assert describe(new_year, now=new_year).unix == "1704067200"
