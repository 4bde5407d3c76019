"""Public API tests."""

import logging

import pendulum

import pydevutils
from pydevutils import (
    BaseValues,
    FieldKey,
    apply_edit,
    convert,
    format_time,
    parse_time,
    relative_time,
    validate,
)


class TestPublicApi:
    def test_exports(self):
        for name in pydevutils.__all__:
            assert hasattr(pydevutils, name), name

    def test_version(self):
        assert isinstance(pydevutils.__version__, str)

    def test_validate_and_convert(self):
        assert validate("g", 16) is False
        assert convert("ff", 16, 2) == "11111111"

    def test_base_converter_flow(self):
        state = apply_edit(BaseValues(), FieldKey.DECIMAL, "255")
        state = apply_edit(state, FieldKey.BINARY, "1010")
        assert state.decimal == "10"
        assert state.hexadecimal == "a"
        assert apply_edit(state, FieldKey.BINARY, "") == BaseValues()

    def test_time_converter_flow(self):
        instant = parse_time("1704067200", "unix", tz="UTC")
        assert instant == pendulum.datetime(2024, 1, 1, tz="UTC")
        assert format_time(instant, "ms") == "1704067200000"
        now = instant.add(years=1, months=2, days=3)
        assert relative_time(instant, now) == "1yr 2mo 3d ago"

    def test_library_does_not_configure_logging(self):
        handlers = logging.getLogger("pydevutils").handlers
        assert all(isinstance(h, logging.NullHandler) for h in handlers)
