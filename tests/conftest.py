"""Shared test fixtures."""

import pendulum
import pytest

from pydevutils.base_state import BaseValues
from pydevutils.time_state import TimeState


@pytest.fixture
def empty_values():
    return BaseValues()


@pytest.fixture
def utc_state():
    return TimeState(tz="UTC")


@pytest.fixture
def new_year():
    """2024-01-01T00:00:00Z, unix 1704067200."""
    return pendulum.datetime(2024, 1, 1, tz="UTC")
