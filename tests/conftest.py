"""Pytest configuration and shared fixtures."""

from datetime import date, datetime

import pytest

from calrange.config import reset_picker_config
from calrange.selection import DateBounds


@pytest.fixture(autouse=True)
def reset_picker_config_for_all_tests():
    """Reset the picker config before and after each test for isolation.

    The config is a module-level singleton that persists across tests.
    This fixture ensures each test starts with default settings.
    """
    reset_picker_config()
    yield
    reset_picker_config()


@pytest.fixture
def bounds():
    """Selectable universe spanning 2020 through 2022."""
    return DateBounds(date(2020, 1, 1), date(2022, 12, 31))


@pytest.fixture
def fixed_clock():
    """Clock frozen at 2020-06-15 10:00 local time."""
    return lambda: datetime(2020, 6, 15, 10, 0)


class FakeTimer:
    """Stand-in for threading.Timer that never runs on its own."""

    def __init__(self, interval, function):
        self.interval = interval
        self.function = function
        self.daemon = False
        self.started = False
        self.cancelled = False

    def start(self):
        self.started = True

    def cancel(self):
        self.cancelled = True


@pytest.fixture
def timers():
    """Timer factory that records every timer it creates."""
    created = []

    def factory(interval, function):
        timer = FakeTimer(interval, function)
        created.append(timer)
        return timer

    factory.created = created
    return factory
