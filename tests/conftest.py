"""
Shared pytest fixtures.
"""

from datetime import datetime, timedelta

import httpx
import pytest

from stargazer.config import Settings


@pytest.fixture(autouse=True)
def no_network(monkeypatch):
    """Fail loudly if anything reaches for the network."""

    def _blocked(*args, **kwargs):
        raise AssertionError("network access attempted in tests")

    monkeypatch.setattr(httpx, "get", _blocked)


@pytest.fixture
def settings():
    """Defaults with the geocoder switched off."""
    return Settings(geocode_enabled=False)


@pytest.fixture
def new_york():
    return 40.7128, -74.0060


@pytest.fixture
def sydney():
    return -33.8688, 151.2093


@pytest.fixture
def sample_dates():
    """Every ninth day across three years, plus a few awkward ones."""
    start = datetime(2023, 1, 1, 21, 0)
    dates = [start + timedelta(days=9 * i) for i in range(122)]
    dates += [
        datetime(1900, 1, 1),
        datetime(1969, 7, 20, 20, 17),
        datetime(1999, 12, 31, 23, 59, 59),
        datetime(2000, 2, 29),
        datetime(2100, 12, 21, 6, 30),
    ]
    return dates


@pytest.fixture
def observers(new_york, sydney):
    return [new_york, sydney, (0.0, 0.0), (64.1, -21.9), (-77.8, 166.7), (89.9, 180.0)]
