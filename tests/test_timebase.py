from datetime import date, datetime

import pytest
from pytz import timezone, utc

from stargazer.timebase import (
    J2000,
    date_number,
    julian_day,
    local_sidereal_time,
    normalize_degrees,
    sidereal_hours,
    to_utc,
)


def test_julian_day_at_j2000():
    assert julian_day(datetime(2000, 1, 1, 12)) == J2000


def test_julian_day_meeus_example():
    # Astronomical Algorithms, example 12.b
    assert julian_day(datetime(1987, 4, 10, 19, 21)) == pytest.approx(2446896.30625, abs=1e-6)


def test_julian_day_reads_aware_values_as_instants():
    ny = timezone("America/New_York")
    local = ny.localize(datetime(2000, 1, 1, 7))
    assert julian_day(local) == pytest.approx(J2000)


def test_to_utc():
    assert to_utc(datetime(2000, 1, 1)).tzinfo is utc
    tokyo = timezone("Asia/Tokyo").localize(datetime(2000, 1, 1, 9))
    assert to_utc(tokyo) == utc.localize(datetime(2000, 1, 1))


def test_greenwich_sidereal_time_meeus_example():
    # Astronomical Algorithms, example 12.a
    assert local_sidereal_time(datetime(1987, 4, 10), 0.0) == pytest.approx(197.693195, abs=1e-4)


def test_longitude_shifts_sidereal_time():
    when = datetime(1987, 4, 10)
    east = local_sidereal_time(when, 30.0)
    assert east == pytest.approx(227.693195, abs=1e-4)


def test_sidereal_time_is_bounded(sample_dates, observers):
    for when in sample_dates:
        for _, lng in observers:
            degrees = local_sidereal_time(when, lng)
            assert 0 <= degrees < 360
            assert 0 <= sidereal_hours(when, lng) < 24


@pytest.mark.parametrize(
    "angle, expected",
    [(0.0, 0.0), (360.0, 0.0), (720.5, 0.5), (-30.0, 330.0), (-1e-15, 0.0)],
)
def test_normalize_degrees(angle, expected):
    assert normalize_degrees(angle) == pytest.approx(expected)
    assert 0 <= normalize_degrees(angle) < 360


def test_date_number():
    assert date_number(date(2000, 1, 21), 100, 10000) == 20000021
    assert date_number(date(2000, 3, 5), 31, 0) == 67
    assert date_number(datetime(2000, 3, 5, 23), 31, 372) == 67 + 2000 * 372




def test_julian_day_is_monotonic(sample_dates):
    ordered = sorted(sample_dates)
    days = [julian_day(when) for when in ordered]
    assert all(a < b for a, b in zip(days, days[1:]))
    second = datetime(2000, 1, 1, 0, 0, 1)
    assert julian_day(datetime(2000, 1, 1)) < julian_day(second)
