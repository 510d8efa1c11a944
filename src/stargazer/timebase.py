"""Time base — Julian Day and Local Sidereal Time.

Every other computation in the package derives its notion of time from the
two functions here. Naive datetimes are read as UTC.
"""

from datetime import date, datetime

from pytz import utc

J2000 = 2451545.0  # JD of 2000-01-01 12:00 TT


def to_utc(when: datetime) -> datetime:
    """Return `when` as an aware UTC datetime (naive input is taken as UTC)."""
    if when.tzinfo is None:
        return utc.localize(when)
    return when.astimezone(utc)


def julian_day(when: datetime) -> float:
    """Gregorian calendar → Julian Day (Meeus, Astronomical Algorithms ch. 7).

    The astronomical day starts at noon, hence the -12 hour offset on the
    fractional part.

    Args:
        when: Instant to convert. Aware values are converted to UTC first.

    Returns:
        Julian Day as a float.
    """
    t = to_utc(when)
    a = (14 - t.month) // 12
    y = t.year + 4800 - a
    m = t.month + 12 * a - 3

    jd = t.day + (153 * m + 2) // 5 + 365 * y + y // 4
    jd = jd - y // 100 + y // 400 - 32045

    seconds = t.second + t.microsecond / 1_000_000
    return jd + (t.hour - 12) / 24 + t.minute / 1440 + seconds / 86400


def normalize_degrees(angle: float) -> float:
    """Floored modulo into [0, 360)."""
    r = angle % 360.0
    # -1e-15 % 360.0 == 360.0 in IEEE arithmetic
    return 0.0 if r >= 360.0 else r


def local_sidereal_time(when: datetime, longitude: float) -> float:
    """Local Sidereal Time in degrees, [0, 360).

    Args:
        when: Instant of observation.
        longitude: Observer longitude in degrees, east positive.

    Returns:
        The right ascension currently on the observer's meridian, in degrees.
    """
    jd = julian_day(when)
    d = jd - J2000
    t = d / 36525  # Julian centuries since J2000.0

    gst = 280.46061837 + 360.98564736629 * d + 0.000387933 * t * t - t * t * t / 38710000
    return normalize_degrees(normalize_degrees(gst) + longitude)


def sidereal_hours(when: datetime, longitude: float) -> float:
    return local_sidereal_time(when, longitude) / 15


def date_number(day: date, month_weight: int, year_weight: int) -> int:
    """Deterministic integer hash of a calendar date.

    ``day + (month - 1) * month_weight + year * year_weight``. Used wherever
    the sky picks "variety" so the same date always draws the same sky.
    """
    return day.day + (day.month - 1) * month_weight + day.year * year_weight
