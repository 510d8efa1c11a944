"""Moon phase engine — phase fraction, illumination, name, and emoji."""

import calendar
import math
from datetime import datetime, timedelta

from pytz import utc

from stargazer.models import MoonPhaseResult
from stargazer.timebase import julian_day, to_utc

SYNODIC_MONTH = 29.53059  # Mean synodic month in days
REFERENCE_NEW_MOON = 2451550.1  # JD of the new moon of 2000-01-06

# Upper bound (exclusive) of each named phase. Anything at or past the last
# bound wraps back to New Moon.
_PHASES: tuple[tuple[float, str, str], ...] = (
    (0.025, "New Moon", "🌑"),
    (0.225, "Waxing Crescent", "🌒"),
    (0.275, "First Quarter", "🌓"),
    (0.475, "Waxing Gibbous", "🌔"),
    (0.525, "Full Moon", "🌕"),
    (0.725, "Waning Gibbous", "🌖"),
    (0.775, "Last Quarter", "🌗"),
    (0.975, "Waning Crescent", "🌘"),
)

PHASE_NAMES: tuple[str, ...] = tuple(name for _, name, _ in _PHASES)

# Day offsets into the cycle that land inside each named phase, in order
_REFERENCE_DAYS = (0.0, 3.7, 7.4, 11.1, 14.8, 18.5, 22.1, 25.8)


def _wrap(phase: float) -> float:
    p = phase % 1.0
    return 0.0 if p >= 1.0 else p


def illumination_for(phase: float) -> float:
    """Half-cosine approximation: 0 at new moon, 1 at full moon."""
    return 0.5 * (1 - math.cos(2 * math.pi * phase))


def classify_phase(phase: float) -> tuple[str, str]:
    """Map a phase fraction to its (name, emoji). Input is wrapped into [0, 1)."""
    p = _wrap(phase)
    for upper, name, emoji in _PHASES:
        if p < upper:
            return name, emoji
    return _PHASES[0][1], _PHASES[0][2]


def _result(phase: float) -> MoonPhaseResult:
    name, emoji = classify_phase(phase)
    return MoonPhaseResult(
        phase=phase,
        illumination=illumination_for(phase),
        name=name,
        emoji=emoji,
        age_days=phase * SYNODIC_MONTH,
    )


def phase_fraction(when: datetime) -> float:
    """Fraction of the synodic month elapsed since the last mean new moon."""
    days = (julian_day(when) - REFERENCE_NEW_MOON) % SYNODIC_MONTH
    return _wrap(days / SYNODIC_MONTH)


def moon_phase(when: datetime) -> MoonPhaseResult:
    """Compute the moon phase for an instant.

    Args:
        when: Instant of observation. Naive values are read as UTC.

    Returns:
        MoonPhaseResult with phase in [0, 1) and illumination in [0, 1].
    """
    return _result(phase_fraction(when))


def moon_phase_for_day(day_of_cycle: float) -> MoonPhaseResult:
    """Moon phase for a day offset into the cycle (0 = new moon).

    Used for phase galleries; shares the boundaries and emoji of moon_phase().
    """
    return _result(_wrap((day_of_cycle % SYNODIC_MONTH) / SYNODIC_MONTH))


def reference_moon_phases() -> list[MoonPhaseResult]:
    """The eight named phases, new moon first, one per gallery slot."""
    return [moon_phase_for_day(day) for day in _REFERENCE_DAYS]


def moon_phases_for_month(year: int, month: int) -> list[MoonPhaseResult]:
    """One result per calendar day of the month, taken at 00:00 UTC."""
    _, days_in_month = calendar.monthrange(year, month)
    return [
        moon_phase(utc.localize(datetime(year, month, day)))
        for day in range(1, days_in_month + 1)
    ]


def next_moon_events(when: datetime) -> tuple[datetime, datetime]:
    """Next mean new moon and next mean full moon strictly after `when`.

    Returns:
        (next_new_moon, next_full_moon) as aware UTC datetimes.
    """
    start = to_utc(when)
    phase = phase_fraction(start)

    def _after(target: float) -> datetime:
        fraction = (target - phase) % 1.0 or 1.0
        return start + timedelta(days=fraction * SYNODIC_MONTH)

    return _after(0.0), _after(0.5)
