"""Planet visibility — orbital-phase heuristics for the five naked-eye planets.

A stand-in for real ephemeris data: each planet's position in its orbit is
reduced to a phase in [0, 1) since J2000, and fixed phase ranges decide where
it sits in the sky and whether it is up at all.
"""

from dataclasses import dataclass
from datetime import datetime

from stargazer.models import VisiblePlanetResult
from stargazer.timebase import J2000, date_number, julian_day

MIN_VISIBLE_PLANETS = 2

RISING = "Rising in the east"
HIGH_SOUTH = "High in the southern sky"
SETTING = "Setting in the west"
HIDDEN = "Below horizon (not visible)"
MERCURY_MORNING = "Low on eastern horizon before sunrise"
MERCURY_EVENING = "Low on western horizon after sunset"
MORNING_STAR = "Morning star (eastern horizon before sunrise)"
EVENING_STAR = "Evening star (western horizon after sunset)"


@dataclass(frozen=True)
class _Planet:
    name: str
    period_days: float
    brightest: float  # Magnitude at the brightest point of the cycle
    span: float  # brightest + span = dimmest


_PLANETS: tuple[_Planet, ...] = (
    _Planet("Mercury", 88, -1.9, 7.6),
    _Planet("Venus", 225, -4.6, 1.6),
    _Planet("Mars", 687, -2.9, 4.7),
    _Planet("Jupiter", 4333, -2.9, 0.9),
    _Planet("Saturn", 10759, -0.2, 1.4),
)

# Used only when fewer than MIN_VISIBLE_PLANETS survive the rules below.
_BACKUP: tuple[VisiblePlanetResult, ...] = (
    VisiblePlanetResult("Venus", EVENING_STAR, -4.0, True),
    VisiblePlanetResult("Jupiter", HIGH_SOUTH, -2.5, True),
)


def orbit_phase(jd: float, period_days: float) -> float:
    p = ((jd - J2000) % period_days) / period_days
    return 0.0 if p >= 1.0 else p


def _sky_position(name: str, phase: float) -> tuple[str, bool]:
    if name == "Mercury":
        if phase < 0.25 or phase > 0.75:
            return MERCURY_MORNING, phase > 0.8 or phase < 0.2
        return MERCURY_EVENING, 0.3 < phase < 0.7
    if name == "Venus":
        if phase < 0.25 or phase > 0.75:
            return MORNING_STAR, True
        return EVENING_STAR, True
    if name == "Jupiter":
        if phase < 0.33:
            return RISING, True
        if phase < 0.66:
            return HIGH_SOUTH, True
        return SETTING, True
    # Mars and Saturn share quartile rules
    if phase < 0.25:
        return RISING, True
    if phase < 0.5:
        return HIGH_SOUTH, True
    if phase < 0.75:
        return SETTING, True
    return HIDDEN, False


def visible_planets(
    when: datetime,
    latitude: float,
    longitude: float,
    include_hidden: bool = False,
) -> list[VisiblePlanetResult]:
    """Approximate which planets can be seen on the date of `when`.

    Args:
        when: Instant of observation.
        latitude: Observer latitude (accepted for interface symmetry; the
            heuristic does not depend on it).
        longitude: Observer longitude (likewise unused).
        include_hidden: Also return planets judged not visible.

    Returns:
        Planets in Mercury→Saturn order, then any backup planets. At least
        two entries are always visible.
    """
    jd = julian_day(when)
    # Some dates hide everything but Jupiter, for variety
    dimmed = date_number(when, 31, 0) % 11 == 0

    planets: list[VisiblePlanetResult] = []
    for planet in _PLANETS:
        phase = orbit_phase(jd, planet.period_days)
        magnitude = planet.brightest + planet.span * abs(phase - 0.5) * 2
        description, is_visible = _sky_position(planet.name, phase)
        if dimmed and planet.name != "Jupiter":
            description, is_visible = HIDDEN, False
        planets.append(
            VisiblePlanetResult(
                name=planet.name,
                description=description,
                magnitude=magnitude,
                is_visible=is_visible,
            )
        )

    visible = [p for p in planets if p.is_visible]
    if len(visible) < MIN_VISIBLE_PLANETS:
        for backup in _BACKUP:
            if not any(p.name == backup.name for p in visible):
                visible.append(backup)
                if len(visible) >= MIN_VISIBLE_PLANETS:
                    break

    if not include_hidden:
        return visible
    shown = {p.name for p in visible}
    return visible + [p for p in planets if p.name not in shown]
