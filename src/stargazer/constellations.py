"""Constellation visibility — season, hemisphere, and sidereal time heuristics.

This is a seasonal approximation, not a horizon-altitude computation: a
constellation counts as "up" when its right ascension is within six hours of
the local sidereal time, and one or two circumpolar figures are always added.
"""

import logging
from datetime import datetime

from stargazer.models import ConstellationCatalogEntry, Hemisphere, Season
from stargazer.timebase import date_number, sidereal_hours

logger = logging.getLogger(__name__)

MAX_CONSTELLATIONS = 5
MIN_CONSTELLATIONS = 4
_RA_WINDOW_HOURS = 6.0

_E = ConstellationCatalogEntry

# Seasonal entries, then circumpolar entries (season=None). Order matters:
# it is the tie-break order for equal RA distance and the index order for
# circumpolar picks. Star coordinates are pixels on the 500x300 star map.
CATALOG: tuple[ConstellationCatalogEntry, ...] = (
    # --- winter ---
    _E(
        "Orion", "Ori", 5.5, "winter", "both",
        stars=((250, 110), (270, 100), (290, 120), (260, 150), (230, 150), (220, 120), (240, 130), (270, 70)),
        lines=((0, 1), (1, 2), (2, 3), (3, 4), (4, 5), (5, 0), (6, 0), (6, 3), (1, 7)),
    ),
    _E(
        "Canis Major", "CMa", 7.0, "winter", "both",
        stars=((330, 200), (340, 220), (320, 230), (310, 210), (350, 240)),
        lines=((0, 1), (1, 4), (0, 2), (0, 3)),
    ),
    _E("Canis Minor", "CMi", 8.0, "winter", "both"),
    _E(
        "Gemini", "Gem", 7.0, "winter", "north",
        stars=((140, 130), (160, 120), (180, 110), (200, 120), (220, 130), (170, 150), (190, 160)),
        lines=((0, 1), (1, 2), (2, 3), (3, 4), (0, 5), (4, 6)),
    ),
    _E(
        "Taurus", "Tau", 4.5, "winter", "north",
        stars=((130, 170), (150, 160), (170, 150), (190, 160), (155, 175), (175, 185)),
        lines=((0, 1), (1, 2), (2, 3), (1, 4), (2, 5)),
    ),
    _E("Auriga", "Aur", 6.0, "winter", "north"),
    _E("Perseus", "Per", 3.0, "winter", "north"),
    _E("Eridanus", "Eri", 3.5, "winter", "both"),
    _E("Lepus", "Lep", 6.0, "winter", "both"),
    # --- spring ---
    _E(
        "Leo", "Leo", 11.0, "spring", "both",
        stars=((120, 150), (150, 130), (180, 120), (200, 140), (170, 160), (140, 170), (170, 190)),
        lines=((0, 1), (1, 2), (2, 3), (3, 4), (4, 5), (5, 0), (4, 6)),
    ),
    _E("Virgo", "Vir", 13.0, "spring", "both"),
    _E(
        "Ursa Major", "UMa", 11.0, "spring", "north",
        stars=((150, 80), (180, 70), (210, 60), (240, 50), (250, 80), (220, 100), (190, 110)),
        lines=((0, 1), (1, 2), (2, 3), (3, 4), (4, 5), (5, 6), (6, 0)),
    ),
    _E("Bootes", "Boo", 15.0, "spring", "north"),
    _E("Corona Borealis", "CrB", 16.0, "spring", "north"),
    _E("Canes Venatici", "CVn", 13.0, "spring", "north"),
    _E("Coma Berenices", "Com", 13.0, "spring", "north"),
    _E("Hydra", "Hya", 12.0, "spring", "both"),
    # --- summer ---
    _E(
        "Cygnus", "Cyg", 20.5, "summer", "north",
        stars=((230, 50), (240, 70), (250, 90), (260, 110), (270, 130), (220, 90), (280, 90)),
        lines=((0, 1), (1, 2), (2, 3), (3, 4), (2, 5), (2, 6)),
    ),
    _E(
        "Lyra", "Lyr", 19.0, "summer", "north",
        stars=((310, 90), (330, 100), (320, 120), (300, 110), (290, 100)),
        lines=((0, 1), (1, 2), (2, 3), (3, 4), (4, 0)),
    ),
    _E("Aquila", "Aql", 20.0, "summer", "both"),
    _E("Hercules", "Her", 17.0, "summer", "north"),
    _E(
        "Scorpius", "Sco", 17.0, "summer", "both",
        stars=((350, 170), (360, 190), (370, 210), (380, 230), (390, 250), (410, 260), (400, 240), (420, 230), (430, 210)),
        lines=((0, 1), (1, 2), (2, 3), (3, 4), (4, 5), (4, 6), (6, 7), (7, 8)),
    ),
    _E("Sagittarius", "Sgr", 19.0, "summer", "both"),
    _E("Ophiuchus", "Oph", 17.5, "summer", "both"),
    _E("Libra", "Lib", 15.5, "summer", "both"),
    # --- fall ---
    _E("Pegasus", "Peg", 22.0, "fall", "north"),
    _E("Andromeda", "And", 1.0, "fall", "north"),
    _E("Pisces", "Psc", 1.0, "fall", "both"),
    _E("Aquarius", "Aqr", 23.0, "fall", "both"),
    _E("Capricornus", "Cap", 21.0, "fall", "both"),
    _E("Cetus", "Cet", 2.0, "fall", "both"),
    _E("Phoenix", "Phe", 1.0, "fall", "south"),
    _E("Grus", "Gru", 22.5, "fall", "south"),
    # --- circumpolar, north ---
    _E(
        "Ursa Minor", "UMi", 15.0, None, "north",
        stars=((100, 50), (120, 40), (140, 30), (160, 20), (158, 40), (138, 50), (118, 60)),
        lines=((0, 1), (1, 2), (2, 3), (3, 4), (4, 5), (5, 6), (6, 0)),
    ),
    _E(
        "Cassiopeia", "Cas", 1.0, None, "north",
        stars=((300, 50), (330, 40), (360, 50), (350, 80), (320, 70)),
        lines=((0, 1), (1, 2), (2, 3), (3, 4), (4, 0)),
    ),
    _E("Cepheus", "Cep", 22.0, None, "north"),
    _E("Draco", "Dra", 17.0, None, "north"),
    _E("Camelopardalis", "Cam", 6.0, None, "north"),
    # --- circumpolar, south ---
    _E(
        "Crux", "Cru", 12.5, None, "south",
        stars=((240, 250), (250, 230), (230, 230), (260, 270)),
        lines=((0, 1), (2, 0), (0, 3)),
    ),
    _E(
        "Centaurus", "Cen", 13.0, None, "south",
        stars=((280, 240), (300, 250), (320, 260), (290, 270), (270, 260), (260, 280)),
        lines=((0, 1), (1, 2), (1, 3), (3, 4), (4, 5)),
    ),
    _E("Carina", "Car", 8.5, None, "south"),
    _E("Octans", "Oct", 22.0, None, "south"),
    _E("Tucana", "Tuc", 0.0, None, "south"),
)

# Padding used when the seasonal window and circumpolar picks come up short.
COMMON_CONSTELLATIONS: tuple[str, ...] = (
    "Orion",
    "Ursa Major",
    "Cassiopeia",
    "Crux",
    "Scorpius",
)

_BY_NAME: dict[str, ConstellationCatalogEntry] = {e.name: e for e in CATALOG}

_INVERTED: dict[Season, Season] = {
    "winter": "summer",
    "summer": "winter",
    "spring": "fall",
    "fall": "spring",
}


def get_catalog_entry(name: str) -> ConstellationCatalogEntry | None:
    return _BY_NAME.get(name)


def circumpolar_for(hemisphere: Hemisphere) -> tuple[ConstellationCatalogEntry, ...]:
    return tuple(e for e in CATALOG if e.season is None and e.hemisphere == hemisphere)


def season_for(when: datetime, latitude: float) -> Season:
    """Astronomical season for the calendar date of `when`.

    Northern boundaries: Dec 21, Mar 20, Jun 21, Sep 23. Southern observers
    get the opposite season.
    """
    month, day = when.month, when.day
    if (month == 12 and day >= 21) or month < 3 or (month == 3 and day < 20):
        season: Season = "winter"
    elif month < 6 or (month == 6 and day < 21):
        season = "spring"
    elif month < 9 or (month == 9 and day < 23):
        season = "summer"
    else:
        season = "fall"
    return season if latitude >= 0 else _INVERTED[season]


def ra_distance(ra_hours: float, lst_hours: float) -> float:
    """Circular distance in hours, wrapping at 24h/0h."""
    diff = abs(ra_hours - lst_hours)
    if diff > 12:
        diff = 24 - diff
    return diff


def visible_constellations(
    when: datetime, latitude: float, longitude: float
) -> list[str]:
    """Names of the constellations worth looking for, at most five.

    Args:
        when: Instant of observation. Its calendar fields pick the season and
            the circumpolar variety; its UTC instant drives sidereal time.
        latitude: Observer latitude in degrees.
        longitude: Observer longitude in degrees.

    Returns:
        Seasonal constellations nearest the meridian first, then one or two
        circumpolar constellations. Four or five names in practice.
    """
    season = season_for(when, latitude)
    lst_hours = sidereal_hours(when, longitude)

    in_window = [
        e
        for e in CATALOG
        if e.season == season and ra_distance(e.ra_hours, lst_hours) < _RA_WINDOW_HOURS
    ]
    in_window.sort(key=lambda e: ra_distance(e.ra_hours, lst_hours))
    seasonal = [e.name for e in in_window[:MAX_CONSTELLATIONS]]

    circumpolar = circumpolar_for("north" if latitude >= 0 else "south")
    n = date_number(when, 100, 10000)
    picks = [circumpolar[n % len(circumpolar)].name]
    if len(seasonal) < MIN_CONSTELLATIONS:
        picks.append(circumpolar[(n + 2) % len(circumpolar)].name)

    # Circumpolar picks always survive the cap.
    names = seasonal[: MAX_CONSTELLATIONS - len(picks)] + picks

    if len(names) < MIN_CONSTELLATIONS:
        for name in COMMON_CONSTELLATIONS:
            if name not in names:
                names.append(name)
                if len(names) >= MAX_CONSTELLATIONS:
                    break

    logger.debug(
        "constellations: season=%s lst=%.2fh seasonal=%d picks=%s",
        season,
        lst_hours,
        len(seasonal),
        picks,
    )
    return names[:MAX_CONSTELLATIONS]
