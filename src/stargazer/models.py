"""Data model definitions — explicit boundaries between query, compute, and render layers."""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Literal

Season = Literal["winter", "spring", "summer", "fall"]
Hemisphere = Literal["north", "south", "both"]


@dataclass(frozen=True)
class ObserverLocation:
    """Where the sky is seen from. Not range-checked here."""

    latitude: float  # Decimal degrees, north positive
    longitude: float  # Decimal degrees, east positive
    label: str | None = None  # Display name when resolved from text


@dataclass(frozen=True)
class MoonPhaseResult:
    """Moon phase for one instant."""

    phase: float  # Fraction of the synodic month, [0, 1); 0 = new, 0.5 = full
    illumination: float  # Illuminated fraction of the disc, [0, 1]
    name: str  # One of the 8 named phases
    emoji: str
    age_days: float  # Days since the last new moon


@dataclass(frozen=True)
class ConstellationCatalogEntry:
    """Static reference data for one constellation."""

    name: str
    abbreviation: str  # IAU abbreviation ("Ori", "UMa", etc.)
    ra_hours: float  # Approximate right ascension of the figure's centre
    season: Season | None  # None for circumpolar entries
    hemisphere: Hemisphere
    stars: tuple[tuple[float, float], ...] = ()  # Star-map pixel coordinates
    lines: tuple[tuple[int, int], ...] = ()  # Index pairs into `stars`


@dataclass(frozen=True)
class VisiblePlanetResult:
    """Heuristic sky position of a naked-eye planet."""

    name: str
    description: str  # Where to look ("Rising in the east", ...)
    magnitude: float  # Apparent magnitude, lower = brighter
    is_visible: bool


@dataclass(frozen=True)
class StarMapQuery:
    """Validated request. Input to build_star_map()."""

    date: date  # Calendar date as given by the user
    when: datetime  # Observer local time if a time was given, else 00:00 UTC
    location: ObserverLocation
    moon_light_color: str  # "#RRGGBB"
    location_text: str | None = None  # Sanitized free-text location
    include_hidden_planets: bool = False


@dataclass(frozen=True)
class StarMapResponse:
    """Everything a caller needs to draw the night sky for one date."""

    date: str  # "YYYY-MM-DD"
    formatted_date: str  # "January 6th, 2000"
    location: str | None
    moon: MoonPhaseResult
    moon_svg: str
    next_new_moon: datetime
    next_full_moon: datetime
    constellations: tuple[str, ...]
    planets: tuple[VisiblePlanetResult, ...]
    star_map_svg: str

    def to_dict(self) -> dict[str, Any]:
        """Return the camelCase wire mapping."""
        payload: dict[str, Any] = {
            "date": self.date,
            "formattedDate": self.formatted_date,
            "moonPhase": {
                "name": self.moon.name,
                "illumination": round(self.moon.illumination * 100, 1),
                "emoji": self.moon.emoji,
                "phase": self.moon.phase,
                "svgPath": self.moon_svg,
                "nextNewMoon": self.next_new_moon.strftime("%Y-%m-%d"),
                "nextFullMoon": self.next_full_moon.strftime("%Y-%m-%d"),
            },
            "constellations": list(self.constellations),
            "planets": [
                {
                    "name": p.name,
                    "position": p.description,
                    "magnitude": p.magnitude,
                    "isVisible": p.is_visible,
                }
                for p in self.planets
            ],
            "starMapSvg": self.star_map_svg,
        }
        if self.location is not None:
            payload["location"] = self.location
        return payload
