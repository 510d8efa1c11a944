"""Star map renderer.

Draws a decorative 500x300 night sky: a date-seeded field of background
stars plus the stick figures of the requested constellations.

Coordinate system:
  x ∈ [0, 500], y ∈ [0, 300]  (SVG pixels, y grows downward)
  Stick figures are stored in these pixel coordinates in the constellation
  catalog and shifted as a whole by an hour-angle/latitude offset.

The background stars are not real star positions. They are reproducible
decoration: the same date always yields the same field.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable
from datetime import datetime

from stargazer.constellations import get_catalog_entry
from stargazer.renderers.svg import Circle, Line, Rect, SvgDocument, Text
from stargazer.timebase import date_number, julian_day

logger = logging.getLogger(__name__)

WIDTH = 500
HEIGHT = 300
BACKGROUND_STAR_COUNT = 200

_BG = "black"
_STAR_COLOR = "white"
_LINE_OPACITY = 0.5
_LABEL_OPACITY = 0.7
_LABEL_SIZE = 10

# Drawn for any name missing from the catalog (or with no stick figure)
_DEFAULT_STARS: tuple[tuple[float, float], ...] = (
    (100, 100),
    (120, 80),
    (140, 100),
    (120, 120),
)
_DEFAULT_LINES: tuple[tuple[int, int], ...] = ((0, 1), (1, 2), (2, 3), (3, 0))


def background_stars(when: datetime, count: int = BACKGROUND_STAR_COUNT) -> list[tuple[int, int]]:
    """Pixel positions of the decorative star field for the date of `when`."""
    seed_base = date_number(when, 31, 372)
    stars: list[tuple[int, int]] = []
    for i in range(count):
        seed = (seed_base * (i + 1)) % 997  # prime modulus spreads the field
        stars.append((seed % WIDTH, (seed * 13) % HEIGHT))
    return stars


def _background_star_radius(x: int, y: int) -> float:
    return 0.5 + ((x * y) % 3) * 0.5


def _background_star_opacity(radius: float) -> float:
    """Bigger stars are brighter."""
    return 0.3 + (radius / 2) * 0.7


def figure_offset(when: datetime, latitude: float) -> tuple[float, float]:
    """Shift applied to every stick figure, varying with time of day and latitude."""
    hour_angle = math.radians((julian_day(when) % 1) * 360)
    lat_factor = (90 - abs(latitude)) / 90
    x_offset = (math.sin(hour_angle) * 50 - 25) * lat_factor
    y_offset = (math.cos(hour_angle) * 30 - 15) * lat_factor
    return x_offset, y_offset


def _figure(name: str) -> tuple[tuple[tuple[float, float], ...], tuple[tuple[int, int], ...]]:
    entry = get_catalog_entry(name)
    if entry is None or not entry.stars:
        logger.debug("no stick figure for %r, using default shape", name)
        return _DEFAULT_STARS, _DEFAULT_LINES
    return entry.stars, entry.lines


def render_star_map_svg(
    constellation_names: Iterable[str],
    when: datetime,
    latitude: float,
    longitude: float,
) -> str:
    """Return an SVG star map with labelled constellation stick figures.

    Args:
        constellation_names: Names to draw, in drawing order.
        when: Instant of observation; seeds the star field and the offset.
        latitude: Observer latitude; damps the offset toward the poles.
        longitude: Observer longitude (the layout does not depend on it).

    Returns:
        Self-contained SVG markup, 500x300.

    Raises:
        ValueError: If latitude is NaN or infinite.
    """
    if not math.isfinite(latitude):
        raise ValueError(f"latitude must be finite, got {latitude!r}")

    doc = SvgDocument(WIDTH, HEIGHT)
    doc.add(Rect(width=WIDTH, height=HEIGHT, fill=_BG))

    # --- Background stars ---
    for x, y in background_stars(when):
        r = _background_star_radius(x, y)
        doc.add(
            Circle(cx=x, cy=y, r=r, fill=_STAR_COLOR, opacity=_background_star_opacity(r))
        )

    # --- Constellations ---
    dx, dy = figure_offset(when, latitude)
    for name in constellation_names:
        stars, lines = _figure(name)
        label_x, label_y = stars[0]
        doc.add(
            Text(
                x=label_x + dx,
                y=label_y + dy - 15,
                text=name,
                fill=_STAR_COLOR,
                opacity=_LABEL_OPACITY,
                font_size=_LABEL_SIZE,
            )
        )
        for start, end in lines:
            x1, y1 = stars[start]
            x2, y2 = stars[end]
            doc.add(
                Line(
                    x1=x1 + dx,
                    y1=y1 + dy,
                    x2=x2 + dx,
                    y2=y2 + dy,
                    stroke=_STAR_COLOR,
                    opacity=_LINE_OPACITY,
                    stroke_width=1,
                )
            )
        for i, (x, y) in enumerate(stars):
            doc.add(Circle(cx=x + dx, cy=y + dy, r=2 + (i % 3), fill=_STAR_COLOR))

    return doc.render()
