import xml.etree.ElementTree as ET
from datetime import datetime

import pytest

from stargazer.constellations import CATALOG
from stargazer.renderers.starmap_svg import (
    BACKGROUND_STAR_COUNT,
    HEIGHT,
    WIDTH,
    background_stars,
    figure_offset,
    render_star_map_svg,
)

_NS = "{http://www.w3.org/2000/svg}"


def _count(svg: str, tag: str) -> int:
    return len(ET.fromstring(svg).findall(f"{_NS}{tag}"))


def test_background_field_is_reproducible():
    when = datetime(2000, 1, 1)
    stars = background_stars(when)
    assert len(stars) == BACKGROUND_STAR_COUNT
    assert stars == background_stars(when)
    assert stars != background_stars(datetime(2000, 1, 2))
    assert all(0 <= x < WIDTH and 0 <= y < HEIGHT for x, y in stars)


def test_offset_vanishes_at_the_pole():
    assert figure_offset(datetime(2000, 1, 1), 90.0) == pytest.approx((0.0, 0.0))
    assert figure_offset(datetime(2000, 1, 1), -90.0) == pytest.approx((0.0, 0.0))


def test_offset_is_bounded(sample_dates):
    for when in sample_dates:
        dx, dy = figure_offset(when, 0.0)
        assert -75 <= dx <= 25
        assert -45 <= dy <= 15


def test_orion_at_the_pole():
    svg = render_star_map_svg(["Orion"], datetime(2000, 1, 1), 90.0, 0.0)
    assert svg.startswith('<svg width="500" height="300" viewBox="0 0 500 300"')
    assert '<circle cx="250" cy="110" r="2" fill="white"/>' in svg
    assert '<text x="250" y="95" fill="white" opacity="0.7" font-size="10">Orion</text>' in svg
    assert _count(svg, "rect") == 1
    assert _count(svg, "circle") == BACKGROUND_STAR_COUNT + 8
    assert _count(svg, "line") == 9
    assert _count(svg, "text") == 1


def test_unknown_name_uses_default_shape():
    svg = render_star_map_svg(["Nonesuch"], datetime(2000, 1, 1), 90.0, 0.0)
    assert '<text x="100" y="85" fill="white" opacity="0.7" font-size="10">Nonesuch</text>' in svg
    assert _count(svg, "line") == 4
    assert _count(svg, "circle") == BACKGROUND_STAR_COUNT + 4


def test_labels_are_escaped():
    svg = render_star_map_svg(["<b>&"], datetime(2000, 1, 1), 40.0, 0.0)
    assert "&lt;b&gt;&amp;" in svg
    ET.fromstring(svg)


def test_every_catalog_entry_renders():
    names = [e.name for e in CATALOG]
    svg = render_star_map_svg(names, datetime(2023, 8, 12, 22), 40.7, -74.0)
    assert _count(svg, "text") == len(names)
    assert '"nan"' not in svg


def test_rendering_is_deterministic(new_york):
    when = datetime(2000, 1, 21, 5)
    first = render_star_map_svg(["Orion", "Cassiopeia"], when, *new_york)
    assert first == render_star_map_svg(["Orion", "Cassiopeia"], when, *new_york)


def test_rejects_non_finite_latitude():
    with pytest.raises(ValueError):
        render_star_map_svg(["Orion"], datetime(2000, 1, 1), float("nan"), 0.0)
