import xml.etree.ElementTree as ET

import pytest

from stargazer.renderers.moon_svg import render_moon_phase_svg

_NS = "{http://www.w3.org/2000/svg}"


def _children(svg: str) -> list[ET.Element]:
    root = ET.fromstring(svg)
    assert root.get("viewBox") == "0 0 100 100"
    return list(root)


@pytest.mark.parametrize("phase", [0.0, 0.009, 0.991, 1.0])
def test_new_moon_is_a_dark_disc(phase):
    (disc,) = _children(render_moon_phase_svg(phase))
    assert disc.tag == f"{_NS}circle"
    assert disc.get("fill") == "black"
    assert disc.get("r") == "40"


def test_full_moon_is_a_lit_disc():
    (disc,) = _children(render_moon_phase_svg(0.5))
    assert disc.get("fill") == "white"


def test_quarters_are_half_discs():
    first = render_moon_phase_svg(0.25)
    last = render_moon_phase_svg(0.75)
    assert 'd="M 50 10 A 40 40 0 0 1 50 90 L 50 10 Z"' in first
    assert 'd="M 50 10 A 40 40 0 0 0 50 90 L 50 10 Z"' in last


def test_waxing_crescent_terminator():
    disc, lune = _children(render_moon_phase_svg(0.1))
    assert disc.get("fill") == "black"
    assert lune.get("fill") == "white"
    assert lune.get("d") == "M 50 10 A 23.5114 40 0 0 1 50 90 A 40 40 0 0 0 50 10"


def test_waning_crescent_mirrors_waxing():
    disc, lune = _children(render_moon_phase_svg(0.9))
    assert disc.get("fill") == "black"
    assert lune.get("d") == "M 50 10 A 23.5114 40 0 0 0 50 90 A 40 40 0 0 1 50 10"


def test_gibbous_phases_draw_a_dark_lune():
    for phase in (0.4, 0.6):
        disc, lune = _children(render_moon_phase_svg(phase))
        assert disc.get("fill") == "white"
        assert lune.get("fill") == "black"


def test_phase_is_wrapped():
    assert render_moon_phase_svg(1.25) == render_moon_phase_svg(0.25)
    assert render_moon_phase_svg(-0.9) == render_moon_phase_svg(0.1)


@pytest.mark.parametrize("phase", [float("nan"), float("inf")])
def test_rejects_non_finite_phase(phase):
    with pytest.raises(ValueError):
        render_moon_phase_svg(phase)


def test_every_phase_renders_well_formed_markup():
    for i in range(200):
        svg = render_moon_phase_svg(i / 200)
        assert '"nan"' not in svg
        assert _children(svg)
