from datetime import datetime

import pytest

from stargazer.constellations import (
    CATALOG,
    COMMON_CONSTELLATIONS,
    MAX_CONSTELLATIONS,
    MIN_CONSTELLATIONS,
    circumpolar_for,
    get_catalog_entry,
    ra_distance,
    season_for,
    visible_constellations,
)

NORTHERN_CIRCUMPOLAR = {"Ursa Minor", "Cassiopeia", "Cepheus", "Draco", "Camelopardalis"}


def test_catalog_is_well_formed():
    names = [e.name for e in CATALOG]
    assert len(names) == len(set(names))
    for entry in CATALOG:
        assert 0 <= entry.ra_hours < 24
        assert entry.hemisphere in ("north", "south", "both")
        for start, end in entry.lines:
            assert 0 <= start < len(entry.stars)
            assert 0 <= end < len(entry.stars)


def test_circumpolar_lists():
    assert {e.name for e in circumpolar_for("north")} == NORTHERN_CIRCUMPOLAR
    south = {e.name for e in circumpolar_for("south")}
    assert "Crux" in south
    assert not south & NORTHERN_CIRCUMPOLAR


def test_get_catalog_entry():
    assert get_catalog_entry("Orion").abbreviation == "Ori"
    assert get_catalog_entry("Nonesuch") is None


@pytest.mark.parametrize(
    "month, day, latitude, season",
    [
        (12, 21, 40.0, "winter"),
        (12, 20, 40.0, "fall"),
        (3, 19, 40.0, "winter"),
        (3, 20, 40.0, "spring"),
        (6, 21, 40.0, "summer"),
        (9, 22, 40.0, "summer"),
        (9, 23, 40.0, "fall"),
        (1, 10, -33.0, "summer"),
        (7, 10, -33.0, "winter"),
        (4, 10, -33.0, "fall"),
        (10, 10, -33.0, "spring"),
    ],
)
def test_season_for(month, day, latitude, season):
    assert season_for(datetime(2023, month, day), latitude) == season


def test_ra_distance_wraps():
    assert ra_distance(23.0, 1.0) == pytest.approx(2.0)
    assert ra_distance(1.0, 23.0) == pytest.approx(2.0)
    assert ra_distance(0.0, 12.0) == pytest.approx(12.0)
    assert ra_distance(5.5, 5.5) == 0


def test_selection_size_and_membership(sample_dates, observers):
    known = {e.name for e in CATALOG} | set(COMMON_CONSTELLATIONS)
    for when in sample_dates:
        for lat, lng in observers:
            names = visible_constellations(when, lat, lng)
            assert MIN_CONSTELLATIONS <= len(names) <= MAX_CONSTELLATIONS
            assert len(names) == len(set(names))
            assert set(names) <= known


def test_includes_circumpolar_for_hemisphere(sample_dates, observers):
    for when in sample_dates:
        for lat, lng in observers:
            hemisphere = "north" if lat >= 0 else "south"
            circumpolar = {e.name for e in circumpolar_for(hemisphere)}
            assert circumpolar & set(visible_constellations(when, lat, lng))


def test_new_york_always_sees_a_northern_circumpolar(sample_dates, new_york):
    for when in sample_dates:
        assert NORTHERN_CIRCUMPOLAR & set(visible_constellations(when, *new_york))


def test_selection_is_deterministic(new_york):
    when = datetime(2000, 1, 21, 5)
    assert visible_constellations(when, *new_york) == visible_constellations(when, *new_york)
