from datetime import date, datetime

import pytest
from pytz import utc

from stargazer.moon import (
    PHASE_NAMES,
    SYNODIC_MONTH,
    classify_phase,
    illumination_for,
    moon_phase,
    moon_phase_for_day,
    moon_phases_for_month,
    next_moon_events,
    phase_fraction,
    reference_moon_phases,
)


def test_new_moon_of_january_2000():
    result = moon_phase(datetime(2000, 1, 6))
    assert result.name == "New Moon"
    assert result.emoji == "🌑"
    assert result.illumination < 0.01


def test_full_moon_of_january_2000():
    result = moon_phase(datetime(2000, 1, 21))
    assert result.name == "Full Moon"
    assert result.emoji == "🌕"
    assert result.illumination > 0.99


def test_results_are_bounded_and_consistent(sample_dates):
    for when in sample_dates:
        result = moon_phase(when)
        assert 0 <= result.phase < 1
        assert 0 <= result.illumination <= 1
        assert result.illumination == illumination_for(result.phase)
        assert result.name in PHASE_NAMES
        assert (result.name, result.emoji) == classify_phase(result.phase)
        assert result.age_days == pytest.approx(result.phase * SYNODIC_MONTH)


@pytest.mark.parametrize(
    "phase, name",
    [
        (0.0, "New Moon"),
        (0.024, "New Moon"),
        (0.025, "Waxing Crescent"),
        (0.25, "First Quarter"),
        (0.3, "Waxing Gibbous"),
        (0.5, "Full Moon"),
        (0.6, "Waning Gibbous"),
        (0.75, "Last Quarter"),
        (0.9, "Waning Crescent"),
        (0.975, "New Moon"),
        (1.0, "New Moon"),
        (-0.25, "Last Quarter"),
    ],
)
def test_classify_phase_boundaries(phase, name):
    assert classify_phase(phase)[0] == name


def test_illumination_curve():
    assert illumination_for(0.0) == pytest.approx(0.0)
    assert illumination_for(0.25) == pytest.approx(0.5)
    assert illumination_for(0.5) == pytest.approx(1.0)
    assert illumination_for(0.3) == pytest.approx(illumination_for(0.7))


def test_moon_phase_for_day():
    assert moon_phase_for_day(0).name == "New Moon"
    assert moon_phase_for_day(SYNODIC_MONTH / 2).name == "Full Moon"
    assert moon_phase_for_day(SYNODIC_MONTH).name == "New Moon"


def test_moon_phases_for_month():
    assert len(moon_phases_for_month(2000, 2)) == 29
    assert len(moon_phases_for_month(2023, 4)) == 30
    january = moon_phases_for_month(2000, 1)
    assert january[5].name == "New Moon"
    assert january[20].name == "Full Moon"


def test_next_moon_events():
    start = datetime(2000, 1, 6)
    next_new, next_full = next_moon_events(start)
    assert next_full.date() == date(2000, 1, 21)
    assert phase_fraction(next_full) == pytest.approx(0.5, abs=1e-6)
    assert next_new.date() == date(2000, 1, 6)
    assert next_new.tzinfo is not None


def test_next_moon_events_are_within_one_cycle(sample_dates):
    for when in sample_dates:
        next_new, next_full = next_moon_events(when)
        for event in (next_new, next_full):
            elapsed = (event - utc.localize(when)).total_seconds() / 86400
            assert 0 < elapsed <= SYNODIC_MONTH + 1e-6


def test_reference_phases_cover_every_name_in_order():
    phases = reference_moon_phases()
    assert [p.name for p in phases] == list(PHASE_NAMES)
    assert [p.emoji for p in phases] == ["🌑", "🌒", "🌓", "🌔", "🌕", "🌖", "🌗", "🌘"]
