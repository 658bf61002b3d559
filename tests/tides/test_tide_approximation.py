from datetime import datetime, timedelta, timezone

import numpy as np
import pytest

from marejada.tides import approximation, moon


def test_local_midnight_is_high_water():
    moment = datetime(2025, 1, 10, 0, 0)
    effect = moon.get_moon_phase(moment)['tidal_effect']
    expected = 0.5 + 0.4 * approximation.AMPLITUDE_MULTIPLIERS[effect]
    assert approximation.approximate_tide(moment) == pytest.approx(expected)


def test_follows_semidiurnal_cosine():
    moment = datetime(2025, 3, 2, 15, 45)
    hours = 15.75
    angle = (hours % 12.42) / 12.42 * 2 * np.pi
    effect = moon.get_moon_phase(moment)['tidal_effect']
    expected = 0.5 + 0.4 * approximation.AMPLITUDE_MULTIPLIERS[effect] * np.cos(angle)
    assert approximation.approximate_tide(moment) == pytest.approx(expected)


def test_uses_bay_local_time_of_day():
    utc_moment = datetime(2025, 1, 10, 6, 0, tzinfo=timezone.utc)
    assert approximation.local_hours(utc_moment) == 0.0
    assert approximation.approximate_tide(utc_moment) == approximation.approximate_tide(datetime(2025, 1, 10, 0, 0))


def test_spring_range_is_wider_than_neap():
    spring = approximation.AMPLITUDE_MULTIPLIERS[moon.TidalEffect.SPRING]
    neap = approximation.AMPLITUDE_MULTIPLIERS[moon.TidalEffect.NEAP]
    assert spring == 1.3
    assert neap == 0.7
    assert approximation.AMPLITUDE_MULTIPLIERS[moon.TidalEffect.NORMAL] == 1.0


def test_stays_within_amplitude_envelope():
    start = datetime(2025, 1, 1, 0, 0)
    for i in range(0, 24 * 30, 5):
        tide = approximation.approximate_tide(start + timedelta(hours=i, minutes=13))
        assert 0.5 - 0.52 - 1e-9 <= tide <= 0.5 + 0.52 + 1e-9
