from datetime import datetime, timedelta

import pytest


def _make_hourly(n_hours=168, start=datetime(2025, 1, 10, 0, 0), wave_height=1.2,
                 wave_direction=290.0, wave_period=11.0, swell_height=None,
                 swell_direction=None, swell_period=None, secondary=None):
    """Open-Meteo style `hourly` block with constant values."""
    times = [(start + timedelta(hours=i)).strftime('%Y-%m-%dT%H:%M') for i in range(n_hours)]
    hourly = {
        'time': times,
        'wave_height': [wave_height] * n_hours,
        'wave_direction': [wave_direction] * n_hours,
        'wave_period': [wave_period] * n_hours,
    }
    if swell_height is not None:
        hourly['swell_wave_height'] = [swell_height] * n_hours
        hourly['swell_wave_direction'] = [swell_direction] * n_hours
        hourly['swell_wave_period'] = [swell_period] * n_hours
    if secondary is not None:
        height, direction, period = secondary
        hourly['secondary_swell_wave_height'] = [height] * n_hours
        hourly['secondary_swell_wave_direction'] = [direction] * n_hours
        hourly['secondary_swell_wave_period'] = [period] * n_hours
    return hourly


@pytest.fixture
def make_hourly():
    return _make_hourly
