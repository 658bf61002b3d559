"""
Stylized tide-height approximation for Bahía de Banderas.

Puerto Vallarta has mixed semidiurnal tides with roughly 0.5-1.0 m range.
This is NOT a harmonic prediction: it places a single 12.42 h cosine on the
local time of day and scales its amplitude by the lunar tidal effect.
Good enough to rank high-water hours; not for sub-decimetre accuracy.
"""

import numpy as np

from . import moon
from ..risk_model import config

# Principal lunar semidiurnal period (hours)
TIDAL_PERIOD_HOURS = 12.42

# Mean sea level offset and base amplitude (m)
MEAN_LEVEL = 0.5
BASE_AMPLITUDE = 0.4

AMPLITUDE_MULTIPLIERS = {
    moon.TidalEffect.SPRING: 1.3,
    moon.TidalEffect.NEAP: 0.7,
    moon.TidalEffect.NORMAL: 1.0,
}


def local_hours(moment):
    """Fractional hour of the day in the bay's local time."""
    if moment.tzinfo is not None:
        moment = moment.astimezone(config.BAY_TIMEZONE)
    return moment.hour + moment.minute / 60.0


def approximate_tide(moment):
    """
    Approximate tide height at a point in time.

    tide = 0.5 + 0.4 * M * cos(2*pi * (hours mod 12.42) / 12.42)

    where M is 1.3 (spring), 0.7 (neap) or 1.0 (normal) from the moon phase
    at the same instant.

    Parameters:
    -----------
    moment : datetime
        Point in time (aware, or naive bay-local)

    Returns:
    --------
    tide_height : float
        Approximate water level (m): 0.5 +/- 0.52 at spring tides
        (about -0.02 to 1.02 m), 0.5 +/- 0.28 at neap tides
    """
    hours = local_hours(moment)
    phase_angle = (hours % TIDAL_PERIOD_HOURS) / TIDAL_PERIOD_HOURS * 2.0 * np.pi

    tidal_effect = moon.get_moon_phase(moment)['tidal_effect']
    amplitude_multiplier = AMPLITUDE_MULTIPLIERS[tidal_effect]

    return float(MEAN_LEVEL + BASE_AMPLITUDE * amplitude_multiplier * np.cos(phase_angle))
