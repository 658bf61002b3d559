"""
Lunar phase and tidal-effect calculator.

Approximates the moon's phase from the mean synodic month and a known new
moon, then classifies the tidal regime:
- SPRING: within ~2 days of new or full moon (larger tidal range)
- NEAP: near first and last quarter (smaller tidal range)
- NORMAL: everything in between

Pure functions of the timestamp; no ephemeris lookups.
"""

from datetime import datetime, timezone
from enum import Enum

import numpy as np

from ..risk_model import config

# Mean synodic month (days)
SYNODIC_MONTH = 29.53058770576

# Known new moon: 2000-01-06 18:14 UTC
REFERENCE_NEW_MOON = datetime(2000, 1, 6, 18, 14, 0, tzinfo=timezone.utc)

SECONDS_PER_DAY = 86400.0


class TidalEffect(str, Enum):
    SPRING = 'SPRING'  # Mareas vivas - higher highs, lower lows
    NEAP = 'NEAP'      # Mareas muertas - smaller range
    NORMAL = 'NORMAL'


# (upper bound, name, emoji) - bins centred on the 8 principal phases
PHASE_NAMES = (
    (0.0625, 'Luna Nueva', '🌑'),
    (0.1875, 'Creciente', '🌒'),
    (0.3125, 'Cuarto Creciente', '🌓'),
    (0.4375, 'Gibosa Creciente', '🌔'),
    (0.5625, 'Luna Llena', '🌕'),
    (0.6875, 'Gibosa Menguante', '🌖'),
    (0.8125, 'Cuarto Menguante', '🌗'),
    (0.9375, 'Menguante', '🌘'),
)


def to_utc(moment):
    """
    Return an aware UTC datetime.

    Naive datetimes are interpreted as wall-clock time in the bay's timezone,
    which is how the marine provider stamps its hourly series.
    """
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=config.BAY_TIMEZONE)
    return moment.astimezone(timezone.utc)


def phase_fraction(moment):
    """
    Compute lunar phase as a fraction of the synodic month.

    Parameters:
    -----------
    moment : datetime
        Point in time (aware, or naive bay-local)

    Returns:
    --------
    phase : float
        Phase in [0, 1): 0 = new moon, 0.5 = full moon
    """
    diff_days = (to_utc(moment) - REFERENCE_NEW_MOON).total_seconds() / SECONDS_PER_DAY
    phase = ((diff_days % SYNODIC_MONTH) + SYNODIC_MONTH) % SYNODIC_MONTH / SYNODIC_MONTH
    # Float rounding can land exactly on the upper bound for tiny negative offsets
    if phase >= 1.0:
        phase = 0.0
    return float(phase)


def illumination_percent(phase):
    """Illuminated fraction of the disc, as an integer percent (0-100)."""
    fraction = (1.0 - np.cos(phase * 2.0 * np.pi)) / 2.0
    return int(np.floor(fraction * 100.0 + 0.5))


def phase_name(phase):
    """Return (name, emoji) for a phase fraction."""
    for upper, name, emoji in PHASE_NAMES:
        if phase < upper:
            return name, emoji
    return 'Luna Nueva', '🌑'


def classify_tidal_effect(phase):
    """
    Classify the tidal regime for a phase fraction.

    Spring tides near new and full moon (±2 days ≈ ±0.068 phase),
    neap tides near the quarters.

    Parameters:
    -----------
    phase : float
        Phase fraction in [0, 1)

    Returns:
    --------
    effect : TidalEffect
    """
    if phase < 0.07 or phase > 0.93 or (0.43 < phase < 0.57):
        return TidalEffect.SPRING
    elif (0.18 < phase < 0.32) or (0.68 < phase < 0.82):
        return TidalEffect.NEAP
    else:
        return TidalEffect.NORMAL


def get_moon_phase(moment):
    """
    Compute moon phase information for a point in time.

    Parameters:
    -----------
    moment : datetime
        Point in time (aware, or naive bay-local)

    Returns:
    --------
    dict with keys:
        phase : float
            Phase fraction in [0, 1)
        name : str
            Spanish phase name
        emoji : str
            Phase glyph
        illumination : int
            Illuminated percent (0-100)
        tidal_effect : TidalEffect
            SPRING, NEAP or NORMAL
    """
    phase = phase_fraction(moment)
    name, emoji = phase_name(phase)

    return {
        'phase': phase,
        'name': name,
        'emoji': emoji,
        'illumination': illumination_percent(phase),
        'tidal_effect': classify_tidal_effect(phase),
    }
