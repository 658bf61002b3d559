"""
Coastal-flooding risk scoring model.

Combines swell height, period and direction (against each beach's exposure),
tide level and lunar tidal effect into a 0-100 flood risk score, then maps
the score to one of four risk levels.

Uses transparent, tiered point rules:
- Swell height: 0-40 points
- Swell period: 0-25 points (longer period = more energy)
- Both scaled by the beach's exposure to the swell's sector
- Tide level: 0-20 points
- Spring tides amplify the total, neap tides dampen it
"""

from enum import Enum

import numpy as np

from . import config
from .beaches import Exposure
from ..tides.moon import TidalEffect


class RiskLevel(str, Enum):
    BAJO = 'BAJO'
    MODERADO = 'MODERADO'
    ALTO = 'ALTO'
    CRITICO = 'CRÍTICO'


EXPOSURE_MULTIPLIERS = {
    Exposure.MUY_ALTA: 1.0,
    Exposure.ALTA: 0.8,
    Exposure.MEDIA: 0.5,
    Exposure.BAJA: 0.2,
}

TIDAL_EFFECT_MULTIPLIERS = {
    TidalEffect.SPRING: 1.15,
    TidalEffect.NEAP: 0.85,
    TidalEffect.NORMAL: 1.0,
}

# (minimum score, level, colour, emoji, description), highest first
RISK_LEVELS = (
    (70, RiskLevel.CRITICO, '#DC2626', '🔴', 'Riesgo de inundación. Evitar zona costera.'),
    (50, RiskLevel.ALTO, '#F97316', '🟠', 'Oleaje fuerte. Precaución en playas expuestas.'),
    (30, RiskLevel.MODERADO, '#EAB308', '🟡', 'Oleaje moderado. Atención en pleamar.'),
    (0, RiskLevel.BAJO, '#22C55E', '🟢', 'Condiciones normales.'),
)


def round_half_up(value, digits=0):
    """Round halves away from zero for non-negative values (Python's round() is banker's)."""
    scale = 10 ** digits
    return float(np.floor(value * scale + 0.5) / scale)


def _in_range(direction, bounds):
    low, high = bounds
    return low <= direction <= high


def is_nw_swell(direction):
    """NW/W swell: 270°-330° coming-FROM."""
    return _in_range(direction, config.NW_SWELL_DIRECTIONS)


def is_sw_swell(direction):
    """S/SW swell: 150°-240° coming-FROM."""
    return _in_range(direction, config.SW_SWELL_DIRECTIONS)


def exposure_multiplier(exposure):
    return EXPOSURE_MULTIPLIERS.get(exposure, 0.3)


def sector_exposure(beach, direction):
    """
    Exposure multiplier of a beach for a swell direction.

    Parameters:
    -----------
    beach : Beach
        Beach with NW and SW exposure ratings
    direction : float
        Swell direction coming-FROM (degrees clockwise from north)

    Returns:
    --------
    multiplier : float
        0.2-1.0 inside the NW or SW sector, 0.1 for any other direction
    """
    if is_nw_swell(direction):
        return exposure_multiplier(beach.exposure_nw)
    elif is_sw_swell(direction):
        return exposure_multiplier(beach.exposure_sw)
    else:
        return config.OTHER_DIRECTION_MULTIPLIER  # Minimal impact from other directions


def height_points(height):
    """Swell height contribution (0-40 points)."""
    if height >= 2.0:
        return 40
    elif height >= 1.5:
        return 30
    elif height >= 1.0:
        return 20
    elif height >= 0.5:
        return 10
    else:
        return 0


def period_points(period):
    """Swell period contribution (0-25 points)."""
    if period >= 16:
        return 25
    elif period >= 14:
        return 20
    elif period >= 12:
        return 12
    elif period >= 10:
        return 5
    else:
        return 0


def tide_points(tide_height):
    """Tide level contribution (0-20 points)."""
    if tide_height >= 0.8:
        return 20
    elif tide_height >= 0.7:
        return 15
    elif tide_height >= 0.6:
        return 10
    elif tide_height >= 0.4:
        return 5
    else:
        return 0


def swell_subscore(beach, swell):
    """
    Score one swell train against a beach.

    Parameters:
    -----------
    beach : Beach
    swell : dict
        {'height': m, 'direction': deg, 'period': s}

    Returns:
    --------
    subscore : float
        (height points + period points) * sector exposure, 0-65
    """
    points = height_points(swell['height']) + period_points(swell['period'])
    return points * sector_exposure(beach, swell['direction'])


def counts_as_secondary(swell):
    """Secondary swell is considered only when present and above 0.3 m."""
    return swell is not None and swell['height'] > config.SECONDARY_SWELL_MIN_HEIGHT


def classify_score(score):
    """
    Map a 0-100 score to its risk level.

    Returns:
    --------
    dict with keys level, color, emoji, description, score
    """
    for minimum, level, color, emoji, description in RISK_LEVELS:
        if score >= minimum:
            break
    return {
        'level': level,
        'color': color,
        'emoji': emoji,
        'description': description,
        'score': score,
    }


def calculate_risk(beach, swell, tide_height, tidal_effect, secondary_swell=None):
    """
    Compute flood risk for one beach at one point in time.

    score = min(100, (S_primary + 0.5 * S_secondary + P_tide) * M_effect)

    Parameters:
    -----------
    beach : Beach
        Registry entry with exposure ratings
    swell : dict
        Primary swell {'height', 'direction', 'period'}
    tide_height : float
        Water level (m)
    tidal_effect : TidalEffect
        SPRING (x1.15), NEAP (x0.85) or NORMAL (x1.0)
    secondary_swell : dict, optional
        Cross swell; counts at half weight when higher than 0.3 m

    Returns:
    --------
    dict with keys:
        level : RiskLevel
        color : str
            Hex colour for the level
        emoji : str
        description : str
            Spanish advice text
        score : int
            Risk score (0-100)
    """
    total = swell_subscore(beach, swell)
    if counts_as_secondary(secondary_swell):
        total += config.SECONDARY_SWELL_WEIGHT * swell_subscore(beach, secondary_swell)

    total += tide_points(tide_height)
    total *= TIDAL_EFFECT_MULTIPLIERS.get(tidal_effect, 1.0)

    score = int(round_half_up(min(100.0, max(0.0, total))))
    return classify_score(score)


def cardinal_direction(direction):
    """Coarse four-quadrant label centred on the cardinal points."""
    if direction >= 315 or direction < 45:
        return 'N'
    elif direction < 135:
        return 'E'
    elif direction < 225:
        return 'S'
    else:
        return 'W'


def swell_direction_label(direction):
    """
    Display label for a swell direction.

    Checked in order, first match wins: NW [270-330], SW [150-240],
    N (>=330 or <=30), SE [60-150], then the cardinal quadrant.
    """
    if is_nw_swell(direction):
        return 'NW'
    elif is_sw_swell(direction):
        return 'SW'
    elif direction >= 330 or direction <= 30:
        return 'N'
    elif 60 <= direction <= 150:
        return 'SE'
    return cardinal_direction(direction)
