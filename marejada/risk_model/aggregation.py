"""
Forecast aggregation pipeline.

Turns a raw hourly marine series (Open-Meteo `hourly` block) into:
- per-hour records (primary/secondary swell + approximate tide)
- current per-beach risk and the bay-wide worst beach
- a 48-hour timeline starting at the current hour
- a 7-day daily summary with each beach's worst hour of the day

Pure functions over in-memory lists; no fetching, no caching.
"""

import logging
from datetime import datetime, timezone

import numpy as np
import pandas as pd

from . import config, risk
from .beaches import BEACHES
from ..tides import moon
from ..tides.approximation import approximate_tide

logger = logging.getLogger(__name__)

# Provider variable names: (primary, fallback) per swell field
SWELL_FIELDS = {
    'height': ('swell_wave_height', 'wave_height'),
    'direction': ('swell_wave_direction', 'wave_direction'),
    'period': ('swell_wave_period', 'wave_period'),
}

SECONDARY_SWELL_FIELDS = {
    'height': 'secondary_swell_wave_height',
    'direction': 'secondary_swell_wave_direction',
    'period': 'secondary_swell_wave_period',
}

REQUIRED_SERIES = ('time',)


class MarineDataError(ValueError):
    """Raised when the raw marine series is missing or malformed."""


def validate_hourly(hourly):
    """
    Check that the raw hourly series can be aggregated.

    Fails loudly instead of producing an empty forecast.

    Raises:
    -------
    MarineDataError
        If the series is absent, has no timestamps or blank ones, or any
        variable array has a different length than the time axis
    """
    if not isinstance(hourly, dict):
        raise MarineDataError("Hourly marine series is missing")

    for key in REQUIRED_SERIES:
        if not hourly.get(key):
            raise MarineDataError(f"Hourly marine series has no '{key}' values")

    blank = [i for i, time in enumerate(hourly['time']) if time is None or not str(time).strip()]
    if blank:
        raise MarineDataError(f"Hourly marine series has blank 'time' values at positions {blank[:5]}")

    n_hours = len(hourly['time'])
    for key, values in hourly.items():
        if isinstance(values, list) and len(values) != n_hours:
            raise MarineDataError(
                f"Hourly variable '{key}' has {len(values)} values, expected {n_hours}"
            )


def _value_at(hourly, key, i):
    values = hourly.get(key)
    if values is None or i >= len(values):
        return None
    return values[i]


def _first_present(*candidates):
    for value in candidates:
        if value is not None:
            return float(value)
    return 0.0


def _make_swell(height, direction, period):
    return {
        'height': max(0.0, float(height)),
        'direction': float(direction) % 360.0,
        'period': max(0.0, float(period)),
    }


def primary_swell_at(hourly, i):
    """Swell-specific variables when present, combined-wave values otherwise, else 0."""
    values = {
        field: _first_present(_value_at(hourly, swell_key, i), _value_at(hourly, wave_key, i))
        for field, (swell_key, wave_key) in SWELL_FIELDS.items()
    }
    return _make_swell(**values)


def secondary_swell_at(hourly, i):
    """Secondary swell for hour i, or None when the provider has no value."""
    height = _value_at(hourly, SECONDARY_SWELL_FIELDS['height'], i)
    if height is None:
        return None
    direction = _first_present(_value_at(hourly, SECONDARY_SWELL_FIELDS['direction'], i))
    period = _first_present(_value_at(hourly, SECONDARY_SWELL_FIELDS['period'], i))
    return _make_swell(height, direction, period)


def parse_times(times):
    """
    Parse provider time strings into bay-local aware datetimes.

    Naive strings are local wall-clock time in the bay's timezone. An
    ambiguous local time (repeated hour) is returned naive.

    Raises:
    -------
    MarineDataError
        If any value is not a recognizable timestamp
    """
    try:
        parsed = pd.to_datetime(pd.Series(times))
    except (ValueError, TypeError) as e:
        raise MarineDataError(f"Hourly marine series has unparseable 'time' values: {e}") from e

    if parsed.isna().any():
        positions = [i for i, missing in enumerate(parsed.isna()) if missing]
        raise MarineDataError(f"Hourly marine series has unparseable 'time' values at positions {positions[:5]}")

    if parsed.dt.tz is None:
        local = parsed.dt.tz_localize(config.TIMEZONE_NAME, ambiguous='NaT', nonexistent='shift_forward')
    else:
        local = parsed.dt.tz_convert(config.TIMEZONE_NAME)

    return [
        (wall_clock if pd.isna(ts) else ts).to_pydatetime()
        for ts, wall_clock in zip(local, parsed)
    ]


def build_forecast_hours(hourly):
    """
    Build one forecast record per hour of the raw series.

    Parameters:
    -----------
    hourly : dict
        Parallel arrays keyed by provider variable name ('time', 'wave_height',
        'swell_wave_direction', ...)

    Returns:
    --------
    list of dicts with keys:
        time : str
            Provider timestamp, unchanged
        swell : dict
            Primary swell {'height', 'direction', 'period'}
        secondary_swell : dict or None
        wave_height : float
            Combined significant wave height (m)
        tide_height : float
            Approximate tide level (m)
    """
    validate_hourly(hourly)

    times = hourly['time']
    moments = parse_times(times)

    forecast_hours = []
    for i, (time, moment) in enumerate(zip(times, moments)):
        forecast_hours.append({
            'time': str(time),
            'swell': primary_swell_at(hourly, i),
            'secondary_swell': secondary_swell_at(hourly, i),
            'wave_height': max(0.0, _first_present(_value_at(hourly, 'wave_height', i))),
            'tide_height': approximate_tide(moment),
        })

    return forecast_hours


def hour_key(moment):
    """'YYYY-MM-DDTHH' in the bay's local time."""
    return moon.to_utc(moment).astimezone(config.BAY_TIMEZONE).strftime('%Y-%m-%dT%H')


def find_current_index(forecast_hours, now):
    """
    Index of the forecast hour matching `now`.

    Matches on the hour string; falls back to 0 when nothing matches.
    """
    key = hour_key(now)
    for i, hour in enumerate(forecast_hours):
        if hour['time'][:13] == key:
            return i

    logger.warning(f"No forecast hour matches {key}. Using first forecast hour.")
    return 0


def compute_beach_risks(hour, tidal_effect, beaches=BEACHES):
    """
    Risk per beach for one forecast hour.

    Returns:
    --------
    list of dicts: beach fields plus 'risk'
    """
    results = []
    for beach in beaches:
        entry = beach.to_dict()
        entry['risk'] = risk.calculate_risk(
            beach,
            hour['swell'],
            hour['tide_height'],
            tidal_effect,
            secondary_swell=hour.get('secondary_swell'),
        )
        results.append(entry)
    return results


def overall_risk(beach_risks):
    """Risk of the worst beach; ties keep the first in registry order."""
    worst = beach_risks[0]
    for entry in beach_risks[1:]:
        if entry['risk']['score'] > worst['risk']['score']:
            worst = entry
    return worst['risk']


def timeline(forecast_hours, current_index, hours=config.TIMELINE_HOURS):
    return forecast_hours[current_index:current_index + hours]


def worst_risk_of_day(beach, day_hours, tidal_effect):
    """Highest-scoring hour's risk for a beach; ties keep the earliest hour."""
    worst = None
    for hour in day_hours:
        # Secondary swell counts here too, so daily scores can exceed a primary-only score
        result = risk.calculate_risk(
            beach,
            hour['swell'],
            hour['tide_height'],
            tidal_effect,
            secondary_swell=hour.get('secondary_swell'),
        )
        if worst is None or result['score'] > worst['score']:
            worst = result
    return worst


def circular_mean_direction(directions):
    """
    Vector-averaged direction (degrees, [0, 360)).

    Unlike the arithmetic mean, averaging 350° and 10° gives 0°.
    """
    angles = np.deg2rad(np.asarray(directions, dtype=float))
    mean = np.rad2deg(np.arctan2(np.sin(angles).sum(), np.cos(angles).sum()))
    return float(mean % 360.0)


def summarize_day(day_hours, tidal_effect, beaches=BEACHES):
    """
    Fold one block of hourly records into a daily summary.

    Parameters:
    -----------
    day_hours : list of dict
        Non-empty block of forecast hours (normally 24)
    tidal_effect : TidalEffect
        Tidal effect used for the day's risk scores

    Returns:
    --------
    dict with keys:
        date : str
            'YYYY-MM-DD' of the block's first hour
        max_swell_height : float
            Maximum primary swell height (m, 2 decimals)
        avg_period : float
            Mean primary swell period (s, 1 decimal)
        dominant_direction : int
            Arithmetic mean of swell directions (degrees)
        dominant_direction_circular : int
            Vector mean of swell directions (degrees)
        direction_label : str
            Label of dominant_direction
        max_tide : float
            Maximum tide level (m, 2 decimals)
        beaches : list of dict
            {'name', 'risk'} with each beach's worst risk that day
    """
    heights = np.array([h['swell']['height'] for h in day_hours])
    periods = np.array([h['swell']['period'] for h in day_hours])
    directions = np.array([h['swell']['direction'] for h in day_hours])
    tides = np.array([h['tide_height'] for h in day_hours])

    # Arithmetic mean; wraps badly across 0°/360°, see dominant_direction_circular
    dominant_direction = int(risk.round_half_up(float(np.mean(directions))))

    return {
        'date': day_hours[0]['time'][:10],
        'max_swell_height': risk.round_half_up(float(np.max(heights)), 2),
        'avg_period': risk.round_half_up(float(np.mean(periods)), 1),
        'dominant_direction': dominant_direction,
        'dominant_direction_circular': int(risk.round_half_up(circular_mean_direction(directions))) % 360,
        'direction_label': risk.swell_direction_label(dominant_direction),
        'max_tide': risk.round_half_up(float(np.max(tides)), 2),
        'beaches': [
            {'name': beach.name, 'risk': worst_risk_of_day(beach, day_hours, tidal_effect)}
            for beach in beaches
        ],
    }


def daily_summary(forecast_hours, tidal_effect, beaches=BEACHES,
                  days=config.SUMMARY_DAYS, hours_per_day=config.HOURS_PER_DAY):
    """Daily summaries over consecutive 24 h blocks starting at index 0."""
    summaries = []
    for d in range(days):
        day_hours = forecast_hours[d * hours_per_day:(d + 1) * hours_per_day]
        if not day_hours:
            continue
        summaries.append(summarize_day(day_hours, tidal_effect, beaches))
    return summaries


def compute_forecast(hourly, now=None, beaches=BEACHES):
    """
    Compute the full flood-risk forecast from a raw hourly marine series.

    Parameters:
    -----------
    hourly : dict
        Raw provider `hourly` block
    now : datetime, optional
        Current instant (aware); defaults to the current UTC time
    beaches : sequence of Beach
        Beach registry

    Returns:
    --------
    dict with keys:
        timestamp : str
            ISO timestamp of `now`
        moon : dict
            Moon phase info at `now`
        current : dict
            swell, secondary_swell, wave_height, tide_height, swell_direction_label
        overall_risk : dict
            Worst beach risk
        beaches : list of dict
            Beach fields plus current risk
        timeline_48h : list of dict
            Forecast hours from the current hour onwards
        daily_summary : list of dict
            Up to 7 daily summaries

    Raises:
    -------
    MarineDataError
        If the hourly series is absent or empty
    """
    if now is None:
        now = datetime.now(timezone.utc)

    forecast_hours = build_forecast_hours(hourly)
    current_index = find_current_index(forecast_hours, now)
    current_hour = forecast_hours[current_index]

    moon_info = moon.get_moon_phase(now)
    tidal_effect = moon_info['tidal_effect']

    beach_risks = compute_beach_risks(current_hour, tidal_effect, beaches)

    logger.info(
        f"Built forecast: {len(forecast_hours)} hours, current index {current_index}, "
        f"tidal effect {tidal_effect.value}"
    )

    return {
        'timestamp': now.isoformat(),
        'moon': moon_info,
        'current': {
            'swell': current_hour['swell'],
            'secondary_swell': current_hour['secondary_swell'],
            'wave_height': current_hour['wave_height'],
            'tide_height': current_hour['tide_height'],
            'swell_direction_label': risk.swell_direction_label(current_hour['swell']['direction']),
        },
        'overall_risk': overall_risk(beach_risks),
        'beaches': beach_risks,
        'timeline_48h': timeline(forecast_hours, current_index),
        'daily_summary': daily_summary(forecast_hours, tidal_effect, beaches),
    }
