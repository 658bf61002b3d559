"""
Marine forecast fetching module.

Fetches hourly wave and swell forecasts from the Open-Meteo Marine API for
the centre of Bahía de Banderas.

Data Source: Open-Meteo Marine Weather API
- API: https://marine-api.open-meteo.com/v1/marine
- Models: MeteoFrance MFWAM / ECMWF WAM / GFS Wave (best match)
- Citation: Open-Meteo.com. Marine Weather API. https://open-meteo.com/en/docs/marine-weather-api
- License: CC BY 4.0

No synthetic fallback: a flood-risk forecast built on fake swell data is
worse than no forecast, so failures raise MarineDataError.
"""

import logging

import requests

from config import production
from ..risk_model import config
from ..risk_model.aggregation import MarineDataError, validate_hourly

logger = logging.getLogger(__name__)

HOURLY_VARIABLES = (
    'wave_height',
    'wave_direction',
    'wave_period',
    'swell_wave_height',
    'swell_wave_direction',
    'swell_wave_period',
    'secondary_swell_wave_height',
    'secondary_swell_wave_direction',
    'secondary_swell_wave_period',
)


def build_params(lat, lon, days, timezone):
    return {
        'latitude': lat,
        'longitude': lon,
        'hourly': ','.join(HOURLY_VARIABLES),
        'forecast_days': days,
        'timezone': timezone,
    }


def fetch_marine_forecast(lat=config.LATITUDE, lon=config.LONGITUDE,
                          days=production.FORECAST_DAYS, timezone=config.TIMEZONE_NAME):
    """
    Fetch the hourly marine forecast from Open-Meteo.

    Parameters:
    -----------
    lat : float
        Latitude
    lon : float
        Longitude
    days : int
        Number of forecast days (max 16 for Open-Meteo; we use 7)
    timezone : str
        IANA timezone for the returned local timestamps

    Returns:
    --------
    hourly : dict
        Parallel arrays keyed by variable name, with 'time' holding
        'YYYY-MM-DDTHH:MM' local timestamps

    Raises:
    -------
    MarineDataError
        If the request fails or the response has no usable hourly series
    """
    params = build_params(lat, lon, days, timezone)

    try:
        response = requests.get(production.MARINE_API_URL, params=params, timeout=production.REQUEST_TIMEOUT)
        response.raise_for_status()
        data = response.json()
    except requests.JSONDecodeError as e:
        logger.warning(f"Open-Meteo returned a non-JSON body: {e}")
        raise MarineDataError("Open-Meteo returned an invalid response") from e
    except requests.RequestException as e:
        logger.warning(f"Failed to fetch marine forecast from Open-Meteo: {e}")
        raise MarineDataError(f"Open-Meteo error: {e}") from e

    if not isinstance(data, dict) or 'hourly' not in data:
        reason = data.get('reason') if isinstance(data, dict) else None
        raise MarineDataError(f"Unexpected API response format{': ' + reason if reason else ''}")

    hourly = data['hourly']
    validate_hourly(hourly)

    logger.info(f"Successfully fetched {len(hourly['time'])} hourly marine forecasts from Open-Meteo")
    return hourly
