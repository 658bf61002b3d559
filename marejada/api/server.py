"""
Flask API server for the Bahía de Banderas flood-risk forecast.

Exposes endpoints:
- GET /forecast - Full forecast (current risk, 48 h timeline, 7-day summary)
- GET /beaches - Current risk per beach, worst first
- GET /beaches/<name> - Current risk and exposure notes for one beach
- GET /health - Health check

Data Sources:
- Wave/swell data: Open-Meteo Marine API (bay centre, America/Mexico_City)
  Citation: Open-Meteo.com, https://open-meteo.com/en/docs/marine-weather-api
- Tide: astronomical approximation (no tide gauge)
"""

import logging
import os
from datetime import datetime, timezone
from enum import Enum

import numpy as np
from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from config import production
from ..data_sources import marine
from ..risk_model import aggregation, beaches, config
from ..risk_model.aggregation import MarineDataError
from .cache import ForecastCache

# Configure logging
if production.IS_PRODUCTION:
    # Production logging - log to file
    # Use RotatingFileHandler for log rotation (max 10MB, keep 5 backups)
    from logging.handlers import RotatingFileHandler
    file_handler = RotatingFileHandler(
        production.LOG_FILE,
        maxBytes=10*1024*1024,  # 10MB
        backupCount=5
    )
    file_handler.setLevel(production.LOG_LEVEL)
    file_handler.setFormatter(logging.Formatter('%(asctime)s %(levelname)s %(name)s %(message)s'))

    console_handler = logging.StreamHandler()
    console_handler.setLevel(production.LOG_LEVEL)
    console_handler.setFormatter(logging.Formatter('%(asctime)s %(levelname)s %(name)s %(message)s'))

    logging.basicConfig(
        level=production.LOG_LEVEL,
        handlers=[file_handler, console_handler]
    )
else:
    # Development logging
    logging.basicConfig(level=production.LOG_LEVEL)

logger = logging.getLogger(__name__)

app = Flask(__name__)
app.config['DEBUG'] = production.DEBUG

forecast_cache = ForecastCache(ttl=production.CACHE_TTL)

FORECAST_ERROR = 'Error al obtener pronóstico'


@app.after_request
def after_request(response):
    origin = request.headers.get('Origin')
    if '*' in production.ALLOWED_ORIGINS:
        response.headers.add('Access-Control-Allow-Origin', '*')
    elif origin in production.ALLOWED_ORIGINS:
        response.headers.add('Access-Control-Allow-Origin', origin)

    response.headers.add('Access-Control-Allow-Headers', 'Content-Type')
    response.headers.add('Access-Control-Allow-Methods', 'GET,OPTIONS')

    # Clients may reuse a forecast until the server cache expires
    if request.endpoint in ('get_forecast', 'get_beaches', 'get_beach') and response.status_code == 200:
        response.cache_control.max_age = int(forecast_cache.expires_in())

    return response


def ensure_json_serializable(obj):
    """
    Recursively convert enums and numpy types to plain Python types for JSON.
    """
    if isinstance(obj, Enum):
        return obj.value
    elif isinstance(obj, np.integer):
        return int(obj)
    elif isinstance(obj, np.floating):
        return float(obj)
    elif isinstance(obj, np.bool_):
        return bool(obj)
    elif isinstance(obj, np.ndarray):
        return obj.tolist()
    elif isinstance(obj, dict):
        return {key: ensure_json_serializable(value) for key, value in obj.items()}
    elif isinstance(obj, (list, tuple)):
        return [ensure_json_serializable(item) for item in obj]
    else:
        return obj


def compute_forecast():
    """Fetch the marine series and run the risk pipeline."""
    hourly = marine.fetch_marine_forecast()
    forecast = aggregation.compute_forecast(hourly, now=datetime.now(timezone.utc))
    return ensure_json_serializable(forecast)


def current_forecast():
    """Cached forecast; `?refresh=1` forces a new fetch."""
    refresh = request.args.get('refresh', '').lower() in ('1', 'true', 'yes')
    return forecast_cache.get_or_compute(compute_forecast, refresh=refresh)


def upstream_error(e):
    logger.error(f"Forecast API error: {e}")
    return jsonify({
        'error': FORECAST_ERROR,
        'details': str(e),
        'timestamp': datetime.now(timezone.utc).isoformat()
    }), 502


def beach_detail(entry):
    """Beach entry with its exposure notes."""
    beach = beaches.find_beach(entry['name'])
    detail = dict(entry)
    if beach is not None:
        detail['exposure_notes'] = beaches.exposure_notes(beach)
    return detail


@app.route('/', methods=['GET'])
def root():
    """Root endpoint - lists available endpoints."""
    return jsonify({
        'message': f'{config.BAY_NAME} Flood Risk API',
        'endpoints': {
            'health': '/health',
            'forecast': '/forecast',
            'beaches': '/beaches',
            'beach': '/beaches/<name>'
        }
    }), 200


@app.route('/health', methods=['GET'])
def health():
    """Health check endpoint."""
    return jsonify({
        'status': 'healthy',
        'cache_expires_in': round(forecast_cache.expires_in()),
        'timestamp': datetime.now(timezone.utc).isoformat()
    })


@app.route('/forecast', methods=['GET'])
def get_forecast():
    """
    Main forecast endpoint.

    Query parameters:
    - refresh: bypass the response cache when truthy

    Returns:
    --------
    JSON with moon, current conditions, per-beach risk, overall risk,
    48 h timeline and 7-day summary
    """
    try:
        return jsonify(current_forecast())
    except MarineDataError as e:
        return upstream_error(e)


@app.route('/beaches', methods=['GET'])
def get_beaches():
    """
    Current risk per beach, sorted from highest to lowest score.

    Returns:
    --------
    JSON with the dominant swell summary and the beach list
    """
    try:
        forecast = current_forecast()
    except MarineDataError as e:
        return upstream_error(e)

    ranked = sorted(forecast['beaches'], key=lambda b: b['risk']['score'], reverse=True)
    return jsonify({
        'timestamp': forecast['timestamp'],
        'swell_direction_label': forecast['current']['swell_direction_label'],
        'swell': forecast['current']['swell'],
        'beaches': [beach_detail(entry) for entry in ranked]
    })


@app.route('/beaches/<name>', methods=['GET'])
def get_beach(name):
    """Current risk, exposure notes and daily worst risk for one beach."""
    beach = beaches.find_beach(name)
    if beach is None:
        return jsonify({
            'error': 'Not found',
            'message': f'Unknown beach: {name}',
            'timestamp': datetime.now(timezone.utc).isoformat()
        }), 404

    try:
        forecast = current_forecast()
    except MarineDataError as e:
        return upstream_error(e)

    entry = next(b for b in forecast['beaches'] if b['name'] == beach.name)
    daily = [
        {'date': day['date'], 'risk': b['risk']}
        for day in forecast['daily_summary']
        for b in day['beaches'] if b['name'] == beach.name
    ]
    return jsonify({
        'timestamp': forecast['timestamp'],
        'beach': beach_detail(entry),
        'daily': daily
    })


# Production error handlers
@app.errorhandler(404)
def not_found(error):
    """Handle 404 errors."""
    logger.warning(f"404 error: {request.url}")
    return jsonify({
        'error': 'Not found',
        'message': 'The requested resource was not found.',
        'timestamp': datetime.now(timezone.utc).isoformat()
    }), 404


@app.errorhandler(500)
def internal_error(error):
    """Handle 500 errors."""
    logger.error(f"500 error: {error}", exc_info=True)
    if production.IS_PRODUCTION:
        # Don't expose error details in production
        return jsonify({
            'error': 'Internal server error',
            'message': 'An error occurred processing your request.',
            'timestamp': datetime.now(timezone.utc).isoformat()
        }), 500
    else:
        return jsonify({
            'error': str(error),
            'timestamp': datetime.now(timezone.utc).isoformat()
        }), 500


@app.errorhandler(Exception)
def handle_exception(e):
    """Handle all unhandled exceptions."""
    if isinstance(e, HTTPException):
        return e

    logger.error(f"Unhandled exception: {e}", exc_info=True)
    if production.IS_PRODUCTION:
        return jsonify({
            'error': 'Internal server error',
            'message': 'An unexpected error occurred.',
            'timestamp': datetime.now(timezone.utc).isoformat()
        }), 500
    else:
        return jsonify({
            'error': str(e),
            'timestamp': datetime.now(timezone.utc).isoformat()
        }), 500


if __name__ == '__main__':
    # Development server only; production runs through wsgi.py
    port = int(os.environ.get('PORT', '5002'))
    print(f"* API will be available at: http://localhost:{port}")
    app.run(debug=production.DEBUG, use_reloader=False, host='0.0.0.0', port=port)
