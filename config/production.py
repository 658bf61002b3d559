"""
Runtime configuration for the Marejada API.

Settings come from environment variables with development defaults.
"""

import os

# FLASK_ENV=production switches to file logging and hides error details
FLASK_ENV = os.environ.get('FLASK_ENV', 'development')
IS_PRODUCTION = FLASK_ENV == 'production'
DEBUG = not IS_PRODUCTION

PROJECT_ROOT = os.environ.get(
    'MAREJADA_ROOT',
    os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
)

LOGS_DIR = os.path.join(PROJECT_ROOT, 'logs')

# Logging configuration
LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
LOG_FILE = os.path.join(LOGS_DIR, 'app.log')

# CORS settings
ALLOWED_ORIGINS = os.environ.get('ALLOWED_ORIGINS', '*').split(',')

# Open-Meteo marine API
MARINE_API_URL = os.environ.get('MARINE_API_URL', 'https://marine-api.open-meteo.com/v1/marine')
REQUEST_TIMEOUT = float(os.environ.get('REQUEST_TIMEOUT', '10'))
FORECAST_DAYS = int(os.environ.get('FORECAST_DAYS', '7'))

# Response cache settings
CACHE_TTL = int(os.environ.get('CACHE_TTL', '3600'))  # 1 hour default


def ensure_directories():
    """Create the log directory if it doesn't exist."""
    os.makedirs(LOGS_DIR, exist_ok=True)


# Production logs to LOG_FILE; create its directory on import
if IS_PRODUCTION:
    ensure_directories()
