"""
WSGI entry point.

WSGI servers (gunicorn, PythonAnywhere, ...) look for a variable named
'application' in this file:

    gunicorn wsgi:application
"""

import os
import sys

# Add project directory to path
path = os.path.dirname(os.path.abspath(__file__))
if path not in sys.path:
    sys.path.insert(0, path)

os.environ.setdefault('FLASK_ENV', 'production')

# Import Flask app
from marejada.api.server import app

application = app

# For local testing
if __name__ == '__main__':
    app.run(debug=False)
