"""
Single-slot response cache with a fixed time-to-live.

Holds the most recent forecast response and its expiry time. The slot is
replaced as a whole (value and expiry together), so readers never see a
value paired with another value's expiry.
"""

import logging
import time

logger = logging.getLogger(__name__)


class ForecastCache:
    """
    Memoize one value for `ttl` seconds.

    Parameters:
    -----------
    ttl : float
        Time-to-live in seconds
    clock : callable, optional
        Returns the current time in seconds (defaults to time.monotonic)
    """

    def __init__(self, ttl, clock=time.monotonic):
        self.ttl = ttl
        self._clock = clock
        self._entry = None  # (value, expires_at)

    def get(self):
        """Return the cached value, or None if empty or expired."""
        entry = self._entry
        if entry is None:
            return None

        value, expires_at = entry
        if self._clock() >= expires_at:
            logger.debug("Forecast cache expired")
            return None

        logger.debug("Forecast cache hit")
        return value

    def set(self, value):
        self._entry = (value, self._clock() + self.ttl)
        return value

    def clear(self):
        self._entry = None

    def expires_in(self):
        """Seconds until expiry (0 when empty or expired)."""
        entry = self._entry
        if entry is None:
            return 0.0
        return max(0.0, entry[1] - self._clock())

    def get_or_compute(self, compute, refresh=False):
        """
        Return the cached value, computing and storing it when stale.

        Exceptions from `compute` propagate and leave the slot unchanged.
        """
        if not refresh:
            value = self.get()
            if value is not None:
                return value
        return self.set(compute())
