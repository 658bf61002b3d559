"""
Site-specific configuration for Bahía de Banderas (Puerto Vallarta / Riviera Nayarit).

The bay opens to the west. NW swells (North Pacific winter storms) wrap
around Punta Mita and hit the southern beaches; S/SW swells (tropical
storms and hurricanes, May-Oct) are partly blocked by Cabo Corrientes and
mostly reach the northern shore.
"""

from zoneinfo import ZoneInfo

BAY_NAME = 'Bahía de Banderas'

# Reference point for marine forecast requests (centre of the bay)
LATITUDE = 20.70
LONGITUDE = -105.35

# Provider timestamps are local wall-clock time in this zone
TIMEZONE_NAME = 'America/Mexico_City'
BAY_TIMEZONE = ZoneInfo(TIMEZONE_NAME)

# Swell sectors (coming-FROM, degrees clockwise from north, inclusive)
NW_SWELL_DIRECTIONS = (270, 330)  # NW/W: North Pacific
SW_SWELL_DIRECTIONS = (150, 240)  # S/SW: tropical systems

# Exposure multiplier for swells outside both sectors
OTHER_DIRECTION_MULTIPLIER = 0.1

# Secondary swell counts only above this height (m), at half weight
SECONDARY_SWELL_MIN_HEIGHT = 0.3
SECONDARY_SWELL_WEIGHT = 0.5

# Aggregation windows
TIMELINE_HOURS = 48
HOURS_PER_DAY = 24
SUMMARY_DAYS = 7
