"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DAY_SECONDS = 24 * 60 * 60

DEFAULT_WEEKLY_HOURS = 40.0
DEFAULT_WORKING_DAYS = 5
DEFAULT_HOURS_PER_DAY = 8.0

TRAINING_EXPIRY_DAYS = 365
VARIATION_THRESHOLD_PCT = 5.0
RECENT_CASES_LIMIT = 5
TOP_AREAS_LIMIT = 5

FREQUENCY_FACTOR = 1_000_000
INCIDENCE_FACTOR = 1_000
DISPLAY_DIVISOR = 1_000

NO_AREA_LABEL = "Sin área"
OTHER_ABSENCE_LABEL = "Ausencias registradas"
