"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

MAX_DAILY_HOURS = 24
MIN_PROGRESS = 0
MAX_PROGRESS = 100
# tasks.hours_spent is DECIMAL(5, 2)
HOURS_DECIMAL_PLACES = 2

MIN_PASSWORD_LENGTH = 8

DEFAULT_ACCESS_TOKEN_DAYS = 7
DEFAULT_REFRESH_TOKEN_DAYS = 30
DEFAULT_JWT_ALGORITHM = "HS256"

ID_LENGTH = 26
