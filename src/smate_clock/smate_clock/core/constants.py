"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_REPORT_DAYS = 7
MAX_REPORT_DAYS = 3660
EARTH_RADIUS_M = 6_371_000.0
MS_PER_HOUR = 3_600_000

FALLBACK_EMAIL_DOMAIN = "auth.local"
DEFAULT_ROLE_CLAIM = "https://smate/role"

DEFAULT_STORE_TIMEOUT_SECONDS = 5
DEFAULT_FRONTEND_URL = "http://localhost:3000"
