"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

MANUAL_CODE_LENGTH = 6
MANUAL_CODE_MAX_ATTEMPTS = 5

SCANNER_TOKEN_TTL_HOURS = 12
JWT_ALGORITHM = "HS256"

# IST (+05:30)
DEFAULT_EVENT_UTC_OFFSET_MINUTES = 330

QR_KEY_PREFIX = "qr"
QR_CONTENT_TYPE = "image/png"
