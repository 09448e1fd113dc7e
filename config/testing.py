SECRET_KEY = "test-secret"

STORE_BACKEND = "memory"

DB_CONFIG = {
    "host": "localhost",
    "port": 3306,
    "user": "root",
    "password": "",
    "database": "event_checkin_test",
}

BASE_URL = "http://testserver"

QR_STORAGE = "inline"
QR_LOCAL_DIR = "qr_codes"

SCANNER_PASSWORD = "scanner-pass"
SCANNER_PASSWORD_HASH = ""
JWT_SECRET = "test-jwt-secret"
REQUIRE_SCANNER_AUTH = True

REQUIRED_FIELDS = ""

EVENT_DATE = ""
EVENT_UTC_OFFSET_MINUTES = 330

PORT = 3000

DEBUG = False
TESTING = True

AUTO_INIT_DB = False
