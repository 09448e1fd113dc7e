import os

SECRET_KEY = os.getenv("SECRET_KEY", "")

STORE_BACKEND = os.getenv("STORE_BACKEND", "mysql")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "event_checkin"),
}

BASE_URL = os.getenv("BASE_URL", "")

QR_STORAGE = os.getenv("QR_STORAGE", "s3")
QR_LOCAL_DIR = os.getenv("QR_LOCAL_DIR", "qr_codes")

AWS_ACCESS_KEY_ID = os.getenv("AWS_ACCESS_KEY_ID", "")
AWS_SECRET_ACCESS_KEY = os.getenv("AWS_SECRET_ACCESS_KEY", "")
AWS_REGION = os.getenv("AWS_REGION", "")
AWS_BUCKET_NAME = os.getenv("AWS_BUCKET_NAME", "")

# No default password in production: login is refused until one is configured.
SCANNER_PASSWORD = os.getenv("SCANNER_PASSWORD", "")
SCANNER_PASSWORD_HASH = os.getenv("SCANNER_PASSWORD_HASH", "")
# Empty means scanner tokens are neither issued nor accepted.
JWT_SECRET = os.getenv("JWT_SECRET", "")
REQUIRE_SCANNER_AUTH = bool(int(os.getenv("REQUIRE_SCANNER_AUTH", "1")))

REQUIRED_FIELDS = os.getenv("REQUIRED_FIELDS", "")

EVENT_DATE = os.getenv("EVENT_DATE", "")
EVENT_UTC_OFFSET_MINUTES = int(os.getenv("EVENT_UTC_OFFSET_MINUTES", "330"))

PORT = int(os.getenv("PORT", "3000"))

DEBUG = False

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
