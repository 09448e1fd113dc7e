import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

# "mysql" or "memory" (no database, records are lost on restart)
STORE_BACKEND = os.getenv("STORE_BACKEND", "mysql")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "event_checkin"),
}

# Base URL embedded in QR codes: <BASE_URL>/scan/<id>
BASE_URL = os.getenv("BASE_URL", "http://localhost:3000")

# "s3", "local" or "inline"
QR_STORAGE = os.getenv("QR_STORAGE", "local")
QR_LOCAL_DIR = os.getenv("QR_LOCAL_DIR", "qr_codes")

AWS_ACCESS_KEY_ID = os.getenv("AWS_ACCESS_KEY_ID", "")
AWS_SECRET_ACCESS_KEY = os.getenv("AWS_SECRET_ACCESS_KEY", "")
AWS_REGION = os.getenv("AWS_REGION", "")
AWS_BUCKET_NAME = os.getenv("AWS_BUCKET_NAME", "")

SCANNER_PASSWORD = os.getenv("SCANNER_PASSWORD", "")
SCANNER_PASSWORD_HASH = os.getenv("SCANNER_PASSWORD_HASH", "")
JWT_SECRET = os.getenv("JWT_SECRET", "")
REQUIRE_SCANNER_AUTH = bool(int(os.getenv("REQUIRE_SCANNER_AUTH", "1")))

# Comma separated JSON keys, e.g. "name,phone,gender,aadhaarNumber"
REQUIRED_FIELDS = os.getenv("REQUIRED_FIELDS", "")

# YYYY-MM-DD; empty disables the event-day restriction
EVENT_DATE = os.getenv("EVENT_DATE", "")
EVENT_UTC_OFFSET_MINUTES = int(os.getenv("EVENT_UTC_OFFSET_MINUTES", "330"))

PORT = int(os.getenv("PORT", "3000"))

DEBUG = True

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
