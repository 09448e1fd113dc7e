from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, Mapping, Optional, Tuple

from .common.datetime_utils import parse_iso_date
from .core.constants import DEFAULT_EVENT_UTC_OFFSET_MINUTES
from .core.enums import QrStorageKind, StoreBackend


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return bool(value)


def _as_fields(value: Any) -> Tuple[str, ...]:
    if not value:
        return ()
    if isinstance(value, str):
        value = value.split(",")
    return tuple(f.strip() for f in value if f and f.strip())


def _as_date(value: Any) -> Optional[date]:
    if not value:
        return None
    if isinstance(value, date):
        return value
    return parse_iso_date(str(value).strip())


@dataclass(frozen=True)
class AppSettings:
    """Typed view over the Flask config assembled from the settings module."""

    secret_key: str
    debug: bool = False
    store_backend: StoreBackend = StoreBackend.MYSQL
    db_config: Dict[str, Any] = field(default_factory=dict)
    auto_init_db: bool = False
    base_url: str = "http://localhost:3000"
    qr_storage: QrStorageKind = QrStorageKind.LOCAL
    qr_local_dir: str = "qr_codes"
    aws_access_key_id: str = ""
    aws_secret_access_key: str = ""
    aws_region: str = ""
    aws_bucket_name: str = ""
    scanner_password: str = ""
    scanner_password_hash: str = ""
    jwt_secret: str = ""
    require_scanner_auth: bool = True
    required_fields: Tuple[str, ...] = ()
    event_date: Optional[date] = None
    event_utc_offset_minutes: int = DEFAULT_EVENT_UTC_OFFSET_MINUTES
    port: int = 3000

    @classmethod
    def from_mapping(cls, config: Mapping[str, Any]) -> "AppSettings":
        return cls(
            secret_key=str(config.get("SECRET_KEY") or ""),
            debug=_as_bool(config.get("DEBUG", False)),
            store_backend=StoreBackend(str(config.get("STORE_BACKEND", StoreBackend.MYSQL.value)).lower()),
            db_config=dict(config.get("DB_CONFIG") or {}),
            auto_init_db=_as_bool(config.get("AUTO_INIT_DB", False)),
            base_url=str(config.get("BASE_URL") or "http://localhost:3000").rstrip("/"),
            qr_storage=QrStorageKind(str(config.get("QR_STORAGE", QrStorageKind.LOCAL.value)).lower()),
            qr_local_dir=str(config.get("QR_LOCAL_DIR") or "qr_codes"),
            aws_access_key_id=str(config.get("AWS_ACCESS_KEY_ID") or ""),
            aws_secret_access_key=str(config.get("AWS_SECRET_ACCESS_KEY") or ""),
            aws_region=str(config.get("AWS_REGION") or ""),
            aws_bucket_name=str(config.get("AWS_BUCKET_NAME") or ""),
            scanner_password=str(config.get("SCANNER_PASSWORD") or ""),
            scanner_password_hash=str(config.get("SCANNER_PASSWORD_HASH") or ""),
            jwt_secret=str(config.get("JWT_SECRET") or ""),
            require_scanner_auth=_as_bool(config.get("REQUIRE_SCANNER_AUTH", True)),
            required_fields=_as_fields(config.get("REQUIRED_FIELDS")),
            event_date=_as_date(config.get("EVENT_DATE")),
            event_utc_offset_minutes=int(config.get("EVENT_UTC_OFFSET_MINUTES", DEFAULT_EVENT_UTC_OFFSET_MINUTES)),
            port=int(config.get("PORT", 3000)),
        )

    def storage_config(self) -> Dict[str, Any]:
        return {
            "QR_STORAGE": self.qr_storage.value,
            "QR_LOCAL_DIR": self.qr_local_dir,
            "BASE_URL": self.base_url,
            "AWS_ACCESS_KEY_ID": self.aws_access_key_id,
            "AWS_SECRET_ACCESS_KEY": self.aws_secret_access_key,
            "AWS_REGION": self.aws_region,
            "AWS_BUCKET_NAME": self.aws_bucket_name,
        }
