from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .auth.service import ScannerAuthService
from .checkin.service import CheckinService
from .core.enums import StoreBackend
from .database.connection import DatabaseConnection, DBConfig
from .qr.service import QrService
from .qr.storage import ImageStorage, build_image_storage
from .registrants.memory_registrant_repository import InMemoryRegistrantRepository
from .registrants.mysql_registrant_repository import MySQLRegistrantRepository
from .registrants.repository import RegistrantRepository
from .registrants.service import RegistrantService, RegistrationService
from .settings import AppSettings


@dataclass(frozen=True)
class Container:
    settings: AppSettings
    conn: Optional[DatabaseConnection]

    registrants_repo: RegistrantRepository
    image_storage: ImageStorage

    qr_service: QrService
    registration_service: RegistrationService
    registrant_service: RegistrantService
    checkin_service: CheckinService
    scanner_auth_service: ScannerAuthService


def build_container(
    settings: AppSettings,
    *,
    registrants_repo: Optional[RegistrantRepository] = None,
    image_storage: Optional[ImageStorage] = None,
) -> Container:
    conn: Optional[DatabaseConnection] = None
    if registrants_repo is None:
        if settings.store_backend is StoreBackend.MYSQL:
            conn = DatabaseConnection(DBConfig.from_mapping(settings.db_config))
            registrants_repo = MySQLRegistrantRepository(conn)
        else:
            registrants_repo = InMemoryRegistrantRepository()

    image_storage = image_storage or build_image_storage(settings.storage_config())

    qr_service = QrService(image_storage)
    registration_service = RegistrationService(
        registrants_repo,
        qr_service,
        base_url=settings.base_url,
        required_fields=settings.required_fields,
    )
    registrant_service = RegistrantService(registrants_repo)
    checkin_service = CheckinService(
        registrants_repo,
        event_date=settings.event_date,
        utc_offset_minutes=settings.event_utc_offset_minutes,
    )
    scanner_auth_service = ScannerAuthService(
        secret=settings.jwt_secret,
        password=settings.scanner_password,
        password_hash=settings.scanner_password_hash,
    )

    return Container(
        settings=settings,
        conn=conn,
        registrants_repo=registrants_repo,
        image_storage=image_storage,
        qr_service=qr_service,
        registration_service=registration_service,
        registrant_service=registrant_service,
        checkin_service=checkin_service,
        scanner_auth_service=scanner_auth_service,
    )
