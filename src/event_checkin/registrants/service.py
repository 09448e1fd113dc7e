from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any, Callable, Dict, Iterable, Mapping, Optional, Sequence, Tuple

from ..common.datetime_utils import parse_iso_datetime
from ..common.validators import is_blank, optional_text, parse_referred_by, parse_status, require_fields
from ..core.constants import MANUAL_CODE_MAX_ATTEMPTS
from ..core.exceptions import DuplicateManualCodeError, NotFoundError, StorageError, ValidationError
from ..qr.service import QrService
from .codes import generate_manual_code, normalize_manual_code
from .model import FIELD_KEYS, TEXT_KEYS, Registrant, RegistrantDraft, parse_registrant_id
from .repository import RegistrantRepository
from .zones import derive_zone_day2, normalize_zone

logger = logging.getLogger(__name__)

INVALID_ZONE_MESSAGE = "Invalid zoneDay1 (Example: AMW / AFZ)"

# Keys a client may overwrite through the update form.
UPDATABLE_KEYS: Tuple[str, ...] = TEXT_KEYS + (
    "zone",
    "serialNo",
    "zoneDay1",
    "referredBy",
    "gateStatus",
    "washroomStatus",
    "lastGateUpdate",
    "lastWashroomUpdate",
)


def parse_zone_day1(value: Any) -> Tuple[str, str]:
    """Return (zone_day1, zone_day2); blank input means no zone assigned."""
    if is_blank(value):
        return "", ""
    zone_day2 = derive_zone_day2(value)
    if not zone_day2:
        raise ValidationError(INVALID_ZONE_MESSAGE)
    return normalize_zone(value), zone_day2


@dataclass(frozen=True)
class RegistrationResult:
    registrant: Registrant
    scan_url: str


class RegistrationService:
    """Use case: register an attendee and issue their QR code."""

    def __init__(
        self,
        registrants: RegistrantRepository,
        qr: QrService,
        *,
        base_url: str,
        required_fields: Iterable[str] = (),
        code_generator: Callable[[], str] = generate_manual_code,
        max_code_attempts: int = MANUAL_CODE_MAX_ATTEMPTS,
    ):
        self._registrants = registrants
        self._qr = qr
        self._base_url = base_url.rstrip("/")
        self._required_fields = tuple(required_fields)
        self._code_generator = code_generator
        self._max_code_attempts = int(max_code_attempts)

    def scan_url_for(self, registrant_id: int) -> str:
        return f"{self._base_url}/scan/{registrant_id}"

    def _build_draft(self, payload: Mapping[str, Any], manual_code: str) -> RegistrantDraft:
        referred_by = parse_referred_by(payload.get("referredBy"))
        zone_day1, zone_day2 = parse_zone_day1(payload.get("zoneDay1"))
        serial_no = payload.get("serialNo")

        text = {FIELD_KEYS[k]: optional_text(payload.get(k)) for k in TEXT_KEYS}
        return RegistrantDraft(
            manual_code=manual_code,
            zone=optional_text(payload.get("zone")) or "",
            serial_no=str(serial_no).strip() if not is_blank(serial_no) else "",
            zone_day1=zone_day1,
            zone_day2=zone_day2,
            referred_by=referred_by,
            **text,
        )

    def _create_with_unique_code(self, payload: Mapping[str, Any]) -> Registrant:
        # Validation happens once, before any code is drawn.
        draft = self._build_draft(payload, manual_code="")
        for attempt in range(1, self._max_code_attempts + 1):
            candidate = replace(draft, manual_code=self._code_generator())
            try:
                return self._registrants.create(candidate)
            except DuplicateManualCodeError:
                logger.warning("Manual code collision on attempt %d, regenerating", attempt)
        raise RuntimeError("Could not allocate a unique manual code")

    def register(self, payload: Mapping[str, Any]) -> RegistrationResult:
        require_fields(payload, self._required_fields)
        registrant = self._create_with_unique_code(payload)
        scan_url = self.scan_url_for(registrant.registrant_id)

        # The record already exists; a failed QR delivery leaves qr_image_url empty.
        try:
            image_ref = self._qr.publish(registrant.registrant_id, scan_url)
        except StorageError:
            logger.exception("QR delivery failed for registrant %s", registrant.registrant_id)
        else:
            registrant = self._registrants.set_qr_image_url(registrant.registrant_id, image_ref) or registrant

        logger.info("Registered %s (code %s)", registrant.registrant_id, registrant.manual_code)
        return RegistrationResult(registrant=registrant, scan_url=scan_url)


class RegistrantService:
    """Use case: look up, edit and list registrants (admin/scanner side)."""

    def __init__(self, registrants: RegistrantRepository):
        self._registrants = registrants

    def get(self, registrant_id: Any) -> Registrant:
        parsed = parse_registrant_id(registrant_id)
        registrant = self._registrants.get_by_id(parsed) if parsed is not None else None
        if not registrant:
            raise NotFoundError("User not found")
        return registrant

    def list_all(self) -> Sequence[Registrant]:
        return self._registrants.list_newest_first()

    def _collect_changes(self, payload: Mapping[str, Any]) -> Dict[str, Any]:
        changes: Dict[str, Any] = {}

        if not is_blank(payload.get("zoneDay1")):
            changes["zone_day1"], changes["zone_day2"] = parse_zone_day1(payload["zoneDay1"])

        referred_by = parse_referred_by(payload.get("referredBy"))
        if referred_by is not None:
            changes["referred_by"] = referred_by

        for key in UPDATABLE_KEYS:
            value = payload.get(key)
            if key in ("zoneDay1", "referredBy") or is_blank(value):
                continue
            attr = FIELD_KEYS[key]
            if key in ("gateStatus", "washroomStatus"):
                changes[attr] = parse_status(value, key)
            elif key in ("lastGateUpdate", "lastWashroomUpdate"):
                changes[attr] = self._parse_timestamp(value, key)
            elif key == "serialNo":
                changes[attr] = str(value).strip()
            else:
                changes[attr] = str(value)
        return changes

    @staticmethod
    def _parse_timestamp(value: Any, key: str):
        try:
            return parse_iso_datetime(str(value))
        except ValueError:
            raise ValidationError(f"{key} must be an ISO 8601 timestamp")

    def update_by_manual_code(self, payload: Mapping[str, Any]) -> Registrant:
        """Overwrite the provided fields of the record owning ``manualCode``.

        The manual code itself is the lookup key and is never changed. Every value is
        validated before anything is written, so a rejected request leaves the record as is.
        """
        manual_code: Optional[Any] = payload.get("manualCode")
        registrant = (
            self._registrants.get_by_manual_code(normalize_manual_code(manual_code)) if not is_blank(manual_code) else None
        )
        if not registrant:
            raise NotFoundError("User not found")

        changes = self._collect_changes(payload)
        updated = self._registrants.update_fields(registrant.registrant_id, changes)
        if not updated:
            raise NotFoundError("User not found")
        return updated
