from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional, Union

from ..common.datetime_utils import to_iso
from ..core.enums import Checkpoint, CheckpointStatus

Number = Union[int, float]

# JSON key -> Registrant attribute
FIELD_KEYS: Dict[str, str] = {
    "name": "name",
    "phone": "phone",
    "gender": "gender",
    "aadhaarNumber": "aadhaar_number",
    "address": "address",
    "carVoucherNumber": "car_voucher_number",
    "carNumber": "car_number",
    "zone": "zone",
    "serialNo": "serial_no",
    "zoneDay1": "zone_day1",
    "zoneDay2": "zone_day2",
    "referredBy": "referred_by",
    "manualCode": "manual_code",
    "gateStatus": "gate_status",
    "washroomStatus": "washroom_status",
    "lastGateUpdate": "last_gate_update",
    "lastWashroomUpdate": "last_washroom_update",
    "qrImageUrl": "qr_image_url",
}

TEXT_KEYS = ("name", "phone", "gender", "aadhaarNumber", "address", "carVoucherNumber", "carNumber")

STATUS_ATTR = {
    Checkpoint.GATE: ("gate_status", "last_gate_update"),
    Checkpoint.WASHROOM: ("washroom_status", "last_washroom_update"),
}


def parse_registrant_id(value: Any) -> Optional[int]:
    """Ids arrive as path segments; anything non-numeric simply matches nothing."""
    try:
        registrant_id = int(str(value).strip())
    except (TypeError, ValueError):
        return None
    return registrant_id if registrant_id > 0 else None


@dataclass(frozen=True)
class RegistrantDraft:
    """Validated input for a new registrant, before the store assigns an id."""

    manual_code: str
    name: Optional[str] = None
    phone: Optional[str] = None
    gender: Optional[str] = None
    aadhaar_number: Optional[str] = None
    address: Optional[str] = None
    car_voucher_number: Optional[str] = None
    car_number: Optional[str] = None
    zone: str = ""
    serial_no: str = ""
    zone_day1: str = ""
    zone_day2: str = ""
    referred_by: Optional[Number] = None


@dataclass(frozen=True)
class Registrant:
    """Domain entity: an event registrant and their checkpoint presence."""

    registrant_id: int
    manual_code: str
    name: Optional[str] = None
    phone: Optional[str] = None
    gender: Optional[str] = None
    aadhaar_number: Optional[str] = None
    address: Optional[str] = None
    car_voucher_number: Optional[str] = None
    car_number: Optional[str] = None
    zone: str = ""
    serial_no: str = ""
    zone_day1: str = ""
    zone_day2: str = ""
    referred_by: Optional[Number] = None
    gate_status: CheckpointStatus = CheckpointStatus.OUT
    washroom_status: CheckpointStatus = CheckpointStatus.OUT
    last_gate_update: Optional[datetime] = None
    last_washroom_update: Optional[datetime] = None
    qr_image_url: Optional[str] = None
    created_at: Optional[datetime] = None

    def status_of(self, checkpoint: Checkpoint) -> CheckpointStatus:
        return getattr(self, STATUS_ATTR[checkpoint][0])

    def to_public(self) -> Dict[str, Any]:
        """Fields echoed back to registration and scanning clients."""
        return {
            "id": self.registrant_id,
            "name": self.name,
            "phone": self.phone,
            "gender": self.gender,
            "aadhaarNumber": self.aadhaar_number,
            "address": self.address,
            "carVoucherNumber": self.car_voucher_number,
            "carNumber": self.car_number,
            "zone": self.zone,
            "serialNo": self.serial_no,
            "zoneDay1": self.zone_day1,
            "zoneDay2": self.zone_day2,
            "referredBy": self.referred_by,
            "manualCode": self.manual_code,
            "gateStatus": self.gate_status.value,
            "washroomStatus": self.washroom_status.value,
        }

    def to_dict(self) -> Dict[str, Any]:
        """Full record, as listed to admins."""
        data = self.to_public()
        data.update(
            {
                "lastGateUpdate": to_iso(self.last_gate_update),
                "lastWashroomUpdate": to_iso(self.last_washroom_update),
                "qrImageUrl": self.qr_image_url,
                "createdAt": to_iso(self.created_at),
            }
        )
        return data

    def to_prefill(self) -> Dict[str, Any]:
        """Editable fields used to pre-fill the update form; statuses are left out."""
        return {
            "name": self.name,
            "phone": self.phone,
            "gender": self.gender,
            "aadhaarNumber": self.aadhaar_number,
            "address": self.address,
            "carVoucherNumber": self.car_voucher_number,
            "carNumber": self.car_number,
            "serialNo": self.serial_no,
            "zoneDay1": self.zone_day1,
            "zoneDay2": self.zone_day2,
            "referredBy": self.referred_by,
            "manualCode": self.manual_code,
        }
