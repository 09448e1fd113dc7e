from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Callable, Dict, Mapping, Optional, Sequence

import mysql.connector
from mysql.connector import errorcode

from ..common.datetime_utils import now_utc
from ..core.enums import Checkpoint, CheckpointStatus
from ..core.exceptions import DuplicateManualCodeError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import STATUS_ATTR, Registrant, RegistrantDraft
from .repository import RegistrantRepository

# Registrant attribute -> column. Column names are never taken from user input.
COLUMNS: Dict[str, str] = {
    "manual_code": "manual_code",
    "name": "name",
    "phone": "phone",
    "gender": "gender",
    "aadhaar_number": "aadhaar_number",
    "address": "address",
    "car_voucher_number": "car_voucher_number",
    "car_number": "car_number",
    "zone": "zone",
    "serial_no": "serial_no",
    "zone_day1": "zone_day1",
    "zone_day2": "zone_day2",
    "referred_by": "referred_by",
    "gate_status": "gate_status",
    "washroom_status": "washroom_status",
    "last_gate_update": "last_gate_update",
    "last_washroom_update": "last_washroom_update",
    "qr_image_url": "qr_image_url",
}

_SELECT = """
    SELECT id, manual_code, name, phone, gender, aadhaar_number, address,
           car_voucher_number, car_number, zone, serial_no, zone_day1, zone_day2,
           referred_by, gate_status, washroom_status, last_gate_update,
           last_washroom_update, qr_image_url, created_at
    FROM registrants
"""


def _to_db(value: Any) -> Any:
    # DATETIME columns hold naive UTC.
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc).replace(tzinfo=None)
        return value
    if isinstance(value, CheckpointStatus):
        return value.value
    return value


def _from_db(value: Optional[datetime]) -> Optional[datetime]:
    if value is None:
        return None
    return value.replace(tzinfo=timezone.utc)


def _referred_by(value: Any):
    if value is None:
        return None
    number = float(value)
    return int(number) if number.is_integer() else number


def _row_to_registrant(row: Mapping[str, Any]) -> Registrant:
    return Registrant(
        registrant_id=int(row["id"]),
        manual_code=row["manual_code"],
        name=row.get("name"),
        phone=row.get("phone"),
        gender=row.get("gender"),
        aadhaar_number=row.get("aadhaar_number"),
        address=row.get("address"),
        car_voucher_number=row.get("car_voucher_number"),
        car_number=row.get("car_number"),
        zone=row.get("zone") or "",
        serial_no=row.get("serial_no") or "",
        zone_day1=row.get("zone_day1") or "",
        zone_day2=row.get("zone_day2") or "",
        referred_by=_referred_by(row.get("referred_by")),
        gate_status=CheckpointStatus(row["gate_status"]),
        washroom_status=CheckpointStatus(row["washroom_status"]),
        last_gate_update=_from_db(row.get("last_gate_update")),
        last_washroom_update=_from_db(row.get("last_washroom_update")),
        qr_image_url=row.get("qr_image_url"),
        created_at=_from_db(row.get("created_at")),
    )


class MySQLRegistrantRepository(RegistrantRepository):
    def __init__(self, conn_factory: DatabaseConnection, *, clock: Callable[[], datetime] = now_utc):
        self._conn_factory = conn_factory
        self._clock = clock

    def _select_one(self, cur, where: str, params: tuple) -> Optional[Registrant]:
        cur.execute(f"{_SELECT} WHERE {where}", params)
        row = fetchone(cur)
        return _row_to_registrant(row) if row else None

    def create(self, draft: RegistrantDraft) -> Registrant:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO registrants(
                        manual_code, name, phone, gender, aadhaar_number, address,
                        car_voucher_number, car_number, zone, serial_no, zone_day1,
                        zone_day2, referred_by, gate_status, washroom_status, created_at
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,'OUT','OUT',%s)
                    """,
                    (
                        draft.manual_code,
                        draft.name,
                        draft.phone,
                        draft.gender,
                        draft.aadhaar_number,
                        draft.address,
                        draft.car_voucher_number,
                        draft.car_number,
                        draft.zone,
                        draft.serial_no,
                        draft.zone_day1,
                        draft.zone_day2,
                        draft.referred_by,
                        _to_db(self._clock()),
                    ),
                )
                registrant = self._select_one(cur, "id=%s", (int(cur.lastrowid),))
        except mysql.connector.IntegrityError as e:
            if e.errno == errorcode.ER_DUP_ENTRY:
                raise DuplicateManualCodeError(draft.manual_code) from e
            raise
        if registrant is None:
            raise RuntimeError("Inserted registrant could not be read back")
        return registrant

    def get_by_id(self, registrant_id: int) -> Optional[Registrant]:
        with db_cursor(self._conn_factory) as (_, cur):
            return self._select_one(cur, "id=%s", (registrant_id,))

    def get_by_manual_code(self, manual_code: str) -> Optional[Registrant]:
        with db_cursor(self._conn_factory) as (_, cur):
            return self._select_one(cur, "manual_code=%s", (manual_code,))

    def toggle_checkpoint(self, registrant_id: int, checkpoint: Checkpoint, *, at: datetime) -> Optional[Registrant]:
        status_col, stamp_col = (COLUMNS[attr] for attr in STATUS_ATTR[checkpoint])
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                UPDATE registrants
                SET {status_col} = IF({status_col}='IN', 'OUT', 'IN'), {stamp_col}=%s
                WHERE id=%s
                """,
                (_to_db(at), registrant_id),
            )
            if cur.rowcount == 0:
                return None
            return self._select_one(cur, "id=%s", (registrant_id,))

    def update_fields(self, registrant_id: int, changes: Mapping[str, Any]) -> Optional[Registrant]:
        if not changes:
            return self.get_by_id(registrant_id)

        assignments = ", ".join(f"{COLUMNS[attr]}=%s" for attr in changes)
        params = tuple(_to_db(v) for v in changes.values()) + (registrant_id,)
        with db_cursor(self._conn_factory) as (_, cur):
            # rowcount is 0 when values are unchanged, so existence is checked by re-reading.
            cur.execute(f"UPDATE registrants SET {assignments} WHERE id=%s", params)
            return self._select_one(cur, "id=%s", (registrant_id,))

    def set_qr_image_url(self, registrant_id: int, qr_image_url: str) -> Optional[Registrant]:
        return self.update_fields(registrant_id, {"qr_image_url": qr_image_url})

    def list_newest_first(self) -> Sequence[Registrant]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} ORDER BY id DESC")
            return [_row_to_registrant(r) for r in fetchall(cur)]
