from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Optional

from ..common.datetime_utils import now_utc, today_at_offset
from ..core.constants import DEFAULT_EVENT_UTC_OFFSET_MINUTES
from ..core.enums import Checkpoint
from ..core.exceptions import EventDayError, NotFoundError
from ..registrants.codes import normalize_manual_code
from ..registrants.model import Registrant, parse_registrant_id
from ..registrants.repository import RegistrantRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScanOutcome:
    registrant: Registrant
    checkpoint: Optional[Checkpoint]
    time: datetime

    @property
    def message(self) -> str:
        if self.checkpoint is None:
            return "No checkpoint updated"
        return f"{self.checkpoint.label} scan successful"


def parse_checkpoint(action: Any) -> Optional[Checkpoint]:
    """Unknown actions map to None: the scan then succeeds without changing anything."""
    try:
        return Checkpoint(action)
    except ValueError:
        return None


class CheckinService:
    """Use case: toggle a registrant's presence at the gate or washroom.

    Lookups go by QR id or by manual code; both paths share the same toggle rules.
    """

    def __init__(
        self,
        registrants: RegistrantRepository,
        *,
        event_date: Optional[date] = None,
        utc_offset_minutes: int = DEFAULT_EVENT_UTC_OFFSET_MINUTES,
    ):
        self._registrants = registrants
        self._event_date = event_date
        self._utc_offset_minutes = int(utc_offset_minutes)

    def ensure_event_day(self, *, now: Optional[datetime] = None) -> None:
        if self._event_date is None:
            return
        today = today_at_offset(self._utc_offset_minutes, now=now)
        if today != self._event_date:
            logger.info("Scan rejected: today=%s event_date=%s", today, self._event_date)
            raise EventDayError("QR scanning will be active only on event day")

    def _apply(self, registrant: Registrant, action: Any, now: datetime) -> ScanOutcome:
        checkpoint = parse_checkpoint(action)
        if checkpoint is not None:
            toggled = self._registrants.toggle_checkpoint(registrant.registrant_id, checkpoint, at=now)
            if toggled is None:
                raise NotFoundError("User not found")
            registrant = toggled
        return ScanOutcome(registrant=registrant, checkpoint=checkpoint, time=now)

    def scan_by_id(self, registrant_id: Any, action: Any, *, now: Optional[datetime] = None) -> ScanOutcome:
        now = now or now_utc()
        self.ensure_event_day(now=now)

        parsed = parse_registrant_id(registrant_id)
        registrant = self._registrants.get_by_id(parsed) if parsed is not None else None
        if not registrant:
            raise NotFoundError("User not found")
        return self._apply(registrant, action, now)

    def scan_by_manual_code(self, manual_code: Any, action: Any, *, now: Optional[datetime] = None) -> ScanOutcome:
        now = now or now_utc()
        self.ensure_event_day(now=now)

        registrant = self._registrants.get_by_manual_code(normalize_manual_code(manual_code)) if manual_code else None
        if not registrant:
            raise NotFoundError("Invalid manual code")
        return self._apply(registrant, action, now)
