from __future__ import annotations

import threading
from dataclasses import asdict, replace
from datetime import datetime
from typing import Any, Callable, Dict, Mapping, Optional, Sequence

from ..common.datetime_utils import now_utc
from ..core.enums import Checkpoint
from ..core.exceptions import DuplicateManualCodeError
from .model import STATUS_ATTR, Registrant, RegistrantDraft
from .repository import RegistrantRepository


class InMemoryRegistrantRepository(RegistrantRepository):
    """Process-local store used by tests and the no-database deployment mode.

    Records live in an id -> Registrant map with a manual code -> id index.
    """

    def __init__(self, *, clock: Callable[[], datetime] = now_utc):
        self._lock = threading.Lock()
        self._by_id: Dict[int, Registrant] = {}
        self._id_by_code: Dict[str, int] = {}
        self._next_id = 1
        self._clock = clock

    def create(self, draft: RegistrantDraft) -> Registrant:
        with self._lock:
            if draft.manual_code in self._id_by_code:
                raise DuplicateManualCodeError(draft.manual_code)

            registrant = Registrant(registrant_id=self._next_id, created_at=self._clock(), **asdict(draft))
            self._by_id[registrant.registrant_id] = registrant
            self._id_by_code[registrant.manual_code] = registrant.registrant_id
            self._next_id += 1
            return registrant

    def get_by_id(self, registrant_id: int) -> Optional[Registrant]:
        with self._lock:
            return self._by_id.get(registrant_id)

    def get_by_manual_code(self, manual_code: str) -> Optional[Registrant]:
        with self._lock:
            registrant_id = self._id_by_code.get(manual_code)
            return self._by_id.get(registrant_id) if registrant_id is not None else None

    def toggle_checkpoint(self, registrant_id: int, checkpoint: Checkpoint, *, at: datetime) -> Optional[Registrant]:
        status_attr, stamp_attr = STATUS_ATTR[checkpoint]
        with self._lock:
            current = self._by_id.get(registrant_id)
            if current is None:
                return None
            updated = replace(current, **{status_attr: current.status_of(checkpoint).flipped(), stamp_attr: at})
            self._by_id[registrant_id] = updated
            return updated

    def update_fields(self, registrant_id: int, changes: Mapping[str, Any]) -> Optional[Registrant]:
        with self._lock:
            current = self._by_id.get(registrant_id)
            if current is None:
                return None
            updated = replace(current, **dict(changes))
            self._by_id[registrant_id] = updated
            return updated

    def set_qr_image_url(self, registrant_id: int, qr_image_url: str) -> Optional[Registrant]:
        return self.update_fields(registrant_id, {"qr_image_url": qr_image_url})

    def list_newest_first(self) -> Sequence[Registrant]:
        with self._lock:
            return [self._by_id[k] for k in sorted(self._by_id, reverse=True)]
