from __future__ import annotations

from datetime import datetime
from typing import Any, Mapping, Optional, Protocol, Sequence

from ..core.enums import Checkpoint
from .model import Registrant, RegistrantDraft


class RegistrantRepository(Protocol):
    """Repository interface for Registrant.

    Note (DIP): services depend on this interface, not on a concrete store.
    Every method that targets a single record returns None when it does not exist.
    """

    def create(self, draft: RegistrantDraft) -> Registrant:
        """Persist a new record. Raises DuplicateManualCodeError if the code is taken."""

        raise NotImplementedError

    def get_by_id(self, registrant_id: int) -> Optional[Registrant]:
        raise NotImplementedError

    def get_by_manual_code(self, manual_code: str) -> Optional[Registrant]:
        raise NotImplementedError

    def toggle_checkpoint(self, registrant_id: int, checkpoint: Checkpoint, *, at: datetime) -> Optional[Registrant]:
        """Flip IN<->OUT and stamp ``at`` in a single atomic step."""

        raise NotImplementedError

    def update_fields(self, registrant_id: int, changes: Mapping[str, Any]) -> Optional[Registrant]:
        """Overwrite Registrant attributes named in ``changes``."""

        raise NotImplementedError

    def set_qr_image_url(self, registrant_id: int, qr_image_url: str) -> Optional[Registrant]:
        raise NotImplementedError

    def list_newest_first(self) -> Sequence[Registrant]:
        raise NotImplementedError
