from __future__ import annotations

from typing import Callable

from .encoder import encode_png
from .storage import ImageStorage, qr_key


class QrService:
    """Use case: turn a registrant's scan URL into a stored QR image reference."""

    def __init__(self, storage: ImageStorage, *, encoder: Callable[[str], bytes] = encode_png):
        self._storage = storage
        self._encoder = encoder

    def publish(self, registrant_id: int, scan_url: str) -> str:
        png = self._encoder(scan_url)
        return self._storage.save(qr_key(registrant_id), png)
