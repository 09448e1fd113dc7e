from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Role claim carried by issued tokens."""

    SCANNER = "scanner"


class CheckpointStatus(str, Enum):
    """Presence at a checkpoint. Scans only ever flip between the two values."""

    IN = "IN"
    OUT = "OUT"

    def flipped(self) -> "CheckpointStatus":
        return CheckpointStatus.OUT if self is CheckpointStatus.IN else CheckpointStatus.IN


class Checkpoint(str, Enum):
    GATE = "gate"
    WASHROOM = "washroom"

    @property
    def label(self) -> str:
        return self.value.capitalize()


class StoreBackend(str, Enum):
    MYSQL = "mysql"
    MEMORY = "memory"


class QrStorageKind(str, Enum):
    S3 = "s3"
    LOCAL = "local"
    INLINE = "inline"
