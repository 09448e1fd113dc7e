from __future__ import annotations

import secrets
import string
from random import Random
from typing import Optional

from ..core.constants import MANUAL_CODE_LENGTH

MANUAL_CODE_ALPHABET = string.ascii_uppercase + string.digits

_system_random = secrets.SystemRandom()


def generate_manual_code(length: int = MANUAL_CODE_LENGTH, *, rng: Optional[Random] = None) -> str:
    """Short upper-case code typed by staff when a QR code cannot be scanned."""
    rng = rng or _system_random
    return "".join(rng.choice(MANUAL_CODE_ALPHABET) for _ in range(length))


def normalize_manual_code(value) -> str:
    """Codes are typed by hand at the desk; tolerate case and surrounding spaces."""
    return str(value).strip().upper()
