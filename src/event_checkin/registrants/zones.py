"""Day-1 to day-2 zone derivation.

A day-1 zone looks like ``A`` + gender (``M``/``F``) + block (``W``..``Z``).
The day-2 zone keeps the gender and swaps the block through a fixed table.
"""
from __future__ import annotations

from typing import Any, Optional

DAY2_SUFFIX = {"W": "Q", "X": "R", "Y": "S", "Z": "T"}


def normalize_zone(value: str) -> str:
    return value.strip().upper()


def derive_zone_day2(zone_day1: Any) -> Optional[str]:
    """Return the day-2 zone for ``zone_day1`` or None when it has the wrong shape."""
    if not isinstance(zone_day1, str):
        return None

    value = normalize_zone(zone_day1)
    if len(value) != 3 or value[0] != "A" or value[1] not in ("M", "F"):
        return None

    suffix = DAY2_SUFFIX.get(value[2])
    if not suffix:
        return None
    return f"B{value[1]}{suffix}"
