from __future__ import annotations

import math
from typing import Any, Iterable, Mapping, Optional, Union

from ..core.enums import CheckpointStatus
from ..core.exceptions import ValidationError

Number = Union[int, float]


def require_non_empty(value: Any, field_name: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_fields(payload: Mapping[str, Any], fields: Iterable[str]) -> None:
    for field in fields:
        require_non_empty(payload.get(field), field)


def is_blank(value: Any) -> bool:
    return value is None or value == ""


def parse_referred_by(value: Any) -> Optional[Number]:
    """Accept any finite number, or a string that parses as one.

    Blank values mean "not referred". Integral values come back as int.
    """
    if is_blank(value):
        return None
    if isinstance(value, bool):
        raise ValidationError("Referred By must be a valid number")

    try:
        if isinstance(value, (int, float)):
            number = float(value)
        else:
            number = float(str(value).strip())
    except (ValueError, OverflowError):
        raise ValidationError("Referred By must be a valid number")

    if not math.isfinite(number):
        raise ValidationError("Referred By must be a valid number")
    return int(number) if number.is_integer() else number


def parse_status(value: Any, field_name: str) -> CheckpointStatus:
    try:
        return CheckpointStatus(str(value).strip().upper())
    except ValueError:
        raise ValidationError(f"{field_name} must be IN or OUT")


def optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value)
