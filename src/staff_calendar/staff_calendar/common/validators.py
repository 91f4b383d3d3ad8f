from __future__ import annotations

from typing import Optional

from ..core.exceptions import ValidationError


def require_min_length(value: str, field_name: str, min_len: int) -> str:
    if value is None or len(str(value).strip()) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return str(value).strip()


def require_month(month: int) -> int:
    try:
        m = int(month)
    except (TypeError, ValueError):
        raise ValidationError("Month must be between 1 and 12")
    if m < 1 or m > 12:
        raise ValidationError("Month must be between 1 and 12")
    return m


def require_year(year: int) -> int:
    try:
        y = int(year)
    except (TypeError, ValueError):
        raise ValidationError("Year is not valid")
    if y < 1:
        raise ValidationError("Year is not valid")
    return y


def optional_text(value: Optional[str]) -> Optional[str]:
    v = str(value).strip() if value is not None else ""
    return v or None


def require_id(value, field_name: str) -> int:
    if value is None or value == "":
        raise ValidationError(f"{field_name} is required")
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be an integer")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an integer")
