from __future__ import annotations

import re
from datetime import datetime
from typing import Optional

from ..core.exceptions import ValidationError

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_TIME_RE = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")


def is_valid_date_key(value: object) -> bool:
    return bool(_DATE_RE.match(str(value)))


def is_valid_time(value: object) -> bool:
    return bool(_TIME_RE.match(str(value)))


def normalize_time_str(value: Optional[str]) -> Optional[str]:
    """Clean user input into 'HH:MM' ('8:5' -> '08:05', '0830' -> '08:30')."""
    if not value:
        return None
    text = str(value).strip().replace(".", ":")
    try:
        if ":" in text:
            parts = text.split(":")
            h, m = int(parts[0]), int(parts[1])
        elif len(text) == 4:
            h, m = int(text[:2]), int(text[2:])
        elif len(text) == 3:
            h, m = int(text[:1]), int(text[1:])
        elif len(text) <= 2:
            h, m = int(text), 0
        else:
            return None
    except ValueError:
        return None
    if h > 23 or m > 59:
        return None
    return f"{h:02d}:{m:02d}"


def require_time(value: Optional[str], field_name: str) -> str:
    normalized = normalize_time_str(value)
    if normalized is None:
        raise ValidationError(f"{field_name} must be a time in HH:MM format")
    return normalized


def require_date_key(value: Optional[str], field_name: str) -> str:
    text = (value or "").strip()
    if not is_valid_date_key(text):
        raise ValidationError(f"{field_name} must be a date in YYYY-MM-DD format")
    try:
        datetime.strptime(text, "%Y-%m-%d")
    except ValueError:
        raise ValidationError(f"{field_name} is not a valid calendar date")
    return text


def require_positive(value: object, field_name: str) -> float:
    try:
        number = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number")
    if number <= 0:
        raise ValidationError(f"{field_name} must be greater than zero")
    return number


def clean_text(value: Optional[str]) -> Optional[str]:
    return (value or "").strip() or None
