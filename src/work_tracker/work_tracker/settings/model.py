from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from ..common.validators import is_valid_date_key
from ..core.constants import DEFAULT_DAILY_HOURS, DEFAULT_WEEKLY_HOURS


def _hours_to_minutes(value: Any, default_hours: float) -> int:
    try:
        hours = float(value)
    except (TypeError, ValueError):
        hours = default_hours
    if hours <= 0:
        hours = default_hours
    return int(round(hours * 60))


@dataclass(frozen=True)
class Settings:
    """User configuration for targets, holidays and display preferences."""

    daily_target_minutes: int = DEFAULT_DAILY_HOURS * 60
    weekly_target_minutes: int = DEFAULT_WEEKLY_HOURS * 60
    holidays: frozenset[str] = field(default_factory=frozenset)
    require_justification_prompt: bool = True
    timezone: Optional[str] = None

    @property
    def daily_hours(self) -> float:
        return self.daily_target_minutes / 60

    @property
    def weekly_hours(self) -> float:
        return self.weekly_target_minutes / 60

    def is_holiday(self, date_key: str) -> bool:
        return date_key in self.holidays

    def to_json(self) -> dict:
        return {
            "dailyHours": self.daily_hours,
            "weeklyHours": self.weekly_hours,
            "holidays": sorted(self.holidays),
            "showJustificationPopup": self.require_justification_prompt,
            "timeZone": self.timezone,
        }

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "Settings":
        """Stored values win over defaults; unusable values fall back to them."""
        holidays = data.get("holidays") or []
        if not isinstance(holidays, (list, tuple)):
            holidays = []
        return cls(
            daily_target_minutes=_hours_to_minutes(data.get("dailyHours"), DEFAULT_DAILY_HOURS),
            weekly_target_minutes=_hours_to_minutes(data.get("weeklyHours"), DEFAULT_WEEKLY_HOURS),
            holidays=frozenset(str(h).strip() for h in holidays if is_valid_date_key(str(h).strip())),
            require_justification_prompt=bool(data.get("showJustificationPopup", True)),
            timezone=(data.get("timeZone") or None),
        )
