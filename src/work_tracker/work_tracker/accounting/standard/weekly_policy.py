from __future__ import annotations

from typing import Collection

from ...settings.model import Settings
from .base import StandardMinutesPolicy


class WeeklyTargetPolicy(StandardMinutesPolicy):
    """Weekly target minus one daily target per holiday among the dates, not below 0."""

    def standard_minutes(self, date_keys: Collection[str], settings: Settings) -> int:
        holidays = sum(1 for d in set(date_keys) if settings.is_holiday(d))
        return max(0, settings.weekly_target_minutes - holidays * settings.daily_target_minutes)
