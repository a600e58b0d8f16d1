from __future__ import annotations

from typing import Collection

from ...settings.model import Settings
from .base import StandardMinutesPolicy


class DailyTargetPolicy(StandardMinutesPolicy):
    """One daily target per worked date; holidays expect nothing."""

    def standard_minutes(self, date_keys: Collection[str], settings: Settings) -> int:
        workdays = sum(1 for d in set(date_keys) if not settings.is_holiday(d))
        return workdays * settings.daily_target_minutes
