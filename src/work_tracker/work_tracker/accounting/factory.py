from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import Period
from .standard.base import StandardMinutesPolicy
from .standard.daily_policy import DailyTargetPolicy
from .standard.weekly_policy import WeeklyTargetPolicy


@dataclass
class StandardPolicyFactory:
    """Factory Pattern: choose the standard-minutes rule for a period."""

    def for_period(self, period: Period) -> StandardMinutesPolicy:
        if period == Period.WEEK:
            return WeeklyTargetPolicy()
        return DailyTargetPolicy()
