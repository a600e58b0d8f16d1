from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from ..core.enums import Period
from ..history.query import group_by_date
from ..punches.model import PunchRecord
from ..settings.model import Settings
from .calculator import worked_minutes
from .factory import StandardPolicyFactory
from .formatting import format_hours_minutes


@dataclass(frozen=True)
class Statistics:
    period: Period
    total_minutes: int
    standard_minutes: int
    overtime_minutes: int
    work_days: int

    @property
    def total_label(self) -> str:
        return format_hours_minutes(self.total_minutes)

    @property
    def overtime_label(self) -> str:
        return format_hours_minutes(self.overtime_minutes)

    def to_dict(self) -> dict:
        return {
            "period": self.period.value,
            "total_minutes": self.total_minutes,
            "standard_minutes": self.standard_minutes,
            "overtime_minutes": self.overtime_minutes,
            "work_days": self.work_days,
            "total_hours": self.total_label,
            "overtime": self.overtime_label,
        }


class StatisticsCalculator:
    def __init__(self, *, policy_factory: Optional[StandardPolicyFactory] = None):
        self._factory = policy_factory or StandardPolicyFactory()

    def calculate(self, records: Iterable[PunchRecord], period: Period, settings: Settings) -> Statistics:
        grouped = group_by_date(records)
        total = sum(worked_minutes(day) for day in grouped.values())

        policy = self._factory.for_period(period)
        standard = policy.standard_minutes(grouped.keys(), settings)
        return Statistics(
            period=period,
            total_minutes=total,
            standard_minutes=standard,
            overtime_minutes=max(0, total - standard),
            work_days=len(grouped),
        )
