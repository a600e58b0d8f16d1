from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Sequence

from ..common.datetime_utils import Clock
from ..core.enums import PunchKind
from ..punches.model import PunchRecord
from ..settings.model import Settings
from .alert_repository import JourneyAlertRepository
from .calculator import live_worked_hours
from .formatting import format_live_hours

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class JourneyCompleteSignal:
    """Emitted once per date when the daily target is reached."""

    date: str
    worked_hours: float
    daily_hours: float

    @property
    def overtime_hours(self) -> float:
        return max(0.0, self.worked_hours - self.daily_hours)

    @property
    def message(self) -> str:
        text = f"Daily journey of {self.daily_hours:g}h complete! Total worked: {format_live_hours(self.worked_hours)}"
        if self.overtime_hours > 0:
            text += f", overtime: {format_live_hours(self.overtime_hours)}"
        return text

    def to_dict(self) -> dict:
        return {
            "date": self.date,
            "worked_hours": round(self.worked_hours, 2),
            "daily_hours": self.daily_hours,
            "overtime_hours": round(self.overtime_hours, 2),
            "message": self.message,
        }


class JourneyDetector:
    def __init__(self, alerts: JourneyAlertRepository):
        self._alerts = alerts

    def check(
        self,
        today_records: Sequence[PunchRecord],
        *,
        settings: Settings,
        now: datetime,
        clock: Clock,
    ) -> Optional[JourneyCompleteSignal]:
        if len(today_records) < 2:
            return None
        if not any(r.kind == PunchKind.START for r in today_records):
            return None

        worked = live_worked_hours(today_records, now=now, clock=clock)
        if worked < settings.daily_hours:
            return None

        today = clock.date_key(now)
        if self._alerts.has_alert(today):
            return None

        self._alerts.mark(today, now)
        signal = JourneyCompleteSignal(date=today, worked_hours=worked, daily_hours=settings.daily_hours)
        logger.info("Journey complete for %s: %.2fh worked", today, worked)
        return signal
