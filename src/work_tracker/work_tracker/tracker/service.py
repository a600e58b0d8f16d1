from __future__ import annotations

import json
import logging
import random
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Mapping, Optional, Union

from ..accounting.alert_repository import JourneyAlertRepository
from ..accounting.calculator import (
    allowed_actions,
    day_status,
    live_worked_hours,
    needs_justification,
    progress_level,
    worked_minutes,
)
from ..accounting.formatting import format_hours_minutes, format_live_hours
from ..accounting.journey import JourneyCompleteSignal, JourneyDetector
from ..accounting.statistics import Statistics, StatisticsCalculator
from ..common.datetime_utils import Clock, format_date
from ..common.validators import require_date_key, require_time
from ..core.constants import DEFAULT_PAGE_SIZE, EXPORT_FILENAME_TEMPLATE
from ..core.enums import Period, ProgressLevel, PunchKind, WorkStatus
from ..core.exceptions import DataImportError, ValidationError
from ..history.query import HistoryPage, filter_by_period, group_by_date, paginate
from ..history.summary import DaySummary
from ..punches.event_log import EventLog
from ..punches.model import PunchRecord
from ..settings.model import Settings
from ..settings.service import SettingsService

logger = logging.getLogger(__name__)

Confirm = Callable[[str], bool]


@dataclass(frozen=True)
class PunchOutcome:
    record: PunchRecord
    justification_suggested: bool
    journey: Optional[JourneyCompleteSignal] = None


@dataclass(frozen=True)
class DayStatus:
    date: str
    status: WorkStatus
    worked_minutes: int
    live_worked_hours: float
    progress: ProgressLevel
    allowed_actions: frozenset[PunchKind]
    record_count: int

    def to_dict(self) -> dict:
        return {
            "date": self.date,
            "status": self.status.value,
            "worked_minutes": self.worked_minutes,
            "worked_hours": format_hours_minutes(self.worked_minutes),
            "live_worked_hours": round(self.live_worked_hours, 2),
            "live_worked_label": format_live_hours(self.live_worked_hours),
            "progress": self.progress.value,
            "allowed_actions": sorted(k.value for k in self.allowed_actions),
            "record_count": self.record_count,
        }


@dataclass(frozen=True)
class HistoryView:
    page: HistoryPage
    days: list[DaySummary]

    def to_dict(self) -> dict:
        return {
            "page": self.page.page,
            "page_size": self.page.page_size,
            "total_pages": self.page.total_pages,
            "total_days": self.page.total_days,
            "first_index": self.page.first_index,
            "last_index": self.page.last_index,
            "has_previous": self.page.has_previous,
            "has_next": self.page.has_next,
            "days": [d.to_dict() for d in self.days],
        }


@dataclass(frozen=True)
class RefreshResult:
    now: datetime
    status: DayStatus
    journey: Optional[JourneyCompleteSignal] = None


@dataclass(frozen=True)
class ExportFile:
    filename: str
    content: str


class TrackerService:
    """Commands and queries the front end calls.

    Mutations go through the event log (which persists immediately); queries
    recompute from the log on every call.
    """

    def __init__(
        self,
        event_log: EventLog,
        settings: SettingsService,
        alerts: JourneyAlertRepository,
        *,
        clock: Optional[Clock] = None,
        statistics: Optional[StatisticsCalculator] = None,
        page_size: int = DEFAULT_PAGE_SIZE,
        rng: Optional[random.Random] = None,
    ):
        self._log = event_log
        self._settings = settings
        self._journey = JourneyDetector(alerts)
        self._base_clock = clock or Clock()
        self._statistics = statistics or StatisticsCalculator()
        self._page_size = int(page_size)
        self._rng = rng or random.Random()

    def _clock(self) -> Clock:
        return self._base_clock.with_timezone(self._settings.timezone())

    def _next_id(self, clock: Clock) -> int:
        base = int(clock.now().timestamp() * 1000)
        taken = self._log.ids()
        candidate = base + self._rng.randrange(1000)
        while candidate in taken:
            candidate += 1
        return candidate

    @staticmethod
    def _parse_kind(kind: Union[PunchKind, str]) -> PunchKind:
        try:
            return PunchKind(kind)
        except ValueError:
            raise ValidationError(f"Invalid punch type: {kind}")

    def effective_instant(self, manual_time: Optional[str] = None) -> datetime:
        """Now, or today at ``manual_time`` when the user overrides the clock."""
        clock = self._clock()
        now = clock.now()
        if not manual_time:
            return now
        return clock.combine(clock.date_key(now), require_time(manual_time, "manual time"))

    def register_punch(self, kind: Union[PunchKind, str], effective_instant: Optional[datetime] = None) -> PunchOutcome:
        kind = self._parse_kind(kind)
        clock = self._clock()
        instant = clock.to_local(effective_instant) if effective_instant else clock.now()

        record = PunchRecord.create(punch_id=self._next_id(clock), kind=kind, instant=instant, clock=clock)
        self._log.append(record)

        settings = self._settings.current
        suggest = settings.require_justification_prompt and needs_justification(instant, settings, clock)
        return PunchOutcome(record=record, justification_suggested=suggest, journey=self._check_journey(clock))

    def edit_justification_and_time(
        self,
        punch_id: int,
        text: Optional[str],
        new_time: Optional[str] = None,
        new_date: Optional[str] = None,
    ) -> PunchRecord:
        return self._log.update(int(punch_id), justification=text, new_time=new_time, new_date=new_date)

    def delete_record(self, punch_id: int, confirm: Optional[Confirm] = None) -> bool:
        if confirm is not None and not confirm("Are you sure you want to delete this record?"):
            return False
        return self._log.remove(int(punch_id))

    def _check_journey(self, clock: Clock, now: Optional[datetime] = None) -> Optional[JourneyCompleteSignal]:
        now = now or clock.now()
        today_records = self._log.records_for_date(clock.date_key(now))
        return self._journey.check(today_records, settings=self._settings.current, now=now, clock=clock)

    def get_status(self, date: Optional[str] = None, *, now: Optional[datetime] = None) -> DayStatus:
        clock = self._clock()
        now = clock.to_local(now) if now else clock.now()
        today = clock.date_key(now)
        date_key = require_date_key(date, "date") if date else today

        records = self._log.records_for_date(date_key)
        worked = worked_minutes(records)
        if date_key == today:
            live = live_worked_hours(records, now=now, clock=clock)
        else:
            live = worked / 60

        return DayStatus(
            date=date_key,
            status=day_status(records),
            worked_minutes=worked,
            live_worked_hours=live,
            progress=progress_level(live, self._settings.current),
            allowed_actions=allowed_actions(records),
            record_count=len(records),
        )

    def _filtered(self, period: Period, clock: Clock) -> list[PunchRecord]:
        return filter_by_period(self._log, period, now=clock.now(), clock=clock)

    def get_statistics(self, period: Union[Period, str] = Period.ALL) -> Statistics:
        period = period if isinstance(period, Period) else Period.parse(period)
        clock = self._clock()
        return self._statistics.calculate(self._filtered(period, clock), period, self._settings.current)

    def get_paginated_history(self, period: Union[Period, str] = Period.TODAY, page: int = 1) -> HistoryView:
        period = period if isinstance(period, Period) else Period.parse(period)
        grouped = group_by_date(self._filtered(period, self._clock()))
        result = paginate(grouped, page, self._page_size)
        return HistoryView(page=result, days=[DaySummary.of(d, recs) for d, recs in result.days.items()])

    def get_settings(self) -> Settings:
        return self._settings.current

    def update_settings(self, partial: Mapping[str, Any]) -> Settings:
        return self._settings.update(partial)

    def refresh(self, now: Optional[datetime] = None) -> RefreshResult:
        """Periodic hook: recompute today's live figures. Never mutates the log."""
        clock = self._clock()
        now = clock.to_local(now) if now else clock.now()
        status = self.get_status(now=now)
        return RefreshResult(now=now, status=status, journey=self._check_journey(clock, now))

    def export_records(self) -> ExportFile:
        clock = self._clock()
        content = json.dumps([r.to_json() for r in self._log], ensure_ascii=False, indent=2)
        filename = EXPORT_FILENAME_TEMPLATE.format(date=format_date(clock.now()))
        return ExportFile(filename=filename, content=content)

    def import_records(self, payload: Any, confirm: Optional[Confirm] = None) -> Optional[int]:
        """Replace the whole log. Returns the new record count, or None if declined."""
        if isinstance(payload, bytes):
            try:
                payload = payload.decode("utf-8")
            except UnicodeDecodeError as e:
                raise DataImportError("Import file is not UTF-8 text") from e
        if isinstance(payload, str):
            try:
                payload = json.loads(payload)
            except ValueError as e:
                raise DataImportError("Import file is not valid JSON") from e

        if not isinstance(payload, list):
            raise DataImportError("Import payload must be a list of punch records")

        if confirm is not None and not confirm(f"Import {len(payload)} records? This will replace the current data."):
            return None
        return self._log.replace_all(payload)
