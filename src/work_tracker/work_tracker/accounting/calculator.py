"""Time accounting over one day's punches.

All functions are pure: they take the records (plus settings/clock/now where
needed) and never touch the event log.
"""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import Clock, minutes_of_day
from ..core.constants import EARLY_HOUR, LATE_HOUR
from ..core.enums import ProgressLevel, PunchKind, WorkStatus
from ..punches.model import PunchRecord
from ..settings.model import Settings

_OPENS_SEGMENT = (PunchKind.START, PunchKind.BREAK_END)
_CLOSES_SEGMENT = (PunchKind.BREAK_START, PunchKind.END)
_MINUTES_PER_DAY = 24 * 60


def chronological(records: Iterable[PunchRecord]) -> list[PunchRecord]:
    return sorted(records, key=lambda r: r.timestamp)


def worked_minutes(records: Iterable[PunchRecord]) -> int:
    """Sum of closed work segments.

    START/BREAK_END open a segment, BREAK_START/END close it. A segment still
    open at the end is not counted yet.
    """
    total_seconds = 0.0
    segment_start: Optional[datetime] = None
    for record in chronological(records):
        if record.kind in _OPENS_SEGMENT:
            segment_start = record.timestamp
        elif record.kind in _CLOSES_SEGMENT and segment_start is not None:
            total_seconds += (record.timestamp - segment_start).total_seconds()
            segment_start = None
    return int(total_seconds // 60)


def _span_minutes(start_hhmm: str, end_hhmm: str) -> int:
    span = minutes_of_day(end_hhmm) - minutes_of_day(start_hhmm)
    if span < 0:
        span += _MINUTES_PER_DAY
    return span


def break_minutes(records: Iterable[PunchRecord]) -> int:
    """Pair the n-th break start with the n-th break end; unmatched starts add nothing."""
    ordered = chronological(records)
    starts = [r for r in ordered if r.kind == PunchKind.BREAK_START]
    ends = [r for r in ordered if r.kind == PunchKind.BREAK_END]
    return sum(_span_minutes(start.time, end.time) for start, end in zip(starts, ends))


def live_worked_hours(records: Sequence[PunchRecord], *, now: datetime, clock: Clock) -> float:
    """Hours worked so far today, using "now" as the end while the day is open."""
    ordered = chronological(records)
    start = next((r for r in ordered if r.kind == PunchKind.START), None)
    if start is None:
        return 0.0

    end = next((r for r in ordered if r.kind == PunchKind.END), None)
    end_hhmm = end.time if end is not None else clock.format_time(now)

    minutes = _span_minutes(start.time, end_hhmm) - break_minutes(ordered)
    return max(0.0, minutes / 60)


def day_status(records: Sequence[PunchRecord]) -> WorkStatus:
    if not records:
        return WorkStatus.NOT_STARTED
    last = chronological(records)[-1]
    return {
        PunchKind.START: WorkStatus.WORKING,
        PunchKind.BREAK_END: WorkStatus.WORKING,
        PunchKind.BREAK_START: WorkStatus.ON_BREAK,
        PunchKind.END: WorkStatus.ENDED,
    }[last.kind]


def allowed_actions(records: Sequence[PunchRecord]) -> frozenset[PunchKind]:
    """Punches that make sense next (advisory; the log only enforces its own rules)."""
    last = chronological(records)[-1].kind if records else None
    allowed = set()
    if last is None or last == PunchKind.END:
        allowed.add(PunchKind.START)
    if last in (PunchKind.START, PunchKind.BREAK_END):
        allowed.add(PunchKind.BREAK_START)
    if last == PunchKind.BREAK_START:
        allowed.add(PunchKind.BREAK_END)
    if last is not None and last not in (PunchKind.END, PunchKind.BREAK_START):
        allowed.add(PunchKind.END)
    return frozenset(allowed)


def progress_level(worked_hours: float, settings: Settings) -> ProgressLevel:
    daily = settings.daily_hours
    if worked_hours >= daily * 0.9:
        return ProgressLevel.NEARLY_DONE
    if worked_hours >= daily * 0.75:
        return ProgressLevel.APPROACHING
    return ProgressLevel.IN_PROGRESS


def needs_justification(instant: datetime, settings: Settings, clock: Clock) -> bool:
    """Outside 06:00-22:00, on a weekend or on a holiday."""
    local = clock.to_local(instant)
    if local.hour < EARLY_HOUR or local.hour >= LATE_HOUR:
        return True
    if clock.is_weekend(local):
        return True
    return settings.is_holiday(clock.date_key(local))
