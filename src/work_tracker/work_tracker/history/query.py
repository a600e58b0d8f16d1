from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Iterable, Mapping, Sequence

from ..common.datetime_utils import Clock
from ..core.constants import DEFAULT_PAGE_SIZE, MONTH_WINDOW_DAYS, WEEK_WINDOW_DAYS
from ..core.enums import Period
from ..punches.event_log import EventLog
from ..punches.model import PunchRecord


def period_predicate(period: Period, *, now: datetime, clock: Clock) -> Callable[[PunchRecord], bool]:
    """Membership test for a period; week and month have no upper bound."""
    if period == Period.TODAY:
        today = clock.date_key(now)
        return lambda r: r.date == today
    if period in (Period.WEEK, Period.MONTH):
        days = WEEK_WINDOW_DAYS if period == Period.WEEK else MONTH_WINDOW_DAYS
        since = clock.window_start(days, now=now)
        return lambda r: r.timestamp >= since
    return lambda r: True


def filter_by_period(records: Iterable[PunchRecord], period: Period, *, now: datetime, clock: Clock) -> list[PunchRecord]:
    keep = period_predicate(period, now=now, clock=clock)
    if isinstance(records, EventLog):
        return list(records.query(keep))
    return [r for r in records if keep(r)]


def group_by_date(records: Iterable[PunchRecord]) -> dict[str, list[PunchRecord]]:
    grouped: dict[str, list[PunchRecord]] = {}
    for record in records:
        grouped.setdefault(record.date, []).append(record)
    return grouped


@dataclass(frozen=True)
class HistoryPage:
    days: dict[str, list[PunchRecord]] = field(default_factory=dict)
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE
    total_pages: int = 0
    total_days: int = 0

    @property
    def first_index(self) -> int:
        """1-based position of the first day shown (0 when empty)."""
        if not self.days:
            return 0
        return (self.page - 1) * self.page_size + 1

    @property
    def last_index(self) -> int:
        if not self.days:
            return 0
        return min(self.page * self.page_size, self.total_days)

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages


def paginate(grouped: Mapping[str, Sequence[PunchRecord]], page: int, page_size: int = DEFAULT_PAGE_SIZE) -> HistoryPage:
    """Most recent day first; out-of-range pages fall back to page 1."""
    page_size = max(1, int(page_size))
    dates = sorted(grouped, reverse=True)
    total_pages = math.ceil(len(dates) / page_size)

    page = int(page)
    if page > total_pages or page < 1:
        page = 1

    start = (page - 1) * page_size
    selected = dates[start:start + page_size]
    return HistoryPage(
        days={d: list(grouped[d]) for d in selected},
        page=page,
        page_size=page_size,
        total_pages=total_pages,
        total_days=len(dates),
    )
