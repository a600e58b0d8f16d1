from __future__ import annotations

from datetime import date, timedelta

import pytz

from src.work_tracker.work_tracker.core.enums import Period, PunchKind
from src.work_tracker.work_tracker.history.query import filter_by_period, group_by_date, paginate
from src.work_tracker.work_tracker.history.summary import DaySummary
from src.work_tracker.work_tracker.punches.event_log import EventLog


def _days_back(make_punch, count):
    start = date(2024, 3, 4)
    return [
        make_punch(i, PunchKind.START, "09:00", (start - timedelta(days=i)).isoformat())
        for i in range(count)
    ]


def test_filter_today(make_punch, fixed_now, clock):
    records = _days_back(make_punch, 3)
    today = filter_by_period(records, Period.TODAY, now=fixed_now.set("12:00"), clock=clock)
    assert [r.date for r in today] == ["2024-03-04"]


def test_filter_week_and_month_windows(make_punch, fixed_now, clock):
    records = _days_back(make_punch, 40)
    now = fixed_now.set("08:00")

    week = filter_by_period(records, Period.WEEK, now=now, clock=clock)
    month = filter_by_period(records, Period.MONTH, now=now, clock=clock)

    # no upper bound: 09:00 today counts even though now is 08:00
    assert len(week) == 8
    assert len(month) == 31
    assert len(filter_by_period(records, Period.ALL, now=now, clock=clock)) == 40


def test_group_by_date(make_punch):
    records = [
        make_punch(1, PunchKind.START, "09:00", "2024-03-04"),
        make_punch(2, PunchKind.END, "17:00", "2024-03-04"),
        make_punch(3, PunchKind.START, "09:00", "2024-03-05"),
    ]
    grouped = group_by_date(records)
    assert {k: [r.punch_id for r in v] for k, v in grouped.items()} == {"2024-03-04": [1, 2], "2024-03-05": [3]}


def test_paginate_newest_first(make_punch):
    grouped = group_by_date(_days_back(make_punch, 25))

    first = paginate(grouped, 1, 10)
    last = paginate(grouped, 3, 10)

    assert first.total_pages == 3
    assert first.total_days == 25
    assert list(first.days)[0] == "2024-03-04"
    assert (first.first_index, first.last_index) == (1, 10)
    assert first.has_previous is False and first.has_next is True
    assert len(last.days) == 5
    assert (last.first_index, last.last_index) == (21, 25)


def test_paginate_out_of_range_falls_back_to_first_page(make_punch):
    grouped = group_by_date(_days_back(make_punch, 25))

    assert paginate(grouped, 99, 10).days == paginate(grouped, 1, 10).days
    assert paginate(grouped, 0, 10).page == 1


def test_paginate_empty():
    page = paginate({}, 3, 10)
    assert (page.page, page.total_pages, page.first_index, page.last_index) == (1, 0, 0, 0)
    assert page.days == {}


def test_day_summary(make_punch):
    records = [make_punch(1, PunchKind.START, "09:00"), make_punch(2, PunchKind.END, "17:00")]
    summary = DaySummary.of("2024-03-04", records)

    assert summary.worked_minutes == 480
    assert summary.label == "8h 0min - Monday, 04 March 2024"
    assert summary.to_dict()["records"][0]["label"] == "Start of day"


class _ListPunches:
    def __init__(self, records):
        self.records = list(records)

    def load_all(self, tz):
        return list(self.records)

    def save_all(self, records):
        self.records = list(records)


def test_filter_event_log_through_its_query(make_punch, fixed_now, clock):
    log = EventLog(_ListPunches(_days_back(make_punch, 10)), timezone=lambda: pytz.UTC)
    seen = []
    original_query = log.query
    log.query = lambda predicate: seen.append(predicate) or original_query(predicate)

    week = filter_by_period(log, Period.WEEK, now=fixed_now.set("08:00"), clock=clock)

    assert len(seen) == 1
    assert [r.date for r in week][-1] == "2024-03-04"
    assert len(week) == 8
