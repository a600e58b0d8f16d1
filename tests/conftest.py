from __future__ import annotations

from datetime import datetime
from typing import Iterator, Optional

import pytest
import pytz

from src.work_tracker.work_tracker.common.datetime_utils import Clock
from src.work_tracker.work_tracker.core.enums import PunchKind
from src.work_tracker.work_tracker.punches.model import PunchRecord

# Monday
DAY = "2024-03-04"


class InMemoryStore:
    def __init__(self):
        self.items: dict[str, str] = {}

    def get_item(self, key: str) -> Optional[str]:
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.items[key] = value

    def keys(self, prefix: str = "") -> Iterator[str]:
        return iter(sorted(k for k in self.items if k.startswith(prefix)))


class FixedNow:
    """Settable "now" for Clock(now_fn=...)."""

    def __init__(self, value: datetime):
        self.value = value

    def __call__(self) -> datetime:
        return self.value

    def set(self, hhmm: str, date_key: str = DAY) -> datetime:
        self.value = Clock(pytz.UTC).combine(date_key, hhmm)
        return self.value


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def fixed_now() -> FixedNow:
    return FixedNow(Clock(pytz.UTC).combine(DAY, "09:00"))


@pytest.fixture
def clock(fixed_now) -> Clock:
    return Clock(pytz.UTC, now_fn=fixed_now)


@pytest.fixture
def make_punch():
    utc = Clock(pytz.UTC)

    def _make(punch_id: int, kind: PunchKind, hhmm: str, date_key: str = DAY, justification=None) -> PunchRecord:
        return PunchRecord(
            punch_id=punch_id,
            kind=kind,
            timestamp=utc.combine(date_key, hhmm),
            date=date_key,
            time=hhmm,
            justification=justification,
        )

    return _make
