from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from ..accounting.calculator import worked_minutes
from ..accounting.formatting import format_hours_minutes
from ..common.datetime_utils import parse_iso_date
from ..punches.model import PunchRecord


@dataclass(frozen=True)
class DaySummary:
    """Read-model for one day card in the history list."""

    date: str
    records: tuple[PunchRecord, ...]
    worked_minutes: int

    @classmethod
    def of(cls, date_key: str, records: Sequence[PunchRecord]) -> "DaySummary":
        return cls(date=date_key, records=tuple(records), worked_minutes=worked_minutes(records))

    @property
    def label(self) -> str:
        day = parse_iso_date(self.date)
        return f"{format_hours_minutes(self.worked_minutes)} - {day.strftime('%A, %d %B %Y')}"

    def to_dict(self) -> dict:
        return {
            "date": self.date,
            "label": self.label,
            "worked_minutes": self.worked_minutes,
            "worked_hours": format_hours_minutes(self.worked_minutes),
            "records": [
                {**r.to_json(), "label": r.kind.label}
                for r in self.records
            ],
        }
