from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, tzinfo
from typing import Any, Mapping, Optional

from ..common.datetime_utils import Clock, format_timestamp, parse_timestamp
from ..common.validators import clean_text, is_valid_date_key, is_valid_time
from ..core.enums import PunchKind

REQUIRED_FIELDS = ("id", "type", "timestamp", "date", "time")


@dataclass(frozen=True)
class PunchRecord:
    """Domain entity: one punch in the event log."""

    punch_id: int
    kind: PunchKind
    timestamp: datetime
    date: str
    time: str
    justification: Optional[str] = None

    @classmethod
    def create(cls, *, punch_id: int, kind: PunchKind, instant: datetime, clock: Clock) -> "PunchRecord":
        local = clock.to_local(instant)
        return cls(
            punch_id=punch_id,
            kind=kind,
            timestamp=local,
            date=clock.date_key(local),
            time=clock.format_time(local),
        )

    def missing_fields(self) -> list[str]:
        missing = []
        if not isinstance(self.punch_id, int) or isinstance(self.punch_id, bool):
            missing.append("id")
        if not isinstance(self.kind, PunchKind):
            missing.append("type")
        if not isinstance(self.timestamp, datetime):
            missing.append("timestamp")
        if not is_valid_date_key(self.date or ""):
            missing.append("date")
        if not is_valid_time(self.time or ""):
            missing.append("time")
        return missing

    def to_json(self) -> dict:
        return {
            "id": self.punch_id,
            "type": self.kind.value,
            "timestamp": format_timestamp(self.timestamp),
            "date": self.date,
            "time": self.time,
            "justification": self.justification,
        }

    @classmethod
    def from_json(cls, data: Mapping[str, Any], tz: tzinfo) -> "PunchRecord":
        """Build a record from its stored shape.

        Raises ValueError when the mapping is not record-shaped.
        """
        missing = [name for name in REQUIRED_FIELDS if data.get(name) in (None, "")]
        if missing:
            raise ValueError(f"missing field(s): {', '.join(missing)}")

        raw_id = data["id"]
        if isinstance(raw_id, bool) or not isinstance(raw_id, (int, float)) or int(raw_id) != raw_id:
            raise ValueError(f"id must be an integer, got {raw_id!r}")

        kind = PunchKind(str(data["type"]))
        timestamp = parse_timestamp(str(data["timestamp"]), tz)

        date_key = str(data["date"])
        hhmm = str(data["time"])[:5]
        if not is_valid_date_key(date_key):
            raise ValueError(f"date must be YYYY-MM-DD, got {date_key!r}")
        if not is_valid_time(hhmm):
            raise ValueError(f"time must be HH:MM, got {data['time']!r}")

        justification = data.get("justification")
        return cls(
            punch_id=int(raw_id),
            kind=kind,
            timestamp=timestamp,
            date=date_key,
            time=hhmm,
            justification=clean_text(str(justification)) if justification is not None else None,
        )
