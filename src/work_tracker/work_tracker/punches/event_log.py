from __future__ import annotations

import logging
from dataclasses import replace
from datetime import tzinfo
from typing import Any, Callable, Iterable, Iterator, Optional, Sequence

from ..common.datetime_utils import Clock
from ..common.validators import clean_text, require_date_key, require_time
from ..core.constants import MAX_RECORDS
from ..core.enums import PunchKind
from ..core.exceptions import ConsistencyError, DataImportError, NotFoundError, ValidationError
from .model import PunchRecord
from .repository import PunchRepository

logger = logging.getLogger(__name__)

# Marks "leave the justification alone" in update().
UNCHANGED: Any = object()


class PunchQuery:
    """Lazy view over the log; each iteration re-reads the current records."""

    def __init__(self, source: Callable[[], Sequence[PunchRecord]], predicate: Callable[[PunchRecord], bool]):
        self._source = source
        self._predicate = predicate

    def __iter__(self) -> Iterator[PunchRecord]:
        for record in tuple(self._source()):
            if self._predicate(record):
                yield record


class EventLog:
    """Ordered punch log with its consistency rules.

    Every mutation keeps the log sorted by timestamp, trims it to
    ``max_records`` and writes it back through the repository before returning.
    """

    def __init__(
        self,
        punches: PunchRepository,
        *,
        timezone: Callable[[], tzinfo],
        max_records: int = MAX_RECORDS,
    ):
        self._repo = punches
        self._timezone = timezone
        self._max_records = int(max_records)
        self._records: list[PunchRecord] = self._sorted(punches.load_all(timezone()))

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[PunchRecord]:
        return iter(tuple(self._records))

    @staticmethod
    def _sorted(records: Iterable[PunchRecord]) -> list[PunchRecord]:
        return sorted(records, key=lambda r: r.timestamp)

    def _trim(self, records: list[PunchRecord]) -> list[PunchRecord]:
        overflow = len(records) - self._max_records
        if overflow > 0:
            logger.warning("Record limit of %d reached, dropped %d oldest record(s)", self._max_records, overflow)
            return records[overflow:]
        return records

    def _commit(self, records: list[PunchRecord]) -> None:
        # memory only changes after a successful save
        self._repo.save_all(records)
        self._records = records

    def get(self, punch_id: int) -> Optional[PunchRecord]:
        return next((r for r in self._records if r.punch_id == punch_id), None)

    def ids(self) -> set[int]:
        return {r.punch_id for r in self._records}

    def records_for_date(self, date_key: str) -> list[PunchRecord]:
        return [r for r in self._records if r.date == date_key]

    def query(self, predicate: Callable[[PunchRecord], bool]) -> PunchQuery:
        return PunchQuery(lambda: self._records, predicate)

    def _check_duplicate(self, record: PunchRecord) -> None:
        clash = any(
            r.punch_id != record.punch_id and r.kind == record.kind and r.time == record.time
            for r in self.records_for_date(record.date)
        )
        if clash:
            raise ValidationError(f"Duplicate punch: a {record.kind.value} at {record.time} already exists on {record.date}")

    def _check_consistency(self, record: PunchRecord) -> None:
        self._check_duplicate(record)
        same_day = self.records_for_date(record.date)

        if record.kind == PunchKind.BREAK_END:
            starts = sum(1 for r in same_day if r.kind == PunchKind.BREAK_START)
            ends = sum(1 for r in same_day if r.kind == PunchKind.BREAK_END)
            if starts <= ends:
                raise ConsistencyError(f"No open break to end on {record.date}")

    def append(self, record: PunchRecord) -> PunchRecord:
        missing = record.missing_fields()
        if missing:
            raise ValidationError(f"Missing required field(s): {', '.join(missing)}")
        if self.get(record.punch_id) is not None:
            raise ValidationError(f"Duplicate punch id: {record.punch_id}")
        self._check_consistency(record)

        self._commit(self._trim(self._sorted([*self._records, record])))
        logger.info("Punch %s saved (%s %s), total=%d", record.kind.value, record.date, record.time, len(self._records))
        return record

    def update(
        self,
        punch_id: int,
        *,
        justification: Optional[str] = UNCHANGED,
        new_time: Optional[str] = None,
        new_date: Optional[str] = None,
    ) -> PunchRecord:
        current = self.get(punch_id)
        if current is None:
            raise NotFoundError(f"Punch {punch_id} not found")

        updated = current
        if justification is not UNCHANGED:
            updated = replace(updated, justification=clean_text(justification))

        if new_time or new_date:
            final_date = require_date_key(new_date, "date") if new_date else current.date
            final_time = require_time(new_time, "time") if new_time else current.time
            clock = Clock(self._timezone())
            timestamp = clock.combine(final_date, final_time)
            updated = replace(updated, timestamp=timestamp, date=final_date, time=final_time)
            self._check_duplicate(updated)

        self._commit(self._sorted(updated if r is current else r for r in self._records))
        logger.info("Punch %s updated (%s %s)", punch_id, updated.date, updated.time)
        return updated

    def remove(self, punch_id: int) -> bool:
        remaining = [r for r in self._records if r.punch_id != punch_id]
        if len(remaining) == len(self._records):
            return False
        self._commit(remaining)
        logger.info("Punch %s deleted", punch_id)
        return True

    def replace_all(self, payload: Any) -> int:
        """Bulk import; nothing changes unless every item is a valid record."""
        if isinstance(payload, (str, bytes)) or not isinstance(payload, (list, tuple)):
            raise DataImportError("Import payload must be a list of punch records")

        tz = self._timezone()
        parsed: list[PunchRecord] = []
        seen_ids: set[int] = set()
        for index, item in enumerate(payload):
            if isinstance(item, PunchRecord):
                parsed.append(item)
                continue
            if not isinstance(item, dict):
                raise DataImportError(f"Item #{index} is not a punch record")
            try:
                parsed.append(PunchRecord.from_json(item, tz))
            except (ValueError, TypeError) as e:
                raise DataImportError(f"Item #{index} is not a valid punch record: {e}") from e

        for index, record in enumerate(parsed):
            if record.punch_id in seen_ids:
                raise DataImportError(f"Item #{index} repeats punch id {record.punch_id}")
            seen_ids.add(record.punch_id)

        self._commit(self._trim(self._sorted(parsed)))
        logger.info("Imported %d punch record(s)", len(self._records))
        return len(self._records)
