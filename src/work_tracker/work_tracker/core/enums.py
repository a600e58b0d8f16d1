from __future__ import annotations

from enum import Enum


class PunchKind(str, Enum):
    """Kinds of punch stored in the event log (closed set)."""

    START = "start"
    BREAK_START = "break_start"
    BREAK_END = "break_end"
    END = "end"

    @property
    def label(self) -> str:
        return {
            PunchKind.START: "Start of day",
            PunchKind.BREAK_START: "Break start",
            PunchKind.BREAK_END: "Break end",
            PunchKind.END: "End of day",
        }[self]


class Period(str, Enum):
    """History/statistics filter."""

    TODAY = "today"
    WEEK = "week"
    MONTH = "month"
    ALL = "all"

    @classmethod
    def parse(cls, value: str | None) -> "Period":
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            return cls.ALL


class WorkStatus(str, Enum):
    NOT_STARTED = "NOT_STARTED"
    WORKING = "WORKING"
    ON_BREAK = "ON_BREAK"
    ENDED = "ENDED"


class ProgressLevel(str, Enum):
    """How close live worked time is to the daily target."""

    IN_PROGRESS = "IN_PROGRESS"
    APPROACHING = "APPROACHING"
    NEARLY_DONE = "NEARLY_DONE"
