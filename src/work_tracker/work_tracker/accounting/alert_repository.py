from __future__ import annotations

from datetime import datetime
from typing import Protocol


class JourneyAlertRepository(Protocol):
    """One "journey complete" marker per calendar date."""

    def has_alert(self, date_key: str) -> bool:
        raise NotImplementedError

    def mark(self, date_key: str, at: datetime) -> None:
        raise NotImplementedError
