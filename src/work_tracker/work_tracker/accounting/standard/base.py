from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Collection

from ...settings.model import Settings


class StandardMinutesPolicy(ABC):
    """Strategy Pattern: expected worked minutes for the dates of a period."""

    @abstractmethod
    def standard_minutes(self, date_keys: Collection[str], settings: Settings) -> int:
        raise NotImplementedError

    def overtime_minutes(self, total_minutes: int, date_keys: Collection[str], settings: Settings) -> int:
        return max(0, int(total_minutes) - self.standard_minutes(date_keys, settings))
