from __future__ import annotations

from datetime import tzinfo
from typing import Protocol, Sequence

from .model import PunchRecord


class PunchRepository(Protocol):
    def load_all(self, tz: tzinfo) -> list[PunchRecord]:
        raise NotImplementedError

    def save_all(self, records: Sequence[PunchRecord]) -> None:
        """Overwrite the whole stored log."""

        raise NotImplementedError
