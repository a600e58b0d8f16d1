from __future__ import annotations

from datetime import tzinfo
from typing import Sequence

from ..core.constants import RECORDS_KEY
from ..core.exceptions import StorageError
from ..storage.connection import KeyValueStore
from ..storage.json_base import dump_json, load_json
from .model import PunchRecord
from .repository import PunchRepository


class JsonPunchRepository(PunchRepository):
    def __init__(self, store: KeyValueStore, *, key: str = RECORDS_KEY):
        self._store = store
        self._key = key

    def load_all(self, tz: tzinfo) -> list[PunchRecord]:
        data = load_json(self._store, self._key, default=[])
        if not isinstance(data, list):
            raise StorageError(f"Stored value for {self._key!r} is not a list")
        out: list[PunchRecord] = []
        for index, item in enumerate(data):
            if not isinstance(item, dict):
                raise StorageError(f"Stored punch #{index} is not an object")
            try:
                out.append(PunchRecord.from_json(item, tz))
            except (ValueError, TypeError) as e:
                raise StorageError(f"Stored punch #{index} is invalid: {e}") from e
        return out

    def save_all(self, records: Sequence[PunchRecord]) -> None:
        dump_json(self._store, self._key, [r.to_json() for r in records])
