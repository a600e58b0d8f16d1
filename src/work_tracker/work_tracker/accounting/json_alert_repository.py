from __future__ import annotations

from datetime import datetime

from ..common.datetime_utils import format_timestamp
from ..core.constants import JOURNEY_ALERT_PREFIX
from ..storage.connection import KeyValueStore
from ..storage.json_base import dump_json
from .alert_repository import JourneyAlertRepository


class JsonJourneyAlertRepository(JourneyAlertRepository):
    def __init__(self, store: KeyValueStore, *, prefix: str = JOURNEY_ALERT_PREFIX):
        self._store = store
        self._prefix = prefix

    def has_alert(self, date_key: str) -> bool:
        return self._store.get_item(f"{self._prefix}{date_key}") is not None

    def mark(self, date_key: str, at: datetime) -> None:
        dump_json(self._store, f"{self._prefix}{date_key}", format_timestamp(at))
