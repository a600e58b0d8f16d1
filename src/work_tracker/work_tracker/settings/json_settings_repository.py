from __future__ import annotations

import json
import logging

from ..core.constants import SETTINGS_KEY
from ..storage.connection import KeyValueStore
from ..storage.json_base import dump_json
from .model import Settings
from .repository import SettingsRepository

logger = logging.getLogger(__name__)


class JsonSettingsRepository(SettingsRepository):
    def __init__(self, store: KeyValueStore, *, key: str = SETTINGS_KEY):
        self._store = store
        self._key = key

    def load(self) -> Settings:
        raw = self._store.get_item(self._key)
        if raw is None:
            return Settings()
        try:
            data = json.loads(raw)
        except ValueError:
            logger.error("Stored settings are corrupt, falling back to defaults", exc_info=True)
            return Settings()
        if not isinstance(data, dict):
            logger.error("Stored settings are not an object, falling back to defaults")
            return Settings()
        return Settings.from_json(data)

    def save(self, settings: Settings) -> None:
        dump_json(self._store, self._key, settings.to_json())
