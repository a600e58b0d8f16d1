from __future__ import annotations

import logging
from dataclasses import replace
from datetime import tzinfo
from typing import Any, Iterable, Mapping, Optional

import pytz

from ..common.datetime_utils import get_timezone
from ..common.validators import require_date_key, require_positive
from ..core.exceptions import ValidationError
from .model import Settings
from .repository import SettingsRepository

logger = logging.getLogger(__name__)

_KNOWN_KEYS = {"dailyHours", "weeklyHours", "holidays", "showJustificationPopup", "timeZone"}


class SettingsService:
    """Owns the in-memory settings; every update is written back immediately."""

    def __init__(self, settings: SettingsRepository, *, default_timezone: Optional[str] = None):
        self._repo = settings
        self._default_timezone = default_timezone or None
        self._current = settings.load()

    @property
    def current(self) -> Settings:
        return self._current

    def timezone(self) -> tzinfo:
        """Configured zone, else the deployment default, else the host's."""
        name = self._current.timezone or self._default_timezone
        try:
            return get_timezone(name)
        except pytz.UnknownTimeZoneError:
            logger.warning("Unknown timezone %r, using host timezone", name)
            return get_timezone(None)

    @staticmethod
    def _parse_holidays(value: Any) -> frozenset[str]:
        if value is None:
            return frozenset()
        if isinstance(value, str):
            # textarea input: one date per line
            items: Iterable[Any] = value.splitlines()
        elif isinstance(value, (list, tuple, set, frozenset)):
            items = value
        else:
            raise ValidationError("holidays must be a list of YYYY-MM-DD dates")
        cleaned = (str(item).strip() for item in items)
        return frozenset(require_date_key(item, "holiday") for item in cleaned if item)

    @staticmethod
    def _parse_timezone(value: Any) -> Optional[str]:
        name = (str(value).strip() if value is not None else "") or None
        if name is None:
            return None
        try:
            get_timezone(name)
        except pytz.UnknownTimeZoneError:
            raise ValidationError(f"Unknown timezone: {name}")
        return name

    def update(self, partial: Mapping[str, Any]) -> Settings:
        unknown = set(partial) - _KNOWN_KEYS
        if unknown:
            raise ValidationError(f"Unknown setting(s): {', '.join(sorted(unknown))}")

        changes: dict[str, Any] = {}
        if "dailyHours" in partial:
            changes["daily_target_minutes"] = int(round(require_positive(partial["dailyHours"], "dailyHours") * 60))
        if "weeklyHours" in partial:
            changes["weekly_target_minutes"] = int(round(require_positive(partial["weeklyHours"], "weeklyHours") * 60))
        if "holidays" in partial:
            changes["holidays"] = self._parse_holidays(partial["holidays"])
        if "showJustificationPopup" in partial:
            changes["require_justification_prompt"] = bool(partial["showJustificationPopup"])
        if "timeZone" in partial:
            changes["timezone"] = self._parse_timezone(partial["timeZone"])

        updated = replace(self._current, **changes)
        self._repo.save(updated)
        self._current = updated
        logger.info("Settings updated: %s", ", ".join(sorted(partial)) or "-")
        return updated
