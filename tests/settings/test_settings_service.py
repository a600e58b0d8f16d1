from __future__ import annotations

import pytest

from src.work_tracker.work_tracker.core.exceptions import ValidationError
from src.work_tracker.work_tracker.settings.json_settings_repository import JsonSettingsRepository
from src.work_tracker.work_tracker.settings.model import Settings
from src.work_tracker.work_tracker.settings.service import SettingsService


class InMemorySettings:
    def __init__(self, settings: Settings | None = None):
        self.settings = settings or Settings()
        self.saves = 0

    def load(self) -> Settings:
        return self.settings

    def save(self, settings: Settings) -> None:
        self.saves += 1
        self.settings = settings


def test_update_hours_is_saved():
    repo = InMemorySettings()
    service = SettingsService(repo)

    updated = service.update({"dailyHours": 7.5, "weeklyHours": "37.5"})

    assert updated.daily_target_minutes == 450
    assert updated.weekly_target_minutes == 2250
    assert repo.saves == 1
    assert service.current is updated


@pytest.mark.parametrize("partial", [{"dailyHours": 0}, {"weeklyHours": -1}, {"dailyHours": "abc"}, {"colour": "red"}])
def test_update_rejects_bad_values(partial):
    repo = InMemorySettings()
    service = SettingsService(repo)

    with pytest.raises(ValidationError):
        service.update(partial)
    assert repo.saves == 0
    assert service.current == Settings()


def test_holidays_accept_text_one_per_line():
    service = SettingsService(InMemorySettings())
    updated = service.update({"holidays": "2024-12-25\n\n 2024-01-01 \n"})
    assert updated.holidays == frozenset({"2024-12-25", "2024-01-01"})


def test_holidays_reject_bad_dates():
    service = SettingsService(InMemorySettings())
    with pytest.raises(ValidationError):
        service.update({"holidays": ["2024-02-30"]})


def test_timezone_resolution_order():
    service = SettingsService(InMemorySettings(), default_timezone="Asia/Tokyo")
    assert str(service.timezone()) == "Asia/Tokyo"

    service.update({"timeZone": "Europe/Paris"})
    assert str(service.timezone()) == "Europe/Paris"


def test_unknown_timezone_is_rejected():
    service = SettingsService(InMemorySettings())
    with pytest.raises(ValidationError):
        service.update({"timeZone": "Mars/Olympus"})


def test_stored_unknown_timezone_falls_back_to_host():
    service = SettingsService(InMemorySettings(Settings(timezone="Mars/Olympus")))
    assert service.timezone() is not None


def test_from_json_merges_over_defaults():
    settings = Settings.from_json({"dailyHours": 7, "holidays": ["2024-12-25", "bogus"], "weeklyHours": -3})

    assert settings.daily_target_minutes == 420
    assert settings.weekly_target_minutes == 2400
    assert settings.holidays == frozenset({"2024-12-25"})
    assert settings.require_justification_prompt is True


def test_json_repository_round_trips_through_store(store):
    repo = JsonSettingsRepository(store)
    repo.save(Settings(daily_target_minutes=450, holidays=frozenset({"2024-12-25"}), timezone="UTC"))

    loaded = repo.load()
    assert loaded.daily_hours == 7.5
    assert loaded.holidays == frozenset({"2024-12-25"})
    assert loaded.timezone == "UTC"


@pytest.mark.parametrize("raw", ["{not json", "[1, 2]"])
def test_corrupt_settings_fall_back_to_defaults(store, raw):
    store.set_item("timeTrackerSettings", raw)
    assert JsonSettingsRepository(store).load() == Settings()
