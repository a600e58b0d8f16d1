from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .accounting.json_alert_repository import JsonJourneyAlertRepository
from .accounting.statistics import StatisticsCalculator
from .common.datetime_utils import Clock
from .core.constants import DEFAULT_PAGE_SIZE
from .punches.event_log import EventLog
from .punches.json_punch_repository import JsonPunchRepository
from .settings.json_settings_repository import JsonSettingsRepository
from .settings.service import SettingsService
from .storage.connection import JsonFileStore, KeyValueStore, StoreConfig
from .tracker.service import TrackerService


@dataclass(frozen=True)
class Container:
    store: KeyValueStore

    settings_repo: JsonSettingsRepository
    punches_repo: JsonPunchRepository
    alerts_repo: JsonJourneyAlertRepository

    settings_service: SettingsService
    event_log: EventLog
    tracker_service: TrackerService


def build_container(
    *,
    data_dir: Optional[str] = None,
    store: Optional[KeyValueStore] = None,
    default_timezone: Optional[str] = None,
    page_size: int = DEFAULT_PAGE_SIZE,
    clock: Optional[Clock] = None,
) -> Container:
    if store is None:
        if not data_dir:
            raise ValueError("build_container needs a data_dir or a store")
        store = JsonFileStore(StoreConfig(data_dir=str(data_dir)))

    settings_repo = JsonSettingsRepository(store)
    punches_repo = JsonPunchRepository(store)
    alerts_repo = JsonJourneyAlertRepository(store)

    settings_service = SettingsService(settings_repo, default_timezone=default_timezone)
    event_log = EventLog(punches_repo, timezone=settings_service.timezone)
    tracker_service = TrackerService(
        event_log,
        settings_service,
        alerts_repo,
        clock=clock,
        statistics=StatisticsCalculator(),
        page_size=page_size,
    )

    return Container(
        store=store,
        settings_repo=settings_repo,
        punches_repo=punches_repo,
        alerts_repo=alerts_repo,
        settings_service=settings_service,
        event_log=event_log,
        tracker_service=tracker_service,
    )
