"""Example: drive the service layer directly (no Flask).

Controllers are a thin layer; everything below is what the HTTP routes call.
"""

import importlib

from config import get_settings_module

from src.work_tracker.work_tracker.container import build_container
from src.work_tracker.work_tracker.core.enums import PunchKind


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(data_dir=settings.DATA_DIR, default_timezone=settings.DEFAULT_TIMEZONE)
    tracker = container.tracker_service

    status = tracker.get_status()
    if PunchKind.START in status.allowed_actions:
        outcome = tracker.register_punch(PunchKind.START)
        print(f"{outcome.record.kind.label} at {outcome.record.time}")

    print(tracker.get_status().to_dict())
    print(tracker.get_statistics("week").to_dict())


if __name__ == "__main__":
    main()
