"""Backup the tracker data directory.

Note: Copies every stored document (records, settings, journey markers) into
backups/<timestamp>/ and removes backup folders older than 180 days.
"""

from __future__ import annotations

import importlib
import shutil
from datetime import datetime, timedelta
from pathlib import Path

from config import get_settings_module

from src.work_tracker.work_tracker.storage.connection import JsonFileStore, KeyValueStore, StoreConfig

KEEP_DAYS = 180
STAMP_FORMAT = "%Y%m%d_%H%M%S"


def copy_store(store: KeyValueStore, target: Path) -> int:
    target.mkdir(parents=True, exist_ok=True)
    copied = 0
    for key in store.keys():
        value = store.get_item(key)
        if value is None:
            continue
        (target / f"{key}.json").write_text(value, encoding="utf-8")
        copied += 1
    return copied


def prune(out_dir: Path, now: datetime) -> list[Path]:
    cutoff = now - timedelta(days=KEEP_DAYS)
    removed = []
    for folder in sorted(out_dir.iterdir()):
        try:
            stamp = datetime.strptime(folder.name, STAMP_FORMAT)
        except ValueError:
            continue
        if folder.is_dir() and stamp < cutoff:
            shutil.rmtree(folder)
            removed.append(folder)
    return removed


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    data_dir = Path(settings.DATA_DIR)
    if not data_dir.is_dir():
        raise SystemExit(f"Data directory not found: {data_dir}")

    out_dir = Path(__file__).resolve().parents[1] / "backups"
    now = datetime.now()
    target = out_dir / now.strftime(STAMP_FORMAT)

    copied = copy_store(JsonFileStore(StoreConfig(data_dir=str(data_dir))), target)
    print(f"OK: {copied} file(s) backed up to {target}")

    for folder in prune(out_dir, now):
        print(f"Removed old backup: {folder.name}")


if __name__ == "__main__":
    main()
