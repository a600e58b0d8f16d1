from __future__ import annotations

import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional, Protocol

from ..core.exceptions import StorageError

_KEY_RE = re.compile(r"^[A-Za-z0-9_.-]+$")


@dataclass
class StoreConfig:
    data_dir: str


class KeyValueStore(Protocol):
    """Local persistent string store (the browser's localStorage, on disk)."""

    def get_item(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set_item(self, key: str, value: str) -> None:
        raise NotImplementedError

    def keys(self, prefix: str = "") -> Iterator[str]:
        raise NotImplementedError


class JsonFileStore:
    """One UTF-8 file per key inside the data directory.

    Note: Writes go to a temp file first and are swapped in with os.replace.
    """

    def __init__(self, config: StoreConfig):
        self._root = Path(config.data_dir)

    def _path(self, key: str) -> Path:
        if not _KEY_RE.match(key):
            raise StorageError(f"Invalid storage key: {key!r}")
        return self._root / f"{key}.json"

    def get_item(self, key: str) -> Optional[str]:
        path = self._path(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as e:
            raise StorageError(f"Could not read {path.name}: {e}") from e

    def set_item(self, key: str, value: str) -> None:
        path = self._path(key)
        tmp = path.with_suffix(".json.tmp")
        try:
            self._root.mkdir(parents=True, exist_ok=True)
            tmp.write_text(value, encoding="utf-8")
            os.replace(tmp, path)
        except OSError as e:
            raise StorageError(f"Could not write {path.name}: {e}") from e

    def keys(self, prefix: str = "") -> Iterator[str]:
        if not self._root.is_dir():
            return
        for path in sorted(self._root.glob(f"{prefix}*.json")):
            yield path.stem
