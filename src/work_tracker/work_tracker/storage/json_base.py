from __future__ import annotations

import json
from typing import Any

from ..core.exceptions import StorageError
from .connection import KeyValueStore


def load_json(store: KeyValueStore, key: str, default: Any = None) -> Any:
    """Read and decode one key; ``default`` when the key is absent."""
    raw = store.get_item(key)
    if raw is None:
        return default
    try:
        return json.loads(raw)
    except ValueError as e:
        raise StorageError(f"Stored value for {key!r} is not valid JSON") from e


def dump_json(store: KeyValueStore, key: str, value: Any) -> None:
    try:
        text = json.dumps(value, ensure_ascii=False)
    except (TypeError, ValueError) as e:
        raise StorageError(f"Value for {key!r} is not JSON serializable") from e
    store.set_item(key, text)
