"""
Client-local key/value storage adapters.

Implements KeyValueStorePort twice:
- JsonFileStorage keeps every key in one JSON document on disk (desktop runs,
  tests).
- ClientStorageAdapter wraps Flet's page.client_storage, which is the
  browser's localStorage when the app is served to a browser.

Unreadable data is reported as absent; the caller starts from a clean slate.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from threading import Lock
from typing import Any

logger = logging.getLogger(__name__)

# Flet client storage is shared by every app on the same origin
CLIENT_STORAGE_PREFIX = "bookstore."


class JsonFileStorage:
    """
    Stores all keys in a single JSON object.

    Example: {"token": "...", "cart_items": [...]}
    """

    def __init__(self, path: str | Path, *, create_dirs: bool = True) -> None:
        self.path = Path(path)
        self._lock = Lock()
        if create_dirs:
            self.path.parent.mkdir(parents=True, exist_ok=True)

    def _read_all(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Ignoring unreadable storage file {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring storage file {self.path}: expected a JSON object")
            return {}
        return data

    def _write_all(self, data: dict[str, Any]) -> None:
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False)
        os.replace(tmp_path, self.path)

    def get(self, key: str) -> Any | None:
        with self._lock:
            return self._read_all().get(key)

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            data = self._read_all()
            data[key] = value
            self._write_all(data)

    def remove(self, key: str) -> None:
        with self._lock:
            data = self._read_all()
            if key in data:
                del data[key]
                self._write_all(data)


class ClientStorageAdapter:
    """
    Adapter over flet's ClientStorage (page.client_storage).

    Values are JSON-encoded so nested structures survive platforms whose
    client storage only keeps primitives.
    """

    def __init__(self, client_storage: Any, prefix: str = CLIENT_STORAGE_PREFIX) -> None:
        self.client_storage = client_storage
        self.prefix = prefix

    def _key(self, key: str) -> str:
        return f"{self.prefix}{key}"

    def get(self, key: str) -> Any | None:
        raw = self.client_storage.get(self._key(key))
        if raw is None:
            return None
        if not isinstance(raw, str):
            return raw
        try:
            return json.loads(raw)
        except json.JSONDecodeError:
            logger.warning(f"Ignoring unreadable client storage value for '{key}'")
            return None

    def set(self, key: str, value: Any) -> None:
        self.client_storage.set(self._key(key), json.dumps(value, ensure_ascii=False))

    def remove(self, key: str) -> None:
        if self.client_storage.contains_key(self._key(key)):
            self.client_storage.remove(self._key(key))


def create_local_storage(
    path: str | Path | None = None,
    *,
    env_var: str = "BOOKSTORE_STORAGE_PATH",
    default_path: str = "./data/local_storage.json",
) -> JsonFileStorage:
    """
    Factory function to create JsonFileStorage from config.

    Args:
        path: Explicit file path (overrides env var)
        env_var: Environment variable name for the storage file
        default_path: Default path if not configured
    """
    if path is None:
        path = os.environ.get(env_var, default_path)

    return JsonFileStorage(path)
