import json
import logging
import os
import tempfile
import threading
from typing import Dict, Optional

log = logging.getLogger(__name__)


class MemorySessionStorage:
    """Key/value storage kept in process memory. Used by tests and ephemeral runs."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._items: Dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def set_items(self, items: Dict[str, str]) -> None:
        self._items.update(items)

    def remove_items(self, *keys: str) -> None:
        for key in keys:
            self._items.pop(key, None)

    def keys(self):
        return list(self._items.keys())


class FileSessionStorage:
    """
    Durable key/value storage backed by a small JSON file.
    Every write rewrites the file atomically so a reload never sees a half-written record.
    """

    def __init__(self, path: str):
        self.path = path
        self._lock = threading.Lock()

    def _read_all(self) -> Dict[str, str]:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            log.warning(f"⚠️ Session storage at {self.path} is unreadable, starting empty: {e}")
            return {}
        if not isinstance(data, dict):
            return {}
        # Only string values are valid records; anything else was not written by this class.
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _write_all(self, items: Dict[str, str]) -> None:
        directory = os.path.dirname(os.path.abspath(self.path))
        fd, tmp_path = tempfile.mkstemp(prefix=".session-", dir=directory)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(items, f)
            os.replace(tmp_path, self.path)
        except OSError:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise

    def get_item(self, key: str) -> Optional[str]:
        with self._lock:
            return self._read_all().get(key)

    def set_item(self, key: str, value: str) -> None:
        with self._lock:
            items = self._read_all()
            items[key] = value
            self._write_all(items)

    def remove_item(self, key: str) -> None:
        self.remove_items(key)

    def set_items(self, items: Dict[str, str]) -> None:
        with self._lock:
            current = self._read_all()
            current.update(items)
            self._write_all(current)

    def remove_items(self, *keys: str) -> None:
        with self._lock:
            items = self._read_all()
            if any(key in items for key in keys):
                for key in keys:
                    items.pop(key, None)
                self._write_all(items)

    def keys(self):
        with self._lock:
            return list(self._read_all().keys())
