"""
Key-value storage with the localStorage contract: string keys, string values.

``FileStorage`` keeps every key in a single JSON file and rewrites it on each
write; ``MemoryStorage`` is the process-local equivalent used by tests and by
the demo backend when no file is configured.
"""

import json
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Dict, Optional

logger = logging.getLogger(__name__)


class KeyValueStorage:
    def get_item(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set_item(self, key: str, value: str) -> None:
        raise NotImplementedError

    def remove_item(self, key: str) -> None:
        raise NotImplementedError

    def clear(self) -> None:
        raise NotImplementedError

    def keys(self) -> list:
        raise NotImplementedError


class MemoryStorage(KeyValueStorage):
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._items: Dict[str, str] = dict(initial or {})
        self._lock = threading.RLock()

    def get_item(self, key: str) -> Optional[str]:
        with self._lock:
            return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        with self._lock:
            self._items[key] = str(value)

    def remove_item(self, key: str) -> None:
        with self._lock:
            self._items.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._items.clear()

    def keys(self) -> list:
        with self._lock:
            return list(self._items)


class FileStorage(KeyValueStorage):
    """JSON file backed storage. Other processes writing the same file are last-write-wins."""

    def __init__(self, path):
        self.path = Path(path)
        self._lock = threading.RLock()
        self._items: Dict[str, str] = self._read()

    def _read(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8") or "{}")
        except (OSError, json.JSONDecodeError) as e:
            logger.error("Error reading storage file %s: %s", self.path, e)
            return {}
        if not isinstance(data, dict):
            logger.error("Storage file %s does not hold an object, ignoring it", self.path)
            return {}
        return {str(k): str(v) for k, v in data.items()}

    def _write(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        # Write to a sibling temp file first so a crash never leaves half a file behind
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=self.path.name, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(self._items, fh)
            os.replace(tmp_name, self.path)
        except OSError:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise

    def get_item(self, key: str) -> Optional[str]:
        with self._lock:
            return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        with self._lock:
            self._items[key] = str(value)
            self._write()

    def remove_item(self, key: str) -> None:
        with self._lock:
            if self._items.pop(key, None) is not None:
                self._write()

    def clear(self) -> None:
        with self._lock:
            self._items.clear()
            self._write()

    def keys(self) -> list:
        with self._lock:
            return list(self._items)
