# src/taskflow/storage/local_storage.py

from __future__ import annotations

import contextlib
import json
import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)


class MemoryStorage:
    """Dict-backed KeyValueStorage. Nothing survives the process."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._items: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = str(value)

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)


class FileStorage:
    """
    KeyValueStorage persisted as one JSON object on disk.

    - values are plain strings (like browser localStorage)
    - writes go to a temp file and are swapped in with os.replace
    - an unreadable or malformed file reads as empty
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _read_all(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text("utf-8"))
        except (OSError, ValueError):
            logger.warning("Local storage file unreadable, treating as empty: %s", self._path)
            return {}
        if not isinstance(data, dict):
            logger.warning("Local storage file is not an object, treating as empty: %s", self._path)
            return {}
        return {k: v for k, v in data.items() if isinstance(k, str) and isinstance(v, str)}

    def _write_all(self, items: dict[str, str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._path.with_suffix(".tmp")
        tmp.write_text(json.dumps(items, ensure_ascii=False, indent=2), "utf-8")
        os.replace(tmp, self._path)
        with contextlib.suppress(OSError):
            # Holds the session record; keep the file private on disk.
            os.chmod(self._path, 0o600)

    def get_item(self, key: str) -> str | None:
        return self._read_all().get(key)

    def set_item(self, key: str, value: str) -> None:
        items = self._read_all()
        items[key] = str(value)
        self._write_all(items)
        logger.debug("Local storage set key=%s path=%s", key, self._path)

    def remove_item(self, key: str) -> None:
        items = self._read_all()
        if key not in items:
            return
        del items[key]
        self._write_all(items)
        logger.debug("Local storage removed key=%s path=%s", key, self._path)
