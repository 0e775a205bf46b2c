"""
JSON File Storage Implementation

DESIGN DECISION: The whole store is one JSON object in one file.
The data of a personal expense tracker is small, so every write
rewrites the file. Writes go to a temporary file first and are then
moved into place, so a crash mid-write never leaves a truncated store.

TRADEOFFS:
- Not suitable for concurrent writers (one session per file)
- Every set() costs a full rewrite (fine at personal scale)
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Optional

from expense_tracker.config.settings import StorageSettings
from expense_tracker.logs import get_logger
from expense_tracker.storage.interface import KeyValueStore, StorageError
from expense_tracker.storage.memory import InMemoryKeyValueStore


class JsonFileKeyValueStore(KeyValueStore):
    """Key-value store persisted as a single JSON object on disk."""

    def __init__(self, path: Path):
        self._path = Path(path)
        self._data: Optional[dict[str, str]] = None
        self._logger = get_logger(__name__)

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> dict[str, str]:
        """Read the file once; later calls use the cached copy."""
        if self._data is not None:
            return self._data

        if not self._path.exists():
            self._data = {}
            return self._data

        try:
            raw = json.loads(self._path.read_text(encoding="utf-8") or "{}")
        except (OSError, json.JSONDecodeError) as e:
            raise StorageError(f"Failed to read store {self._path}: {e}") from e

        if not isinstance(raw, dict) or not all(
            isinstance(v, str) for v in raw.values()
        ):
            raise StorageError(
                f"Store {self._path} is not a JSON object of string values"
            )

        self._data = raw
        self._logger.debug("store_loaded", path=str(self._path), keys=len(raw))
        return self._data

    def _flush(self, data: dict[str, str]) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self._path.parent,
                prefix=f".{self._path.name}.",
                suffix=".tmp",
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    json.dump(data, fh, ensure_ascii=False, indent=2)
                os.replace(tmp_name, self._path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise StorageError(f"Failed to write store {self._path}: {e}") from e

    def get(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        data = dict(self._load())
        data[key] = value
        self._flush(data)
        self._data = data

    def remove(self, key: str) -> None:
        data = self._load()
        if key not in data:
            return
        data = {k: v for k, v in data.items() if k != key}
        self._flush(data)
        self._data = data


def create_store(settings: StorageSettings) -> KeyValueStore:
    """Build the key-value store selected by STORAGE_BACKEND."""
    if settings.backend == "json":
        return JsonFileKeyValueStore(settings.file_path)
    return InMemoryKeyValueStore()
