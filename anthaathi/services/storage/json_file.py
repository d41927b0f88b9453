"""
JSON File Storage Implementation

DESIGN DECISION: All keys live in ONE small JSON document
(`~/.anthaathi/storage.json` by default), mapping key to string value.

TRADEOFFS:
- The whole document is rewritten on every change (fine for three keys)
- No locking: the app is single-process and each store owns its key
- A corrupt document reads as empty; the next write replaces it

Writes go to a temporary file that is then renamed over the document,
so a crash mid-write never leaves a half-written file behind.
"""

import json
from pathlib import Path
from typing import Optional

import structlog

from anthaathi.config import get_settings
from anthaathi.services.storage.interface import (
    KeyValueStorageInterface,
    StorageReadError,
    StorageWriteError,
)


logger = structlog.get_logger(__name__)


class JsonFileStorage(KeyValueStorageInterface):
    """Key-value storage backed by a single JSON document on disk."""

    def __init__(self, path: Optional[Path] = None):
        """
        Args:
            path: Location of the JSON document.
                  Defaults to the configured storage path.
        """
        self._path = Path(path) if path else get_settings().storage.storage_path

    @property
    def path(self) -> Path:
        return self._path

    def _read_document(self) -> dict[str, str]:
        """Load the document; a missing file is an empty document."""
        if not self._path.exists():
            return {}
        try:
            with open(self._path, encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            logger.warning("storage_document_corrupt", path=str(self._path), error=str(e))
            return {}
        except OSError as e:
            raise StorageReadError(f"Could not read {self._path}: {e}")

        if not isinstance(data, dict):
            logger.warning("storage_document_not_an_object", path=str(self._path))
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _write_document(self, data: dict[str, str], key: str) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            temp_file = self._path.with_suffix(".tmp")
            with open(temp_file, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            temp_file.replace(self._path)
        except OSError as e:
            logger.error("storage_write_failed", path=str(self._path), key=key, error=str(e))
            raise StorageWriteError(f"Failed to save '{key}': {e}", key=key)

    async def get_item(self, key: str) -> Optional[str]:
        try:
            return self._read_document().get(key)
        except StorageReadError as e:
            e.key = key
            raise

    async def set_item(self, key: str, value: str) -> None:
        try:
            data = self._read_document()
        except StorageReadError as e:
            raise StorageWriteError(str(e), key=key)
        data[key] = value
        self._write_document(data, key)
        logger.debug("storage_item_set", key=key, size=len(value))

    async def remove_item(self, key: str) -> None:
        try:
            data = self._read_document()
        except StorageReadError as e:
            raise StorageWriteError(str(e), key=key)
        if key not in data:
            return
        del data[key]
        self._write_document(data, key)
        logger.debug("storage_item_removed", key=key)

    async def keys(self) -> list[str]:
        return sorted(self._read_document().keys())
