"""
core/storage.py — Flat JSON key-value store for Hexa.

The store holds a handful of top-level keys in one JSON object on disk:

    {
        "hexaStats": {"gamesPlayed": 3, "highScore": 40, ...},
        "hexaTheme": 2
    }

It is read once when opened and rewritten in full on every set(). The file
is small, so writes are synchronous and go through a temp file plus
os.replace() so a crash mid-write never leaves half a document behind.

Callers that must not crash on a storage fault (stats, theme) catch
StorageError; the store itself never hides one.
"""

from __future__ import annotations
import json
import logging
import os
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Reading or writing the store failed."""


class JsonStore:
    """Key-value persistence backed by a single JSON file.

    Attributes:
        path:  File the store lives in.
        _data: In-memory copy of the document.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._data: dict[str, Any] = {}
        self._loaded = False

    def load(self) -> None:
        """Read the file into memory. A missing file is an empty store.

        Raises:
            StorageError: If the file exists but cannot be read or parsed,
                          or does not contain a JSON object.
        """
        self._loaded = True
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.debug("No store at %s, starting empty", self.path)
            self._data = {}
            return
        except OSError as exc:
            self._data = {}
            raise StorageError(f"cannot read {self.path}: {exc}") from exc
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            self._data = {}
            raise StorageError(f"corrupt store {self.path}: {exc}") from exc
        if not isinstance(data, dict):
            self._data = {}
            raise StorageError(f"store {self.path} is not a JSON object")
        self._data = data
        logger.debug("Loaded store %s with keys %s", self.path, sorted(data))

    def get(self, key: str, default: Any = None) -> Any:
        """Return the value stored under key, or default.

        Raises:
            StorageError: On the first access if the file is unreadable.
        """
        if not self._loaded:
            self.load()
        return self._data.get(key, default)

    def set(self, key: str, value: Any) -> None:
        """Store value under key and write the whole document to disk.

        The in-memory value is updated even if the write fails.

        Raises:
            StorageError: If the file cannot be written.
        """
        if not self._loaded:
            try:
                self.load()
            except StorageError:
                logger.warning("Overwriting unreadable store at %s", self.path)
        self._data[key] = value
        self._write()

    def _write(self) -> None:
        tmp = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(json.dumps(self._data, indent=2, sort_keys=True), encoding="utf-8")
            os.replace(tmp, self.path)
        except (OSError, TypeError, ValueError) as exc:
            raise StorageError(f"cannot write {self.path}: {exc}") from exc
        logger.debug("Saved store %s", self.path)
