"""Persistence media for week notes.

A backend is a local key-value store holding one record per year under the
key ``notes-<year>``. The record is the week -> note mapping in its persisted
form (see WeekNote.to_dict). Backends only move records; validation happens
in NoteStore.
"""
import json
import logging
import os
import shutil
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from threading import Lock
from typing import Any, Dict, Optional

from yeeks.utilities.constants import NOTES_KEY_PREFIX

logger = logging.getLogger(__name__)


def year_key(year: int) -> str:
    return f"{NOTES_KEY_PREFIX}{year}"


class NoteBackend(ABC):
    @abstractmethod
    def read(self, year: int) -> Optional[Any]:
        """Return the stored record for ``year`` or None if nothing was stored.

        Raises ValueError (or OSError) when the stored payload cannot be read.
        """

    @abstractmethod
    def write(self, year: int, record: Dict[str, Any]) -> None:
        """Replace the stored record for ``year``. Raises on failure."""


class InMemoryNoteBackend(NoteBackend):
    """Keeps serialized JSON text per key, so records go through the same textual round trip."""

    def __init__(self):
        self.raw: Dict[str, str] = {}

    def read(self, year: int) -> Optional[Any]:
        text = self.raw.get(year_key(year))
        if text is None:
            return None
        return json.loads(text)

    def write(self, year: int, record: Dict[str, Any]) -> None:
        self.raw[year_key(year)] = json.dumps(record, ensure_ascii=False)


class JsonFileNoteBackend(NoteBackend):
    """All years in one JSON object on disk, rewritten atomically on every write."""

    def __init__(self, path: Path):
        self.path = Path(path)
        self._lock = Lock()

    def _read_store(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        with open(self.path, 'r', encoding='utf-8') as f:
            store = json.load(f)
        if not isinstance(store, dict):
            raise ValueError(f"notes file {self.path} does not hold a JSON object")
        return store

    def read(self, year: int) -> Optional[Any]:
        with self._lock:
            return self._read_store().get(year_key(year))

    def write(self, year: int, record: Dict[str, Any]) -> None:
        with self._lock:
            try:
                store = self._read_store()
            except ValueError as e:
                corrupt = self.path.with_suffix(".corrupt.json")
                shutil.copy2(self.path, corrupt)
                logger.warning(f"Notes file {self.path} is unreadable ({e}); kept a copy at {corrupt.name}, starting a fresh store")
                store = {}
            store[year_key(year)] = record
            self._atomic_write(store)

    def _atomic_write(self, store: Dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=str(self.path.parent), prefix=".notes_", suffix=".json")
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as tmp:
                json.dump(store, tmp, indent=2, ensure_ascii=False)
            shutil.move(tmp_path, str(self.path))
        finally:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
