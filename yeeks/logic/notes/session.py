"""Editing session over the note store.

The session owns the selected year, that year's note mapping and the one
edit surface (the open week). Edits are saved through a Debouncer once the
content has been quiet for the configured period, and only if it differs
from the stored note.

Pending saves are never dropped implicitly: switching week or year, or
closing the editor, flushes the pending save for the week and year it was
scheduled for before anything else changes. discard() is the explicit way
to throw a pending edit away.
"""
from __future__ import annotations
import logging
from datetime import date
from threading import Lock
from typing import Optional

from yeeks.domain.Week_Note import WeekNote
from yeeks.infra.Note_Store import NoteMapping, NoteStore
from yeeks.logic.notes.debounce import Debouncer

logger = logging.getLogger(__name__)

__all__ = ["NoteSession", "EditorClosedError"]


class EditorClosedError(RuntimeError):
    """Raised when editing without an open week."""


class NoteSession:
    def __init__(self, store: NoteStore, debouncer: Optional[Debouncer] = None, year: Optional[int] = None):
        self.store = store
        self.debouncer = debouncer or Debouncer()
        self._lock = Lock()
        self.year: Optional[int] = None
        self.notes: NoteMapping = {}
        self.active_week: Optional[int] = None
        self.draft: str = ""
        self.select_year(date.today().year if year is None else year)

    # ---- year ----
    def select_year(self, year: int) -> NoteMapping:
        """Switch to ``year``: flush any pending save, then replace the mapping with the stored one."""
        self.debouncer.flush()
        with self._lock:
            self.active_week = None
            self.draft = ""
            self.notes = self.store.load(year)
            self.year = year
        logger.info(f"Selected year {year} ({len(self.notes)} notes)")
        return self.notes

    def ensure_year(self, year: int) -> NoteMapping:
        """The mapping of ``year``; switches (and reloads) only when another year is selected."""
        if year != self.year:
            return self.select_year(year)
        return self.notes

    # ---- lookups ----
    def note(self, week_number: int) -> Optional[WeekNote]:
        return NoteStore.get(self.notes, week_number)

    def has_note(self, week_number: int) -> bool:
        note = self.note(week_number)
        return note is not None and note.has_content

    # ---- edit surface ----
    @property
    def pending(self) -> bool:
        return self.debouncer.pending

    def open_week(self, week_number: int) -> str:
        """Point the editor at ``week_number`` and return the text to show."""
        if week_number == self.active_week:
            return self.draft
        self.debouncer.flush()
        note = self.note(week_number)
        self.active_week = week_number
        self.draft = note.content if note else ""
        return self.draft

    def edit(self, content: str) -> None:
        """Record a keystroke-level change; the save happens after the quiet period."""
        if self.active_week is None:
            raise EditorClosedError("no week is open for editing")
        self.draft = content
        self.debouncer.schedule(self._commit, self.year, self.active_week, content)

    def close(self) -> None:
        self.debouncer.flush()
        self.active_week = None
        self.draft = ""

    def save_now(self, year: int, week_number: int, content: str) -> WeekNote:
        """Save without waiting for the quiet period, after committing any pending edit."""
        self.debouncer.flush()
        self.ensure_year(year)
        with self._lock:
            note = self.store.save(year, week_number, content)
        if week_number == self.active_week:
            self.draft = content
        return note

    def discard(self) -> bool:
        """Cancel the pending save, if any. Returns whether one was dropped."""
        return self.debouncer.cancel()

    def _commit(self, year: int, week_number: int, content: str) -> Optional[WeekNote]:
        with self._lock:
            if year != self.year:
                logger.warning(f"Dropping save for week {week_number} of {year}; {self.year} is selected")
                return None
            current = self.note(week_number)
            if (current.content if current else "") == content:
                return None
            return self.store.save(year, week_number, content)
