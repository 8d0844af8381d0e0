"""Note store: week notes for one year at a time.

The mapping loaded for the current year is the source of truth. Every save
replaces the note for that week in memory and then mirrors the whole year's
mapping to the backend. Persistence is best-effort: unreadable payloads load
as an empty mapping and failed writes are logged, never raised.
"""
from __future__ import annotations
import logging
from typing import Dict, Mapping, Optional

from yeeks.domain.Week_Note import WeekNote, utc_now
from yeeks.events.Event_Bus import EventBus
from yeeks.events.event_helpers import publish_note_saved, publish_save_failed, publish_load_failed
from yeeks.infra.Note_Backends import NoteBackend

logger = logging.getLogger(__name__)

NoteMapping = Dict[int, WeekNote]


def _parse_record(record) -> NoteMapping:
    """Turn a persisted year record into {week_number: WeekNote}. Raises ValueError if malformed."""
    if not isinstance(record, dict):
        raise ValueError(f"year record must be an object, got {type(record).__name__}")
    notes: NoteMapping = {}
    for key, value in record.items():
        week = int(key)
        if week < 1:
            raise ValueError(f"week number must be positive, got {key!r}")
        notes[week] = WeekNote.from_dict(value)
    return notes


def _check_week_number(week_number) -> None:
    if isinstance(week_number, bool) or not isinstance(week_number, int):
        raise TypeError(f"week number must be an int, got {type(week_number).__name__}")
    if week_number < 1:
        raise ValueError(f"week number must be positive, got {week_number}")


class NoteStore:
    def __init__(self, backend: NoteBackend, bus: Optional[EventBus] = None, clock=utc_now):
        self.backend = backend
        self.bus = bus
        self.clock = clock
        self.year: Optional[int] = None
        self.notes: NoteMapping = {}

    def load(self, year: int) -> NoteMapping:
        """Replace the in-memory mapping with the persisted notes of ``year``."""
        try:
            notes = _parse_record(self.backend.read(year) or {})
        except (ValueError, TypeError, OSError) as e:
            logger.warning(f"Notes for {year} could not be loaded, using an empty set: {e}")
            publish_load_failed(year, e, bus=self.bus)
            notes = {}
        self.year = year
        self.notes = notes
        logger.debug(f"Loaded {len(notes)} notes for {year}")
        return self.notes

    def ensure(self, year: int) -> NoteMapping:
        """The mapping of ``year``, loading it only if another year (or none) is held."""
        if year != self.year:
            return self.load(year)
        return self.notes

    def save(self, year: int, week_number: int, content: str) -> WeekNote:
        """Store ``content`` as the note of ``week_number``, overwriting any previous note.

        An empty string is kept as a record with empty content. The note is
        returned even if the backend write fails.
        """
        _check_week_number(week_number)
        if not isinstance(content, str):
            raise TypeError(f"note content must be a str, got {type(content).__name__}")
        self.ensure(year)
        note = WeekNote(content, self.clock())
        self.notes[week_number] = note
        record = {str(week): n.to_dict() for week, n in sorted(self.notes.items())}
        try:
            self.backend.write(year, record)
        except (OSError, TypeError, ValueError) as e:
            logger.error(f"Failed to persist notes for {year} (week {week_number}): {e}")
            publish_save_failed(year, week_number, e, bus=self.bus)
            publish_note_saved(year, week_number, note, False, bus=self.bus)
            return note
        publish_note_saved(year, week_number, note, True, bus=self.bus)
        return note

    @staticmethod
    def get(mapping: Mapping[int, WeekNote], week_number: int) -> Optional[WeekNote]:
        return mapping.get(week_number)
