"""Event helper utilities.

Helpers for publishing note lifecycle events on a bus (the global one by default).

Quick import:
    from yeeks.events.event_helpers import (
        publish_note_saved, publish_save_failed, publish_load_failed,
        NOTE_SAVED, NOTE_SAVE_FAILED, NOTES_LOAD_FAILED
    )
"""
from __future__ import annotations
from typing import Optional
from .Event_Bus import (
    EventBus, GLOBAL_EVENT_BUS,
    NOTE_SAVED, NOTE_SAVE_FAILED, NOTES_LOAD_FAILED
)

__all__ = [
    'publish_note_saved', 'publish_save_failed', 'publish_load_failed',
    'NOTE_SAVED', 'NOTE_SAVE_FAILED', 'NOTES_LOAD_FAILED'
]


def publish_note_saved(year: int, week: int, note, persisted: bool, bus: Optional[EventBus] = None):
    """Publish a notes.saved event (persisted=False when only the in-memory copy changed)."""
    (bus or GLOBAL_EVENT_BUS).publish(NOTE_SAVED, {
        'year': year,
        'week': week,
        'note': note,
        'persisted': persisted
    })


def publish_save_failed(year: int, week: int, error: Exception, bus: Optional[EventBus] = None):
    (bus or GLOBAL_EVENT_BUS).publish(NOTE_SAVE_FAILED, {
        'year': year,
        'week': week,
        'error': str(error)
    })


def publish_load_failed(year: int, error: Exception, bus: Optional[EventBus] = None):
    (bus or GLOBAL_EVENT_BUS).publish(NOTES_LOAD_FAILED, {
        'year': year,
        'error': str(error)
    })
