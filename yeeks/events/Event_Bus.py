"""Simple Event Bus / Observer implementation for note lifecycle events.

Event names used so far:
  notes.saved -> payload {"year": int, "week": int, "note": WeekNote, "persisted": bool}
  notes.save_failed -> payload {"year": int, "week": int, "error": str}
  notes.load_failed -> payload {"year": int, "error": str}

Subscribers are callables taking (event_name, payload).
"""
from __future__ import annotations
from collections import defaultdict
from typing import Callable, Any, Dict, List
import logging

logger = logging.getLogger(__name__)

# --- Event name constants (used across modules) ---
NOTE_SAVED = "notes.saved"
NOTE_SAVE_FAILED = "notes.save_failed"
NOTES_LOAD_FAILED = "notes.load_failed"


class EventBus:
	def __init__(self):
		self._subscribers: Dict[str, List[Callable[[str, Any], None]]] = defaultdict(list)

	def subscribe(self, event_name: str, callback: Callable[[str, Any], None]):
		if callback not in self._subscribers[event_name]:
			self._subscribers[event_name].append(callback)

	def unsubscribe(self, event_name: str, callback: Callable[[str, Any], None]):
		try:
			self._subscribers[event_name].remove(callback)
		except (ValueError, KeyError):
			pass

	def publish(self, event_name: str, payload: Any):
		for cb in list(self._subscribers.get(event_name, [])):
			try:
				cb(event_name, payload)
			except Exception:
				logger.exception("[EventBus] Error delivering %s to %r", event_name, cb)


# A singleton-like instance (can be imported)
GLOBAL_EVENT_BUS = EventBus()


__all__ = [
	'EventBus', 'GLOBAL_EVENT_BUS',
	'NOTE_SAVED', 'NOTE_SAVE_FAILED', 'NOTES_LOAD_FAILED'
]
