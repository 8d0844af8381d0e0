"""Shared fakes for the note tests."""
from datetime import datetime, timedelta, timezone

from yeeks.events.Event_Bus import EventBus
from yeeks.infra.Note_Backends import InMemoryNoteBackend


class StepClock:
    """Returns a new UTC timestamp, one millisecond and a few microseconds later, on each call."""

    def __init__(self, start=datetime(2025, 1, 1, 9, 0, tzinfo=timezone.utc)):
        self.now = start

    def __call__(self):
        self.now = self.now + timedelta(milliseconds=1, microseconds=7)
        return self.now


class FailingBackend(InMemoryNoteBackend):
    def __init__(self):
        super().__init__()
        self.fail = True

    def write(self, year, record):
        if self.fail:
            raise OSError("No space left on device")
        super().write(year, record)


class RecordingBus(EventBus):
    def __init__(self):
        super().__init__()
        self.events = []

    def publish(self, event_name, payload):
        self.events.append((event_name, payload))
        super().publish(event_name, payload)

    def names(self):
        return [name for name, _ in self.events]


class FakeTimer:
    def __init__(self, interval, function):
        self.interval = interval
        self.function = function
        self.started = False
        self.cancelled = False

    def start(self):
        self.started = True

    def cancel(self):
        self.cancelled = True

    def fire(self):
        if not self.cancelled:
            self.function()


class FakeTimers:
    """timer_factory for Debouncer that records timers instead of starting threads."""

    def __init__(self):
        self.timers = []

    def __call__(self, interval, function):
        timer = FakeTimer(interval, function)
        self.timers.append(timer)
        return timer

    @property
    def last(self):
        return self.timers[-1]


def make_session(backend=None, year=2025, timers=None):
    """NoteSession over an in-memory (or given) backend with fake timers."""
    from yeeks.infra.Note_Store import NoteStore
    from yeeks.logic.notes.debounce import Debouncer
    from yeeks.logic.notes.session import NoteSession
    store = NoteStore(backend if backend is not None else InMemoryNoteBackend(), clock=StepClock())
    return NoteSession(store, Debouncer(timer_factory=timers or FakeTimers()), year=year)
