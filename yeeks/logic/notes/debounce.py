"""Reset-on-edit debounce with a single pending task.

Scheduling replaces any pending task. The task runs once the quiet period
elapses, or immediately on flush(); cancel() drops it. Tasks run under the
debouncer's lock, so flush() and cancel() wait for a task already firing.
"""
from __future__ import annotations
import logging
from functools import partial
from threading import RLock, Timer
from typing import Any, Callable, Optional, Tuple

from yeeks.utilities.config import SAVE_DEBOUNCE_MS

logger = logging.getLogger(__name__)

__all__ = ["Debouncer", "thread_timer"]


def thread_timer(interval: float, function: Callable[[], Any]):
    timer = Timer(interval, function)
    timer.daemon = True
    return timer


class Debouncer:
    def __init__(self, delay_ms: int = SAVE_DEBOUNCE_MS, timer_factory=thread_timer):
        if delay_ms < 0:
            raise ValueError("delay_ms must not be negative")
        self.delay_ms = delay_ms
        self.timer_factory = timer_factory
        self._lock = RLock()
        self._token = 0
        self._timer = None
        self._task: Optional[Tuple[Callable[..., Any], tuple]] = None

    @property
    def pending(self) -> bool:
        with self._lock:
            return self._task is not None

    def schedule(self, fn: Callable[..., Any], *args) -> None:
        """Run fn(*args) after the quiet period, replacing whatever was pending."""
        with self._lock:
            self._drop()
            self._token += 1
            self._task = (fn, args)
            self._timer = self.timer_factory(self.delay_ms / 1000.0, partial(self._fire, self._token))
            self._timer.start()

    def cancel(self) -> bool:
        """Drop the pending task without running it. Returns whether one was pending."""
        with self._lock:
            return self._drop() is not None

    def flush(self) -> bool:
        """Run the pending task now. Returns whether one was pending."""
        with self._lock:
            task = self._drop()
            if task is None:
                return False
            fn, args = task
            fn(*args)
            return True

    def _drop(self):
        task, self._task = self._task, None
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        return task

    def _fire(self, token: int) -> None:
        with self._lock:
            # A timer replaced or cancelled after it started waiting must not run.
            if token != self._token or self._task is None:
                return
            fn, args = self._task
            self._task = None
            self._timer = None
            try:
                fn(*args)
            except Exception:
                logger.exception("Debounced task %r failed", fn)
