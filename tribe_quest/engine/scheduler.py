"""
Tribe Quest - Delayed Transitions

Schedule/cancel contract for the engine's timed transitions (auto-pass after
a lockout, advancing after a win or a revealed loss). Two implementations:
ThreadingScheduler runs callbacks on daemon timer threads; ManualScheduler
keeps a virtual clock that the caller advances explicitly.
"""

from __future__ import annotations

import itertools
import logging
import threading
from typing import Callable, Protocol

logger = logging.getLogger(__name__)


class ScheduledTransition:
    """Cancellation handle for one delayed callback."""

    def __init__(self, delay: float, callback: Callable[[], None]) -> None:
        self.delay = delay
        self._callback = callback
        self._lock = threading.Lock()
        self._cancelled = False
        self._fired = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def fired(self) -> bool:
        return self._fired

    @property
    def pending(self) -> bool:
        return not (self._cancelled or self._fired)

    def cancel(self) -> None:
        """Prevent the callback from running. Safe to call more than once."""
        with self._lock:
            if not self._fired:
                self._cancelled = True

    def fire(self) -> None:
        """Run the callback unless cancelled or already fired."""
        with self._lock:
            if not self.pending:
                return
            self._fired = True
        self._callback()


class Scheduler(Protocol):
    """Anything that can run a callback after a delay."""

    def schedule(self, delay: float, callback: Callable[[], None]) -> ScheduledTransition:
        ...


class ThreadingScheduler:
    """Runs callbacks on daemon threading.Timer threads."""

    def schedule(self, delay: float, callback: Callable[[], None]) -> ScheduledTransition:
        handle = _TimerTransition(delay, callback)
        handle.start()
        return handle


class _TimerTransition(ScheduledTransition):
    """ScheduledTransition backed by a threading.Timer."""

    def __init__(self, delay: float, callback: Callable[[], None]) -> None:
        super().__init__(delay, callback)
        self._timer = threading.Timer(delay, self._run)
        self._timer.daemon = True
        self._timer.name = "quest-transition"

    def start(self) -> None:
        self._timer.start()

    def cancel(self) -> None:
        super().cancel()
        self._timer.cancel()

    def _run(self) -> None:
        try:
            self.fire()
        except Exception:
            logger.exception("Delayed transition failed")


class ManualScheduler:
    """
    Virtual-clock scheduler.

    Nothing runs until advance() moves the clock past a callback's due time.
    Callbacks fire in due-time order (ties in scheduling order), and callbacks
    scheduled while advancing fire too if they fall due within the step.
    """

    def __init__(self) -> None:
        self.now = 0.0
        self._queue: list[tuple[float, int, ScheduledTransition]] = []
        self._counter = itertools.count()

    def schedule(self, delay: float, callback: Callable[[], None]) -> ScheduledTransition:
        handle = ScheduledTransition(delay, callback)
        self._queue.append((self.now + delay, next(self._counter), handle))
        return handle

    @property
    def pending(self) -> list[ScheduledTransition]:
        """Handles that have neither fired nor been cancelled, in due order."""
        return [handle for _, _, handle in sorted(self._queue, key=lambda item: item[:2])
                if handle.pending]

    def advance(self, seconds: float) -> int:
        """Move the clock forward and fire everything that falls due.

        Returns:
            Number of callbacks fired
        """
        target = self.now + seconds
        fired = 0
        while True:
            self._queue = [item for item in self._queue if item[2].pending]
            due = [item for item in self._queue if item[0] <= target]
            if not due:
                break
            due_at, _, handle = min(due, key=lambda item: item[:2])
            self.now = max(self.now, due_at)
            handle.fire()
            fired += 1
        self.now = target
        return fired

    def run_all(self) -> int:
        """Fire every pending callback, however far in the future."""
        fired = 0
        while self.pending:
            due_at = min(item[0] for item in self._queue if item[2].pending)
            fired += self.advance(max(0.0, due_at - self.now))
        return fired
