"""
Tribe Quest - Background Store Writer

Runs persistence writes off the engine lock, in submission order, on a single
daemon thread. Failures are logged and never reach the caller.
"""

from __future__ import annotations

import logging
import queue
import threading
from typing import Callable, Optional, Tuple

from tribe_quest.engine.ports import PersistenceWriteError

logger = logging.getLogger(__name__)

_Job = Optional[Tuple[str, Callable[[], None]]]


class StoreWriter:
    """
    Ordered fire-and-forget write queue.

    The worker thread starts with the first submitted write. After close()
    the remaining queued writes still run; a later submit starts a new worker.
    """

    def __init__(self, name: str = "tribe-quest-writer") -> None:
        self._name = name
        self._lock = threading.Lock()
        self._jobs: queue.Queue[_Job] | None = None
        self._thread: threading.Thread | None = None

    def submit(self, description: str, operation: Callable[[], None]) -> None:
        """Queue a write; returns immediately."""
        self._ensure_worker().put((description, operation))

    def flush(self, timeout: float | None = None) -> bool:
        """Wait until every write queued so far has run.

        Returns:
            False if the timeout expired first
        """
        with self._lock:
            jobs = self._jobs
        if jobs is None:
            return True
        done = threading.Event()
        jobs.put(("flush", done.set))
        return done.wait(timeout)

    def close(self, timeout: float | None = 0) -> None:
        """Stop the worker once the queued writes have run.

        Args:
            timeout: Seconds to wait for the worker to drain; 0 returns at once
        """
        with self._lock:
            jobs, thread = self._jobs, self._thread
            self._jobs, self._thread = None, None
        if jobs is None:
            return
        jobs.put(None)
        if timeout != 0:
            thread.join(timeout=timeout)

    def _ensure_worker(self) -> queue.Queue[_Job]:
        with self._lock:
            if self._jobs is None:
                self._jobs = queue.Queue()
                self._thread = threading.Thread(
                    target=self._run, args=(self._jobs,), daemon=True, name=self._name
                )
                self._thread.start()
            return self._jobs

    def _run(self, jobs: queue.Queue[_Job]) -> None:
        while True:
            job = jobs.get()
            if job is None:
                return
            description, operation = job
            try:
                operation()
            except PersistenceWriteError:
                logger.warning(
                    "%s failed; continuing with in-memory state", description, exc_info=True
                )
            except Exception:
                logger.exception("Unexpected error during %s", description)
