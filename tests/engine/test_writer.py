"""Tests for tribe_quest/engine/writer.py: ordered background store writes."""

import logging
import threading

from tribe_quest.engine.ports import PersistenceWriteError
from tribe_quest.engine.writer import StoreWriter


class TestStoreWriter:
    def test_flush_without_writes(self):
        assert StoreWriter().flush(timeout=0.1)

    def test_writes_run_in_submission_order(self):
        writer = StoreWriter()
        calls = []

        for n in range(5):
            writer.submit(f"write {n}", lambda n=n: calls.append(n))

        assert writer.flush(timeout=2)
        assert calls == [0, 1, 2, 3, 4]

    def test_writes_run_off_the_caller_thread(self):
        writer = StoreWriter(name="store-test")
        threads = []

        writer.submit("record", lambda: threads.append(threading.current_thread().name))

        assert writer.flush(timeout=2)
        assert threads == ["store-test"]

    def test_submit_does_not_wait(self):
        writer = StoreWriter()
        release = threading.Event()

        writer.submit("slow", lambda: release.wait(5))

        assert not writer.flush(timeout=0.05)
        release.set()
        assert writer.flush(timeout=2)

    def test_write_error_is_logged(self, caplog):
        writer = StoreWriter()

        def failing():
            raise PersistenceWriteError("timeout")

        with caplog.at_level(logging.WARNING, logger="tribe_quest.engine.writer"):
            writer.submit("Game 1 score update", failing)
            assert writer.flush(timeout=2)

        assert "Game 1 score update failed" in caplog.text

    def test_unexpected_error_keeps_worker_alive(self, caplog):
        writer = StoreWriter()
        calls = []

        def broken():
            raise RuntimeError("bug")

        writer.submit("broken write", broken)
        writer.submit("next write", lambda: calls.append("next"))

        assert writer.flush(timeout=2)
        assert calls == ["next"]
        assert "Unexpected error during broken write" in caplog.text

    def test_close_drains_queued_writes(self):
        writer = StoreWriter()
        calls = []
        writer.submit("first", lambda: calls.append(1))
        writer.submit("second", lambda: calls.append(2))

        writer.close(timeout=2)

        assert calls == [1, 2]

    def test_submit_after_close_starts_new_worker(self):
        writer = StoreWriter()
        calls = []
        writer.submit("before", lambda: calls.append("before"))
        writer.close(timeout=2)

        writer.submit("after", lambda: calls.append("after"))

        assert writer.flush(timeout=2)
        assert calls == ["before", "after"]
