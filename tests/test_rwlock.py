"""Tests for the reader-writer lock."""

import threading
import time

import pytest
from shortener.rwlock import ReadWriteLock


class TestReadWriteLock:
    """Test lock semantics."""

    def test_readers_share(self):
        """Two threads hold the read lock at the same time."""
        lock = ReadWriteLock()
        both_inside = threading.Barrier(2, timeout=5)

        def reader():
            with lock.read_locked():
                both_inside.wait()

        threads = [threading.Thread(target=reader) for _ in range(2)]
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=5)

        assert not both_inside.broken

    def test_writer_excludes_readers(self):
        lock = ReadWriteLock()
        events = []
        lock.acquire_write()

        def reader():
            with lock.read_locked():
                events.append("read")

        t = threading.Thread(target=reader)
        t.start()
        time.sleep(0.05)
        events.append("write-done")
        lock.release_write()
        t.join(timeout=5)

        assert events == ["write-done", "read"]

    def test_writer_waits_for_readers(self):
        lock = ReadWriteLock()
        events = []
        lock.acquire_read()

        def writer():
            with lock.write_locked():
                events.append("write")

        t = threading.Thread(target=writer)
        t.start()
        time.sleep(0.05)
        events.append("read-done")
        lock.release_read()
        t.join(timeout=5)

        assert events == ["read-done", "write"]

    def test_waiting_writer_blocks_new_readers(self):
        """A queued writer goes before readers that arrive after it."""
        lock = ReadWriteLock()
        events = []
        lock.acquire_read()

        def writer():
            with lock.write_locked():
                events.append("write")

        def late_reader():
            with lock.read_locked():
                events.append("late-read")

        w = threading.Thread(target=writer)
        w.start()
        time.sleep(0.05)
        r = threading.Thread(target=late_reader)
        r.start()
        time.sleep(0.05)
        lock.release_read()
        w.join(timeout=5)
        r.join(timeout=5)

        assert events == ["write", "late-read"]

    def test_writers_are_exclusive(self):
        lock = ReadWriteLock()
        counter = {"value": 0}

        def increment():
            for _ in range(1000):
                with lock.write_locked():
                    current = counter["value"]
                    counter["value"] = current + 1

        threads = [threading.Thread(target=increment) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=10)

        assert counter["value"] == 8000

    def test_read_timeout_while_writer_holds(self):
        lock = ReadWriteLock()
        lock.acquire_write()

        assert lock.acquire_read(timeout=0.05) is False

        lock.release_write()
        assert lock.acquire_read(timeout=0.05) is True
        lock.release_read()

    def test_release_without_acquire(self):
        lock = ReadWriteLock()

        with pytest.raises(RuntimeError):
            lock.release_read()
        with pytest.raises(RuntimeError):
            lock.release_write()

    def test_released_on_exception(self):
        lock = ReadWriteLock()

        with pytest.raises(ValueError):
            with lock.write_locked():
                raise ValueError("boom")

        # Would block forever if the write lock leaked
        with lock.read_locked():
            pass
