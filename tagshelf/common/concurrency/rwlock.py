from __future__ import annotations

import threading
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator


@dataclass
class LockStats:
    readers: int = 0
    writer_active: bool = False
    writers_waiting: int = 0


class ReadWriteLock:
    """
    A shared/exclusive lock built on a single Condition.

    - Any number of readers may hold the lock together.
    - A writer holds it alone, excluding readers and other writers.
    - Writer-preferring: once a writer is waiting, new readers queue behind it.

    Not reentrant. A thread holding the read lock must not ask for the write
    lock (it would wait on itself).

    Usage
    -----
        lock = ReadWriteLock()
        with lock.read_locked():
            ...
        with lock.write_locked():
            ...
    """

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    # -------------------------
    # Shared (read) side
    # -------------------------
    def acquire_read(self) -> None:
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1

    def release_read(self) -> None:
        with self._cond:
            if self._readers <= 0:
                raise RuntimeError("release_read() without matching acquire_read()")
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    # -------------------------
    # Exclusive (write) side
    # -------------------------
    def acquire_write(self) -> None:
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True

    def release_write(self) -> None:
        with self._cond:
            if not self._writer:
                raise RuntimeError("release_write() without matching acquire_write()")
            self._writer = False
            self._cond.notify_all()

    # -------------------------
    # Context managers
    # -------------------------
    @contextmanager
    def read_locked(self) -> Iterator[None]:
        self.acquire_read()
        try:
            yield
        finally:
            self.release_read()

    @contextmanager
    def write_locked(self) -> Iterator[None]:
        self.acquire_write()
        try:
            yield
        finally:
            self.release_write()

    def stats(self) -> LockStats:
        """Return a *snapshot* of the current holders/waiters."""
        with self._cond:
            return LockStats(
                readers=self._readers,
                writer_active=self._writer,
                writers_waiting=self._writers_waiting,
            )
