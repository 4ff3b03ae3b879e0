"""A wait group that limits how many workers run at once."""

from __future__ import annotations

import threading


class WaitGroupPool:
    """Counts running workers and blocks ``add`` while ``size`` are running.

    A size of zero or less means no limit.
    """

    def __init__(self, size: int) -> None:
        self._slots = threading.Semaphore(size) if size > 0 else None
        self._cond = threading.Condition()
        self._count = 0

    def add(self) -> None:
        """Take a slot, waiting for one if the pool is full."""
        if self._slots is not None:
            self._slots.acquire()
        with self._cond:
            self._count += 1

    def done(self) -> None:
        """Release a slot taken by ``add``."""
        with self._cond:
            if self._count == 0:
                raise ValueError("done called more times than add")
            self._count -= 1
            if self._count == 0:
                self._cond.notify_all()
        if self._slots is not None:
            self._slots.release()

    def wait(self) -> None:
        """Block until every ``add`` has been matched by ``done``."""
        with self._cond:
            self._cond.wait_for(lambda: self._count == 0)