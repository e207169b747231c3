"""Thread-safe outstanding-task counter for fan-out walks."""

from __future__ import annotations

import threading


class SyncCounter:
    """Counts outstanding tasks; ``wait`` blocks until the count drains to zero.

    Unlike a join on each task, children are tracked independently of the
    task that spawned them, so a parent may finish before its children.
    """

    def __init__(self) -> None:
        self._count = 0
        self._cond = threading.Condition()

    @property
    def count(self) -> int:
        with self._cond:
            return self._count

    def add(self, n: int = 1) -> None:
        with self._cond:
            if self._count + n < 0:
                raise ValueError("counter would become negative")
            self._count += n
            if self._count == 0:
                self._cond.notify_all()

    def done(self) -> None:
        self.add(-1)

    def wait(self, timeout: float | None = None) -> bool:
        with self._cond:
            return self._cond.wait_for(lambda: self._count == 0, timeout=timeout)
