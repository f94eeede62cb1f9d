"""Pending-event counter used to drain the collector before exit."""

from __future__ import annotations

import threading


class CompletionTracker:
    """Counts submitted events that workers have not finished yet.

    `begin` runs on the capturing thread before the event is queued and
    `finish` runs on the worker once the send attempt is over, whatever its
    outcome. `wait` blocks until the count is back to zero.
    """

    def __init__(self) -> None:
        self._cond = threading.Condition()
        self._pending = 0

    @property
    def pending(self) -> int:
        with self._cond:
            return self._pending

    def begin(self) -> None:
        with self._cond:
            self._pending += 1

    def finish(self) -> None:
        with self._cond:
            if self._pending == 0:
                raise RuntimeError("finish() called with no pending events")
            self._pending -= 1
            if self._pending == 0:
                self._cond.notify_all()

    def wait(self) -> None:
        """Block until every begun event has finished."""
        with self._cond:
            self._cond.wait_for(lambda: self._pending == 0)
