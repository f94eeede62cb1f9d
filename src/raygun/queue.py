"""Bounded blocking queue of pending events."""

from __future__ import annotations

import queue

from .models import Event


class EventQueue:
    """Fixed-capacity FIFO shared by capturing threads and delivery workers.

    `enqueue` blocks while the queue is full instead of dropping events; this
    is the collector's only backpressure mechanism.
    """

    def __init__(self, capacity: int = 10000) -> None:
        if capacity < 1:
            raise ValueError(f"capacity must be >= 1. Got: {capacity}")
        self._capacity = capacity
        self._queue: queue.Queue[Event] = queue.Queue(maxsize=capacity)

    @property
    def capacity(self) -> int:
        return self._capacity

    def enqueue(self, event: Event) -> None:
        """Append an event, waiting for a free slot if necessary."""
        self._queue.put(event)

    def dequeue(self) -> Event:
        """Remove and return the oldest event, waiting until one is available."""
        return self._queue.get()

    def qsize(self) -> int:
        """Approximate number of queued events (diagnostics only)."""
        return self._queue.qsize()

    def __len__(self) -> int:
        return self.qsize()
