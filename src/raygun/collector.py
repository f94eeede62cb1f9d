"""Error-report collector: capture API plus a background delivery pool.

- Capture calls build an `Event`, register it with the completion tracker and
  put it on a bounded queue. They never wait on the network; they only block
  when the queue is full.
- A fixed number of daemon worker threads take events off the queue and hand
  them to a sink. Delivery is at most once: failures are logged and dropped.
- `wait()` blocks until every captured event has been processed, which is the
  way to drain before the process exits. There is no stop operation; workers
  live as long as the process.
"""

from __future__ import annotations

import copy
import logging
import sys
import threading
from collections.abc import Iterator
from contextlib import AbstractContextManager, contextmanager
from typing import Any, Protocol

from .config import RaygunConfig
from .models import Event, new_event
from .options import CaptureOption, apply_options
from .queue import EventQueue
from .sink import DEFAULT_ENDPOINT, HttpSink, Sink, discard_logger
from .tracker import CompletionTracker

_CURRENT_EXCEPTION: Any = object()


class Collector(Protocol):
    """Public capture surface shared by the real and the no-op collector."""

    def capture(self, event: Event) -> None: ...

    def capture_error(self, err: BaseException, *options: CaptureOption) -> None: ...

    def capture_message(self, message: str, *options: CaptureOption) -> None: ...

    def capture_panic(self, value: Any = _CURRENT_EXCEPTION) -> None: ...

    def recover(self) -> AbstractContextManager[None]: ...

    def wait(self) -> None: ...


class RaygunCollector:
    """Collector that delivers events to Raygun from a pool of worker threads.

    Members:
    - Application name / API key: `app_name`, `api_key`
    - Worker count: `workers` (fixed at construction)
    - Pending events: `queue` (bounded, `queue_size` slots)
    - Drain counter: `tracker`
    - Delivery backend: `sink` (an `HttpSink` unless one is injected)
    """

    def __init__(
        self,
        app_name: str,
        api_key: str,
        *,
        workers: int = 1,
        queue_size: int = 10000,
        logger: logging.Logger | None = None,
        endpoint: str = DEFAULT_ENDPOINT,
        sink: Sink | None = None,
        request_timeout: float = 5.0,
        idle_timeout: float = 30.0,
        max_idle_conns: int = 10,
    ) -> None:
        if workers < 1:
            raise ValueError(f"workers must be >= 1. Got: {workers}")

        self.app_name = app_name
        self.api_key = api_key
        self.workers = workers
        self.logger = logger or discard_logger()

        self.queue = EventQueue(queue_size)
        self.tracker = CompletionTracker()
        self.sink: Sink = sink or HttpSink(
            api_key,
            endpoint=endpoint,
            request_timeout=request_timeout,
            idle_timeout=idle_timeout,
            max_idle_conns=max_idle_conns,
            logger=self.logger,
        )

        self._threads: list[threading.Thread] = []
        self._start()

    @property
    def queue_size(self) -> int:
        return self.queue.capacity

    def _start(self) -> None:
        for i in range(self.workers):
            thread = threading.Thread(target=self._run_worker, name=f"raygun-worker-{i}", daemon=True)
            thread.start()
            self._threads.append(thread)

    def _run_worker(self) -> None:
        """Deliver events forever; one event's failure never stops the loop."""
        while True:
            event = self.queue.dequeue()
            try:
                self.sink.send(event)
            except BaseException:  # noqa: BLE001 - a sink must not end the worker
                self.logger.exception("raygun: sink failed to deliver event")
            finally:
                self.tracker.finish()

    def _submit(self, event: Event) -> None:
        # Count first so a worker can never finish an event that was not begun.
        self.tracker.begin()
        self.queue.enqueue(event)

    def capture(self, event: Event) -> None:
        """Queue a copy of a fully built event; later edits by the caller are not sent."""
        # Custom data is passed by reference; everything else is copied.
        custom = event.details.user_custom_data
        self._submit(copy.deepcopy(event, {id(custom): custom}))

    def capture_message(self, message: str, *options: CaptureOption) -> None:
        """Build an event from `message`, apply `options` in order and queue it."""
        self._submit(apply_options(new_event(message), options))

    def capture_error(self, err: BaseException, *options: CaptureOption) -> None:
        """Capture an exception by its message."""
        self.capture_message(str(err), *options)

    def capture_panic(self, value: Any = _CURRENT_EXCEPTION) -> None:
        """Capture a fault recovered from an unexpected failure.

        With no argument, the exception currently being handled is used (call
        it from an `except` block). Exceptions go through `capture_error`,
        strings through `capture_message`, and any other value is captured by
        its `repr`. Nothing to capture is a no-op.
        """
        if value is _CURRENT_EXCEPTION:
            value = sys.exc_info()[1]
        if value is None:
            return
        if isinstance(value, BaseException):
            self.capture_error(value)
        elif isinstance(value, str):
            self.capture_message(value)
        else:
            self.capture_message(repr(value))

    @contextmanager
    def recover(self) -> Iterator[None]:
        """Capture and suppress any exception raised inside the block."""
        try:
            yield
        except Exception as exc:  # noqa: BLE001 - reported, then suppressed
            self.capture_panic(exc)

    def wait(self) -> None:
        """Block until every captured event has been processed."""
        self.tracker.wait()


class NoopCollector:
    """Collector used when reporting is disabled; every call does nothing."""

    def capture(self, event: Event) -> None:
        pass

    def capture_message(self, message: str, *options: CaptureOption) -> None:
        pass

    def capture_error(self, err: BaseException, *options: CaptureOption) -> None:
        pass

    def capture_panic(self, value: Any = _CURRENT_EXCEPTION) -> None:
        pass

    @contextmanager
    def recover(self) -> Iterator[None]:
        # Nothing records the fault, so it is not swallowed either.
        yield

    def wait(self) -> None:
        pass


def new_collector(config: RaygunConfig, *, logger: logging.Logger | None = None) -> Collector:
    """Build a collector from configuration (a `NoopCollector` when disabled)."""
    if not config.enabled:
        return NoopCollector()
    return RaygunCollector(
        config.app_name,
        config.api_key,
        workers=config.workers,
        queue_size=config.queue_size,
        logger=logger,
        endpoint=config.endpoint,
        request_timeout=config.request_timeout,
        idle_timeout=config.idle_timeout,
        max_idle_conns=config.max_idle_conns,
    )
