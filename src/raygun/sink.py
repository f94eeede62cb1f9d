"""Event sinks (delivery backends)."""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Sequence
from typing import Protocol

import requests  # type: ignore
from requests.adapters import HTTPAdapter  # type: ignore

from .models import Event, serialize_event

DEFAULT_ENDPOINT = "https://api.raygun.io"
ENTRIES_PATH = "/entries"


def discard_logger() -> logging.Logger:
    """Return a logger whose output goes nowhere."""
    logger = logging.getLogger("raygun.discard")
    if not logger.handlers:
        logger.addHandler(logging.NullHandler())
    logger.propagate = False
    return logger


class Sink(Protocol):
    """A synchronous sink for events.

    Sinks are called from delivery worker threads, possibly several at once,
    so implementations must be thread-safe.
    """

    def send(self, event: Event) -> None:
        """Deliver a single event."""

    def close(self) -> None:
        """Close any underlying resources."""


class InMemorySink:
    """In-memory sink for tests and local debugging."""

    def __init__(self) -> None:
        """Create an empty in-memory sink."""
        self._lock = threading.Lock()
        self._events: list[Event] = []

    def send(self, event: Event) -> None:
        """Append an event to the in-memory list (thread-safe)."""
        with self._lock:
            self._events.append(event)

    def close(self) -> None:  # noqa: D401 - keep interface consistent
        """No-op."""

    def snapshot(self) -> Sequence[Event]:
        """Return a point-in-time copy of all received events."""
        with self._lock:
            return list(self._events)


class HttpSink:
    """Posts each event to `<endpoint>/entries` and forgets about it.

    One `requests.Session` is shared by every worker. Each step of a send
    (serialize, build, execute) logs its own failure; none of them raises.
    Response status codes are not inspected.
    """

    def __init__(
        self,
        api_key: str,
        *,
        endpoint: str = DEFAULT_ENDPOINT,
        request_timeout: float = 5.0,
        idle_timeout: float = 30.0,
        max_idle_conns: int = 10,
        logger: logging.Logger | None = None,
    ) -> None:
        self.api_key = api_key
        self.url = endpoint.rstrip("/") + ENTRIES_PATH
        self.request_timeout = request_timeout
        self.idle_timeout = idle_timeout
        self.logger = logger or discard_logger()

        self._adapter = HTTPAdapter(pool_connections=1, pool_maxsize=max_idle_conns)
        self._session = requests.Session()
        self._session.mount("https://", self._adapter)
        self._session.mount("http://", self._adapter)
        # No response compression negotiation.
        self._session.headers["Accept-Encoding"] = "identity"

        self._lock = threading.Lock()
        self._last_used = time.monotonic()

    def _expire_idle_connections(self) -> None:
        """Drop pooled connections that sat unused longer than `idle_timeout`.

        This is lazy: the check runs right before the next request, so after
        traffic stops idle sockets stay open until another send or `close()`.
        """
        with self._lock:
            if time.monotonic() - self._last_used > self.idle_timeout:
                self._adapter.close()

    def _mark_used(self) -> None:
        with self._lock:
            self._last_used = time.monotonic()

    def _build_request(self, body: bytes) -> requests.PreparedRequest:
        request = requests.Request(
            "POST",
            self.url,
            data=body,
            headers={"X-ApiKey": self.api_key, "Content-Type": "application/json"},
        )
        return self._session.prepare_request(request)

    def send(self, event: Event) -> None:
        """Serialize and POST one event; failures are logged, never raised."""
        body = b""
        try:
            body = serialize_event(event)
        except Exception as exc:  # noqa: BLE001 - the request is still attempted
            self.logger.warning("raygun: failed to marshal raygun error: %s", exc)

        try:
            prepared = self._build_request(body)
        except Exception as exc:  # noqa: BLE001 - skip this event
            self.logger.warning("raygun: failed to create error request: %s", exc)
            return

        self._expire_idle_connections()
        response: requests.Response | None = None
        try:
            response = self._session.send(prepared, timeout=self.request_timeout)
        except requests.RequestException as exc:
            self.logger.warning("raygun: request failed: %s", exc)
        finally:
            if response is not None:
                response.close()
            # Idle time counts from the end of the last request.
            self._mark_used()

    def close(self) -> None:
        """Close the shared HTTP session."""
        self._session.close()
