"""Event models sent to the Raygun ingestion API.

The collector treats an `Event` as opaque: it only needs `new_event` to build
a default event from a message and `serialize_event` to turn one into bytes.
Field names are snake_case in Python and camelCase on the wire.
"""

from __future__ import annotations

import socket
import traceback
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

CLIENT_NAME = "raygun-python"
CLIENT_VERSION = "0.1.0"
CLIENT_URL = "https://github.com/raygun/raygun-python"


def utc_now() -> datetime:
    """Return the current UTC time as a timezone-aware datetime."""
    return datetime.now(tz=timezone.utc)


class _Model(BaseModel):
    # Mutable on purpose: capture options edit the event while it is being built.
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class StackFrame(_Model):
    line_number: int | None = None
    class_name: str | None = None
    file_name: str | None = None
    method_name: str | None = None


class ErrorInfo(_Model):
    message: str
    class_name: str | None = None
    stack_trace: list[StackFrame] = Field(default_factory=list)


class UserInfo(_Model):
    identifier: str | None = None


class ClientInfo(_Model):
    name: str = CLIENT_NAME
    version: str = CLIENT_VERSION
    client_url: str = CLIENT_URL


class EventDetails(_Model):
    machine_name: str | None = None
    version: str | None = None
    client: ClientInfo = Field(default_factory=ClientInfo)
    error: ErrorInfo
    user: UserInfo = Field(default_factory=UserInfo)
    tags: list[str] = Field(default_factory=list)

    # Arbitrary caller payload; serialization fails if it is not JSON-able.
    user_custom_data: Any = None


class Event(_Model):
    """One message/error occurrence plus optional metadata."""

    occurred_on: datetime = Field(default_factory=utc_now)
    details: EventDetails


def _current_stack(skip: int) -> list[StackFrame]:
    """Return the caller's stack, innermost frame first."""
    frames = traceback.extract_stack()[:-skip]
    return [
        StackFrame(line_number=f.lineno, file_name=f.filename, method_name=f.name)
        for f in reversed(frames)
    ]


def new_event(message: str) -> Event:
    """Build a default event for `message` with host, timestamp and call stack."""
    return Event(
        details=EventDetails(
            machine_name=socket.gethostname(),
            error=ErrorInfo(message=message, stack_trace=_current_stack(skip=2)),
        )
    )


def serialize_event(event: Event) -> bytes:
    """Encode an event as the JSON body expected by the `/entries` endpoint.

    Raises `pydantic_core.PydanticSerializationError` when custom data cannot
    be represented as JSON.
    """
    return event.model_dump_json(by_alias=True, exclude_none=True).encode("utf-8")
