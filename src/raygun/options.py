"""Per-capture options.

Each option is a callable that edits the event being built. Options are
applied in the order they are passed, so a later option wins when two touch
the same field.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any, TypeAlias

from .models import Event

CaptureOption: TypeAlias = Callable[[Event], None]


def with_user(identifier: str) -> CaptureOption:
    """Attach a user identifier to the event."""

    def _apply(event: Event) -> None:
        event.details.user.identifier = identifier

    return _apply


def with_tags(tags: Sequence[str]) -> CaptureOption:
    """Replace the event's tags. A bare string is a single tag."""
    values = [tags] if isinstance(tags, str) else list(tags)

    def _apply(event: Event) -> None:
        event.details.tags = list(values)

    return _apply


def with_custom_data(data: Any) -> CaptureOption:
    """Attach an arbitrary JSON-serializable payload."""

    def _apply(event: Event) -> None:
        event.details.user_custom_data = data

    return _apply


def apply_options(event: Event, options: Sequence[CaptureOption]) -> Event:
    for option in options:
        option(event)
    return event
