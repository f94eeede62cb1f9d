"""Asynchronous, best-effort error reporting to Raygun.

Capture calls queue events and return; a small pool of background threads
posts them to the ingestion API. Call `wait()` before exit to drain.
"""

from .collector import Collector, NoopCollector, RaygunCollector, new_collector
from .config import Config, RaygunConfig, load_config
from .models import Event, new_event, serialize_event
from .options import CaptureOption, with_custom_data, with_tags, with_user
from .queue import EventQueue
from .sink import HttpSink, InMemorySink, Sink
from .tracker import CompletionTracker

__all__ = [
    "CaptureOption",
    "Collector",
    "CompletionTracker",
    "Config",
    "Event",
    "EventQueue",
    "HttpSink",
    "InMemorySink",
    "NoopCollector",
    "RaygunConfig",
    "RaygunCollector",
    "Sink",
    "load_config",
    "new_collector",
    "new_event",
    "serialize_event",
    "with_custom_data",
    "with_tags",
    "with_user",
]
