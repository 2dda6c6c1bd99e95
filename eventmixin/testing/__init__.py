"""Testing utilities for eventmixin."""

from .factory import EventNameFactory
from .fixtures import emitter, event_name, tick
from .spy import AsyncListenerSpy, ListenerSpy

__all__ = [
    "AsyncListenerSpy",
    "EventNameFactory",
    "ListenerSpy",
    "emitter",
    "event_name",
    "tick",
]
