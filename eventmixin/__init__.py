"""eventmixin public API."""

from .config import EmitterConfig
from .emitter import EventEmitter, Subscription
from .exceptions import (
    EventEmitterError,
    InvalidEventNameError,
    InvalidListenerError,
    SchedulerUnavailable,
)
from .mixin import EventEmitterMixin
from .registry import NO_CONTEXT, ListenerRegistration, ListenerRegistry
from .scheduler import AsyncioScheduler, Scheduler

__all__ = [
    "AsyncioScheduler",
    "EmitterConfig",
    "EventEmitter",
    "EventEmitterError",
    "EventEmitterMixin",
    "InvalidEventNameError",
    "InvalidListenerError",
    "ListenerRegistration",
    "ListenerRegistry",
    "NO_CONTEXT",
    "Scheduler",
    "SchedulerUnavailable",
    "Subscription",
]
