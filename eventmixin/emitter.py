"""Event emitter component: registration, removal and deferred emission."""

from __future__ import annotations

import logging
from functools import partial
from typing import Any, Sequence, Union

from .config import EmitterConfig
from .exceptions import InvalidEventNameError, InvalidListenerError
from .registry import NO_CONTEXT, Listener, ListenerRegistration, ListenerRegistry
from .scheduler import AsyncioScheduler, Scheduler
from .utils import normalize_event_names

logger = logging.getLogger(__name__)

EventNames = Union[str, Sequence[str]]


class EventEmitter:
    """Publish/subscribe state owned by a single host object.

    Every public operation returns the host (the emitter itself when it is
    used standalone) so calls can be chained. Listeners run later, one loop
    callback per listener, never inside ``emit``.

    Listeners are matched by identity; contexts by identity, or by value for
    strings, numbers and bytes. A bound method such as
    ``obj.handle`` is a new object on every attribute access, so register
    ``Type.handle`` with ``context=obj`` (the context is passed as the first
    positional argument) or keep the handle returned by :meth:`subscribe`.
    """

    def __init__(
        self,
        *,
        host: Any = None,
        config: EmitterConfig | None = None,
        scheduler: Scheduler | None = None,
    ) -> None:
        self.config = config or EmitterConfig()
        self._host = host
        self._scheduler = scheduler or AsyncioScheduler(
            capture_errors=self.config.capture_listener_errors
        )
        self._registry: ListenerRegistry | None = None
        self._limit_warned: set[str] = set()

    @property
    def host(self) -> Any:
        return self if self._host is None else self._host

    @property
    def registry(self) -> ListenerRegistry:
        if self._registry is None:
            self._registry = ListenerRegistry()
        return self._registry

    def on(self, event_names: EventNames, listener: Listener, context: Any = NO_CONTEXT) -> Any:
        """Call ``listener`` every time any of ``event_names`` is emitted.

        Re-registering the same listener and context is a no-op, except that
        it turns a pending :meth:`once` registration into a persistent one.
        """
        names = _require_event_names(event_names)
        _require_listener(listener)

        registry = self.registry
        for name in names:
            registry.discard(name, listener, context)
        for name in names:
            registry.add(ListenerRegistration(name, listener, context))
            self._check_listener_limit(name)
        return self.host

    def once(self, event_name: str, listener: Listener, context: Any = NO_CONTEXT) -> Any:
        """Call ``listener`` the first time ``event_name`` is emitted, then drop it.

        Only a single event name is accepted. Has no effect when the listener
        and context are already registered for ``event_name``.
        """
        if not isinstance(event_name, str):
            raise InvalidEventNameError(
                f"the eventName parameter must be a string, but was: {type(event_name).__name__}",
                event_name,
            )
        if not event_name:
            raise InvalidEventNameError("the eventName parameter must not be empty", event_name)
        if any(char.isspace() for char in event_name):
            raise InvalidEventNameError(
                f"the eventName parameter must be a single event name; it should not contain "
                f"a space, but was: {event_name!r}",
                event_name,
            )
        _require_listener(listener)

        def call_once(*call_args: Any) -> Any:
            # Several emits may be queued before the first one runs.
            registration = self.registry.find(event_name, listener, context)
            if registration is None:
                return None
            if not registration.once:
                # promoted by on() while queued
                return listener(*call_args)
            if registration.callback is not call_once:
                return None
            try:
                return listener(*call_args)
            finally:
                if self.registry.find(event_name, listener, context) is registration:
                    self.registry.discard(event_name, listener, context)

        added = self.registry.add(
            ListenerRegistration(event_name, listener, context, callback=call_once, once=True)
        )
        if added:
            self._check_listener_limit(event_name)
        return self.host

    def off(
        self,
        event_names: EventNames | None = None,
        listener: Listener | None = None,
        context: Any = NO_CONTEXT,
    ) -> Any:
        """Remove listeners.

        With no arguments (or any falsy ``event_names`` other than an empty
        list) every listener goes. With only ``event_names`` all
        listeners of those events go. Adding ``listener`` limits removal to
        that function under any context; adding ``context`` as well limits it
        to that exact registration.

        Note the asymmetry with :meth:`on`: there an omitted context is a
        specific value, here it matches any context.
        """
        if not event_names and not isinstance(event_names, (list, tuple)):
            if self._registry is not None:
                self._registry.clear()
            self._limit_warned.clear()
            return self.host

        names = _require_event_names(event_names, allow_empty=True)
        registry = self.registry
        for name in names:
            registry.remove(name, listener, context)
            if not registry.count(name):
                self._limit_warned.discard(name)
        return self.host

    def emit(self, event_names: EventNames, *args: Any) -> Any:
        """Schedule every listener of ``event_names`` with ``args``.

        Returns before any listener runs. A listener removed with :meth:`off`
        after this call still runs unless it was registered with
        :meth:`once`. A name given twice is emitted twice.
        """
        names = _require_event_names(event_names, unique=False)

        registry = self.registry
        for name in names:
            registrations = registry.get(name)
            if not registrations:
                logger.debug("No listeners registered for '%s'.", name)
                continue
            logger.debug("Emitting '%s' to %d listener(s).", name, len(registrations))
            for registration in registrations:
                self._scheduler.schedule(name, partial(registration.invoke, args))
        return self.host

    def subscribe(
        self, event_names: EventNames, listener: Listener, context: Any = NO_CONTEXT
    ) -> "Subscription":
        """Like :meth:`on`, but return a handle that removes exactly this registration."""
        names = _require_event_names(event_names)
        self.on(names, listener, context)
        return Subscription(self, tuple(names), listener, context)

    def listeners(self, event_name: str) -> tuple[Listener, ...]:
        if self._registry is None:
            return ()
        return tuple(registration.listener for registration in self._registry.get(event_name))

    def listener_count(self, event_name: str) -> int:
        if self._registry is None:
            return 0
        return self._registry.count(event_name)

    def event_names(self) -> tuple[str, ...]:
        if self._registry is None:
            return ()
        return self._registry.event_names()

    def _check_listener_limit(self, event_name: str) -> None:
        limit = self.config.max_listeners
        if not limit or event_name in self._limit_warned:
            return
        count = self.registry.count(event_name)
        if count > limit:
            self._limit_warned.add(event_name)
            logger.warning(
                "Event '%s' has %d listeners (limit %d); possible listener leak.",
                event_name,
                count,
                limit,
            )


class Subscription:
    """Handle for listeners registered through :meth:`EventEmitter.subscribe`."""

    __slots__ = ("_emitter", "event_names", "listener", "context", "_active")

    def __init__(
        self,
        emitter: EventEmitter,
        event_names: tuple[str, ...],
        listener: Listener,
        context: Any = NO_CONTEXT,
    ) -> None:
        self._emitter = emitter
        self.event_names = event_names
        self.listener = listener
        self.context = context
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def cancel(self) -> None:
        if not self._active:
            return
        self._active = False
        registry = self._emitter.registry
        for name in self.event_names:
            registry.discard(name, self.listener, self.context)

    def __enter__(self) -> "Subscription":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.cancel()

    def __repr__(self) -> str:
        state = "active" if self._active else "cancelled"
        return f"<Subscription {' '.join(self.event_names)} {self.listener!r} ({state})>"


def _require_event_names(
    value: Any, *, allow_empty: bool = False, unique: bool = True
) -> list[str]:
    names = normalize_event_names(value, unique=unique)
    if names is None and allow_empty and isinstance(value, (list, tuple)) and not value:
        return []
    if names is None or (not names and not allow_empty):
        raise InvalidEventNameError(
            "the eventNames parameter must be a string or an array of strings, "
            f"but was: {value!r}",
            value,
        )
    return names


def _require_listener(listener: Any) -> None:
    if not callable(listener):
        raise InvalidListenerError(listener)


__all__ = ["EventEmitter", "EventNames", "Subscription"]
