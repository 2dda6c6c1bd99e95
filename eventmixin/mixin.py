"""Mixin that gives any class the emitter operations."""

from __future__ import annotations

from typing import Any, ClassVar, TypeVar

from .config import EmitterConfig
from .emitter import EventEmitter, EventNames, Subscription
from .registry import NO_CONTEXT, Listener

HostT = TypeVar("HostT", bound="EventEmitterMixin")


class EventEmitterMixin:
    """Forward ``on``/``once``/``off``/``emit`` to an owned :class:`EventEmitter`.

    The emitter is created on first use and stored on the instance, so hosts
    do not need to call an ``__init__`` and no two instances share listeners::

        class Player(EventEmitterMixin):
            def start(self):
                self.emit("started", self)

        player = Player().on("started", announce)
    """

    event_emitter_config: ClassVar[EmitterConfig | None] = None

    @property
    def event_emitter(self) -> EventEmitter:
        emitter = self.__dict__.get("_event_emitter")
        if emitter is None:
            emitter = self._create_event_emitter()
            self.__dict__["_event_emitter"] = emitter
        return emitter

    def _create_event_emitter(self) -> EventEmitter:
        return EventEmitter(host=self, config=self.event_emitter_config)

    def on(
        self: HostT, event_names: EventNames, listener: Listener, context: Any = NO_CONTEXT
    ) -> HostT:
        self.event_emitter.on(event_names, listener, context)
        return self

    def once(
        self: HostT, event_name: str, listener: Listener, context: Any = NO_CONTEXT
    ) -> HostT:
        self.event_emitter.once(event_name, listener, context)
        return self

    def off(
        self: HostT,
        event_names: EventNames | None = None,
        listener: Listener | None = None,
        context: Any = NO_CONTEXT,
    ) -> HostT:
        self.event_emitter.off(event_names, listener, context)
        return self

    def emit(self: HostT, event_names: EventNames, *args: Any) -> HostT:
        self.event_emitter.emit(event_names, *args)
        return self

    def subscribe(
        self, event_names: EventNames, listener: Listener, context: Any = NO_CONTEXT
    ) -> Subscription:
        return self.event_emitter.subscribe(event_names, listener, context)


__all__ = ["EventEmitterMixin"]
