"""Listener storage and identity matching."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Iterator

from .utils import filter_excluding, find_first

logger = logging.getLogger(__name__)

Listener = Callable[..., Any]


class _NoContextType:
    __slots__ = ()

    def __repr__(self) -> str:
        return "NO_CONTEXT"

    def __reduce__(self) -> str:
        return "NO_CONTEXT"


NO_CONTEXT: Any = _NoContextType()
"""Marks a registration made without a context.

Distinct from ``None``: a listener registered with ``context=None`` receives
``None`` as its first argument.
"""

_VALUE_CONTEXT_TYPES = (str, int, float, bytes, bool)


def same_context(first: Any, second: Any) -> bool:
    """Identity for objects; equality for scalar values of the same type."""
    if first is second:
        return True
    return (
        type(first) is type(second)
        and isinstance(first, _VALUE_CONTEXT_TYPES)
        and first == second
    )


@dataclass(slots=True)
class ListenerRegistration:
    event_name: str
    listener: Listener
    context: Any = NO_CONTEXT
    callback: Listener | None = None
    once: bool = False

    def __post_init__(self) -> None:
        if self.callback is None:
            self.callback = self.listener

    @property
    def has_context(self) -> bool:
        return self.context is not NO_CONTEXT

    def matches(self, listener: Listener, context: Any) -> bool:
        return self.listener is listener and same_context(self.context, context)

    def invoke(self, args: tuple[Any, ...]) -> Any:
        if self.has_context:
            return self.callback(self.context, *args)
        return self.callback(*args)


class ListenerRegistry:
    """Per-emitter mapping of event name to its registrations.

    Registrations are unique per ``(event_name, listener, context)``. The
    listener compares by identity; the context by identity, or by value for
    strings, numbers and bytes of the same type.
    """

    def __init__(self) -> None:
        self._listeners: dict[str, list[ListenerRegistration]] = {}

    def get(self, event_name: str) -> tuple[ListenerRegistration, ...]:
        return tuple(self._listeners.get(event_name, ()))

    def find(
        self, event_name: str, listener: Listener, context: Any = NO_CONTEXT
    ) -> ListenerRegistration | None:
        return find_first(
            self._listeners.get(event_name),
            lambda registration: registration.matches(listener, context),
        )

    def add(self, registration: ListenerRegistration) -> bool:
        """Store ``registration`` unless its triple is already present."""
        existing = self.find(registration.event_name, registration.listener, registration.context)
        if existing is not None:
            logger.debug(
                "Listener %r already registered for '%s'; skipping.",
                registration.listener,
                registration.event_name,
            )
            return False
        self._listeners.setdefault(registration.event_name, []).append(registration)
        logger.debug(
            "Registered %s listener %r for '%s'.",
            "once" if registration.once else "on",
            registration.listener,
            registration.event_name,
        )
        return True

    def discard(self, event_name: str, listener: Listener, context: Any = NO_CONTEXT) -> int:
        """Remove the registration with exactly this triple, if any."""
        return self._replace(
            event_name,
            lambda registration: registration.matches(listener, context),
        )

    def remove(
        self,
        event_name: str,
        listener: Listener | None = None,
        context: Any = NO_CONTEXT,
    ) -> int:
        """Remove registrations with cascading specificity.

        Without ``listener`` every registration for ``event_name`` goes. With
        ``listener`` but no context, that listener goes under any context.
        With both, only the exact triple goes.
        """
        if listener is None:
            removed = len(self._listeners.pop(event_name, ()))
            if removed:
                logger.debug("Removed all %d listener(s) for '%s'.", removed, event_name)
            return removed
        if context is NO_CONTEXT:
            return self._replace(event_name, lambda registration: registration.listener is listener)
        return self.discard(event_name, listener, context)

    def clear(self) -> None:
        self._listeners.clear()
        logger.debug("Cleared all listeners.")

    def count(self, event_name: str) -> int:
        return len(self._listeners.get(event_name, ()))

    def event_names(self) -> tuple[str, ...]:
        return tuple(name for name, registrations in self._listeners.items() if registrations)

    def __iter__(self) -> Iterator[ListenerRegistration]:
        for registrations in list(self._listeners.values()):
            yield from registrations

    def __len__(self) -> int:
        return sum(len(registrations) for registrations in self._listeners.values())

    def _replace(self, event_name: str, predicate: Callable[[ListenerRegistration], bool]) -> int:
        current = self._listeners.get(event_name)
        if not current:
            return 0
        kept = filter_excluding(current, predicate)
        removed = len(current) - len(kept)
        if kept:
            self._listeners[event_name] = kept
        else:
            del self._listeners[event_name]
        if removed:
            logger.debug("Removed %d listener(s) for '%s'.", removed, event_name)
        return removed


__all__ = [
    "Listener",
    "ListenerRegistration",
    "ListenerRegistry",
    "NO_CONTEXT",
    "same_context",
]
