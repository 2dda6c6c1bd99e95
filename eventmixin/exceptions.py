"""Exceptions raised by eventmixin."""


class EventEmitterError(Exception):
    """Base class for eventmixin exceptions."""


class InvalidEventNameError(EventEmitterError, ValueError):
    """Raised when an event name argument is missing or malformed."""

    def __init__(self, message: str, value: object = None) -> None:
        super().__init__(message)
        self.value = value


class InvalidListenerError(EventEmitterError, TypeError):
    """Raised when a listener is not callable."""

    def __init__(self, listener: object) -> None:
        super().__init__(
            f"the listener parameter must be a function, but was: {type(listener).__name__}"
        )
        self.listener = listener


class SchedulerUnavailable(EventEmitterError, RuntimeError):
    """Raised when a listener must be scheduled but no event loop is available."""
