from eventmixin.testing.fixtures import emitter, event_name  # noqa: F401
