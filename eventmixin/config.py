"""Configuration for eventmixin emitters."""

from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass(slots=True)
class EmitterConfig:
    """Tunables shared by emitters.

    ``max_listeners`` only triggers a warning log when exceeded; it never
    rejects a registration. ``0`` disables the warning.
    """

    max_listeners: int = 10
    capture_listener_errors: bool = False

    def __post_init__(self) -> None:
        if self.max_listeners < 0:
            raise ValueError("max_listeners cannot be negative")

    @classmethod
    def from_env(cls) -> "EmitterConfig":
        """Create config from environment variables prefixed with EVENTMIXIN_."""
        prefix = "EVENTMIXIN_"
        raw_max = os.getenv(f"{prefix}MAX_LISTENERS", "10")
        try:
            max_listeners = int(raw_max)
        except ValueError as exc:
            raise ValueError(f"Invalid integer for {prefix}MAX_LISTENERS: {raw_max!r}") from exc

        return cls(
            max_listeners=max_listeners,
            capture_listener_errors=os.getenv(
                f"{prefix}CAPTURE_LISTENER_ERRORS", "false"
            ).lower()
            in {"1", "true", "yes"},
        )


__all__ = ["EmitterConfig"]
