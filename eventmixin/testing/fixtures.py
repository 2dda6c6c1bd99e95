"""Pytest fixtures and helpers for code built on eventmixin."""

from __future__ import annotations

import asyncio

import pytest

from ..emitter import EventEmitter
from .factory import EventNameFactory


@pytest.fixture()
def emitter() -> EventEmitter:
    return EventEmitter()


@pytest.fixture()
def event_name() -> str:
    return EventNameFactory().build()


async def tick(turns: int = 1) -> None:
    """Let the event loop run ``turns`` rounds of ready callbacks.

    One turn runs plain listeners scheduled before the call; coroutine
    listeners need a second turn to run their task.
    """
    for _ in range(turns):
        await asyncio.sleep(0)
