import asyncio
import logging
from contextlib import contextmanager

import pytest

from eventmixin import (
    AsyncioScheduler,
    EmitterConfig,
    EventEmitter,
    SchedulerUnavailable,
)
from eventmixin.testing import AsyncListenerSpy, ListenerSpy, tick


@contextmanager
def captured_loop_errors():
    errors = []
    loop = asyncio.get_running_loop()
    loop.set_exception_handler(lambda _loop, context: errors.append(context))
    try:
        yield errors
    finally:
        loop.set_exception_handler(None)


def test_emit_without_loop_raises_when_listeners_exist(emitter):
    emitter.on("event1", ListenerSpy())
    with pytest.raises(SchedulerUnavailable):
        emitter.emit("event1")


def test_explicit_loop_is_used_outside_running_loop():
    loop = asyncio.new_event_loop()
    try:
        emitter = EventEmitter(scheduler=AsyncioScheduler(loop))
        spy = ListenerSpy()
        emitter.on("event1", spy).emit("event1", 1)
        assert not spy.called
        loop.run_until_complete(asyncio.sleep(0))
        assert spy.calls == [(1,)]
    finally:
        loop.close()


@pytest.mark.asyncio()
async def test_failing_listener_does_not_block_others(emitter):
    spy = ListenerSpy()

    def boom():
        raise RuntimeError("boom")

    with captured_loop_errors() as errors:
        emitter.on("event1", boom).on("event1", spy)
        emitter.emit("event1")
        await tick()

    assert spy.call_count == 1
    assert len(errors) == 1
    assert isinstance(errors[0]["exception"], RuntimeError)


@pytest.mark.asyncio()
async def test_errors_are_logged_when_captured(caplog):
    caplog.set_level(logging.ERROR, logger="eventmixin.scheduler")
    emitter = EventEmitter(config=EmitterConfig(capture_listener_errors=True))
    spy = ListenerSpy()

    def boom():
        raise RuntimeError("boom")

    with captured_loop_errors() as errors:
        emitter.on("event1", boom).on("event1", spy)
        emitter.emit("event1")
        await tick()

    assert spy.call_count == 1
    assert errors == []
    assert "Listener for 'event1' raised." in caplog.text


@pytest.mark.asyncio()
async def test_coroutine_listeners_are_run_as_tasks(emitter):
    spy = AsyncListenerSpy()
    emitter.on("event1", spy)
    emitter.emit("event1", "payload")
    await tick()
    assert not spy.called
    await tick()
    assert spy.calls == [("payload",)]


@pytest.mark.asyncio()
async def test_coroutine_once_listener_fires_once(emitter):
    spy = AsyncListenerSpy()
    emitter.once("event1", spy)
    emitter.emit("event1").emit("event1")
    await tick(2)
    assert spy.call_count == 1


@pytest.mark.asyncio()
async def test_failing_coroutine_listener_reports_to_loop():
    scheduler = AsyncioScheduler()
    emitter = EventEmitter(scheduler=scheduler)

    async def boom():
        raise RuntimeError("async boom")

    with captured_loop_errors() as errors:
        emitter.on("event1", boom)
        emitter.emit("event1")
        await tick(3)

    assert scheduler.pending_tasks == 0
    assert errors[0]["message"] == "Async listener for 'event1' raised"
    assert isinstance(errors[0]["exception"], RuntimeError)


@pytest.mark.asyncio()
async def test_failing_coroutine_listener_logged_when_captured(caplog):
    caplog.set_level(logging.ERROR, logger="eventmixin.scheduler")
    emitter = EventEmitter(config=EmitterConfig(capture_listener_errors=True))

    async def boom():
        raise RuntimeError("async boom")

    with captured_loop_errors() as errors:
        emitter.on("event1", boom).emit("event1")
        await tick(3)

    assert errors == []
    assert "Async listener for 'event1' raised." in caplog.text
