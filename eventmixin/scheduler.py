"""Deferred listener invocation on an asyncio event loop."""

from __future__ import annotations

import asyncio
import inspect
import logging
from typing import Any, Callable, Protocol

from .exceptions import SchedulerUnavailable

logger = logging.getLogger(__name__)


class Scheduler(Protocol):
    def schedule(self, label: str, invocation: Callable[[], Any]) -> None:
        """Run ``invocation`` in a later turn, isolated from other invocations."""
        ...


class AsyncioScheduler:
    """Post each invocation as its own ``loop.call_soon`` callback.

    Every invocation runs in a separate callback, so an exception raised by
    one listener never stops the others. Failures go to the loop's exception
    handler unless ``capture_errors`` is set, in which case they are logged
    here. Awaitables returned by listeners are wrapped in tasks.
    """

    def __init__(
        self,
        loop: asyncio.AbstractEventLoop | None = None,
        *,
        capture_errors: bool = False,
    ) -> None:
        self._loop = loop
        self._capture_errors = capture_errors
        self._tasks: set[asyncio.Future[Any]] = set()

    @property
    def pending_tasks(self) -> int:
        return len(self._tasks)

    def schedule(self, label: str, invocation: Callable[[], Any]) -> None:
        loop = self._resolve_loop()
        loop.call_soon(self._run, loop, label, invocation)

    def _resolve_loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is not None and not self._loop.is_closed():
            return self._loop
        try:
            return asyncio.get_running_loop()
        except RuntimeError as exc:
            raise SchedulerUnavailable(
                "emit() needs a running event loop or an explicit loop to schedule listeners"
            ) from exc

    def _run(
        self, loop: asyncio.AbstractEventLoop, label: str, invocation: Callable[[], Any]
    ) -> None:
        if self._capture_errors:
            try:
                result = invocation()
            except Exception:
                logger.exception("Listener for '%s' raised.", label)
                return
        else:
            result = invocation()

        if inspect.isawaitable(result):
            task = asyncio.ensure_future(result, loop=loop)
            self._tasks.add(task)
            task.add_done_callback(lambda done: self._on_task_done(loop, label, done))

    def _on_task_done(
        self, loop: asyncio.AbstractEventLoop, label: str, task: asyncio.Future[Any]
    ) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is None:
            return
        if self._capture_errors:
            logger.error("Async listener for '%s' raised.", label, exc_info=exc)
            return
        loop.call_exception_handler(
            {
                "message": f"Async listener for '{label}' raised",
                "exception": exc,
                "future": task,
            }
        )


__all__ = ["AsyncioScheduler", "Scheduler"]
