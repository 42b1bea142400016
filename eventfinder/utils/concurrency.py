"""Shared asyncio primitives for the search service.

Two patterns are exposed:

1. **OneShot** -- runs an async factory exactly once and lets every
   concurrent caller await the same in-flight task.  Used to build the
   event store and vector index at startup without duplicate loads and
   without polling an "initializing" flag.

2. **with_optional_timeout** -- awaits a coroutine, wrapping it in
   ``asyncio.wait_for`` only when a positive timeout is configured.  The
   external LLM and embedding calls are the only suspension points in a
   search, and the service runs them without a deadline by default.
"""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, Generic, TypeVar

import structlog

from eventfinder.utils.logging import get_logger

_T = TypeVar("_T")

_logger: structlog.BoundLogger = get_logger(__name__)


class OneShot(Generic[_T]):
    """Await-once initialisation guard.

    The first call to :meth:`get` schedules *factory* as a task; later
    callers await that same task.  Waiters are shielded, so a cancelled
    request stops waiting without aborting the shared load.  If the
    factory raises, every current waiter sees the exception and the next
    call starts a fresh attempt.

    Parameters
    ----------
    factory:
        Zero-argument coroutine function producing the value.
    name:
        Label used in log events.
    """

    def __init__(self, factory: Callable[[], Awaitable[_T]], name: str = "init") -> None:
        self._factory = factory
        self._name = name
        self._task: asyncio.Task[_T] | None = None
        self._value: _T | None = None
        self._done = False

    @property
    def is_done(self) -> bool:
        return self._done

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def peek(self) -> _T | None:
        """Return the value if loading has finished, else ``None``."""
        return self._value if self._done else None

    async def get(self) -> _T:
        """Return the value, starting or joining the in-flight load."""
        if self._done:
            return self._value  # type: ignore[return-value]

        if self._task is None:
            _logger.info("one_shot_started", name=self._name)
            self._task = asyncio.ensure_future(self._factory())

        task = self._task
        try:
            value = await asyncio.shield(task)
        except asyncio.CancelledError:
            raise
        except Exception:
            # Only the failed attempt is cleared; a newer one may be running.
            if self._task is task:
                self._task = None
            raise

        if not self._done:
            self._value = value
            self._done = True
            _logger.info("one_shot_completed", name=self._name)
        return value


async def with_optional_timeout(awaitable: Awaitable[_T], timeout: float | None) -> _T:
    """Await *awaitable*, bounded by *timeout* seconds when it is positive."""
    if timeout and timeout > 0:
        return await asyncio.wait_for(awaitable, timeout)
    return await awaitable
