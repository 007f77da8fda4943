"""
Deferred callbacks for the controller.

Anything with ``call_later(delay, callback) -> handle`` where ``handle.cancel()``
stops a pending callback will do. The asyncio adapter below is what the CLI
runs on; tests drive a virtual clock instead.
"""
from __future__ import annotations

import asyncio
from typing import Callable, Optional, Protocol


class Handle(Protocol):
    def cancel(self) -> None:
        ...


class Scheduler(Protocol):
    def call_later(self, delay: float, callback: Callable[[], None]) -> Handle:
        ...


class AsyncioScheduler:
    """Schedules callbacks on an asyncio event loop via loop.call_later."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def call_later(self, delay: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        return self.loop.call_later(delay, callback)


class Slot:
    """Holds at most one pending callback; scheduling again supersedes it."""

    def __init__(self, scheduler: Scheduler) -> None:
        self.scheduler = scheduler
        self._handle: Optional[Handle] = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def schedule(self, delay: float, callback: Callable[[], None]) -> None:
        self.cancel()

        def fire() -> None:
            self._handle = None
            callback()

        self._handle = self.scheduler.call_later(delay, fire)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
