"""Resize notifications and the listener task that refreshes geometry."""

from __future__ import annotations

import asyncio
import logging
import signal
import time
from dataclasses import dataclass, field
from typing import AsyncIterator, Callable

from gridcat.errors import DeviceUnavailable
from gridcat.geometry import GeometryTracker
from gridcat.types import GeometrySnapshot

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResizeNotification:
    received_at: float = field(default_factory=time.monotonic)


class ResizeNotifier:
    """Turns SIGWINCH deliveries into an async stream of notifications.

    The signal handler only enqueues; all work happens in whoever iterates
    :meth:`subscribe`. Call :meth:`start` before the first size query so a
    resize that lands before the listener runs is queued, not lost.
    """

    def __init__(self, sig: int = signal.SIGWINCH) -> None:
        self._signal = sig
        self._queue: asyncio.Queue[ResizeNotification] = asyncio.Queue()
        self._loop: asyncio.AbstractEventLoop | None = None
        self._started = False

    def notify(self) -> None:
        self._queue.put_nowait(ResizeNotification())

    def start(self) -> None:
        """Install the signal handler on the running loop."""
        if self._started:
            return
        self._started = True
        loop = asyncio.get_running_loop()
        try:
            loop.add_signal_handler(self._signal, self.notify)
        except (NotImplementedError, RuntimeError, ValueError) as e:
            # Not on the main thread or no signal support; manual notify() still works.
            logger.debug("resize signal handler not installed: %s", e)
            return
        self._loop = loop

    def stop(self) -> None:
        if self._loop is not None:
            self._loop.remove_signal_handler(self._signal)
            self._loop = None
        self._started = False

    async def subscribe(self) -> AsyncIterator[ResizeNotification]:
        """Yield one notification per resize, waiting indefinitely between them."""
        self.start()
        try:
            while True:
                yield await self._queue.get()
        finally:
            self.stop()


async def watch_resizes(
    tracker: GeometryTracker,
    notifications: AsyncIterator[ResizeNotification],
    on_change: Callable[[GeometrySnapshot], None] | None = None,
) -> None:
    """Refresh *tracker* once per notification until cancelled.

    A failed refresh keeps the previous snapshot and the listener keeps going.
    """
    async for _ in notifications:
        try:
            snapshot = tracker.refresh()
        except DeviceUnavailable as e:
            logger.warning("Error handling window size change: %s", e)
            continue
        if on_change is not None:
            on_change(snapshot)
