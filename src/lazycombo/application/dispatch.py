"""
Dispatchers - ways to hop from a lookup worker back to the UI context.

- ImmediateDispatcher runs callbacks inline on the posting thread. Only
  suitable for headless use where no UI thread exists.
- QueueDispatcher collects callbacks in a thread-safe queue that the owning
  loop drains explicitly (deterministic, used by tests and custom loops).
- AsyncioDispatcher schedules callbacks on an asyncio event loop.

The Textual dispatcher lives in ``lazycombo.presentation.services``.
"""

import asyncio
import queue
from typing import Callable

from lazycombo.domain.exceptions import DispatcherClosedError
from lazycombo.logger import get_logger

logger = get_logger("dispatch")


class ImmediateDispatcher:
    """Runs every posted callback immediately on the calling thread."""

    def post(self, callback: Callable[[], None]) -> None:
        callback()


class QueueDispatcher:
    """
    Thread-safe FIFO of callbacks drained by the UI loop.

    Worker threads call ``post()``; the UI loop calls ``drain()`` whenever it
    is ready to apply pending work.
    """

    def __init__(self, name: str = "QueueDispatcher"):
        self._name = name
        self._queue: queue.SimpleQueue[Callable[[], None]] = queue.SimpleQueue()
        self._closed = False

    def post(self, callback: Callable[[], None]) -> None:
        if self._closed:
            raise DispatcherClosedError(f"{self._name} is closed")
        self._queue.put(callback)

    def drain(self, max_items: int | None = None) -> int:
        """
        Run pending callbacks on the calling thread.

        Callbacks posted while draining are picked up in the same call unless
        ``max_items`` is reached. Exceptions propagate; callbacks after the
        failing one stay queued.

        Args:
            max_items: Upper bound on callbacks to run (None = all)

        Returns:
            Number of callbacks run
        """
        processed = 0
        while max_items is None or processed < max_items:
            try:
                callback = self._queue.get_nowait()
            except queue.Empty:
                break
            processed += 1
            callback()
        if processed:
            logger.debug(f"{self._name}: drained {processed} callback(s)")
        return processed

    @property
    def pending(self) -> int:
        return self._queue.qsize()

    def close(self) -> None:
        """Reject further posts. Already queued callbacks can still be drained."""
        self._closed = True


class AsyncioDispatcher:
    """Schedules callbacks on an asyncio event loop via ``call_soon_threadsafe``."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None):
        """
        Args:
            loop: Target loop. Defaults to the loop running in the calling thread.
        """
        self._loop = loop or asyncio.get_running_loop()

    def post(self, callback: Callable[[], None]) -> None:
        if self._loop.is_closed():
            raise DispatcherClosedError("Event loop is closed")
        self._loop.call_soon_threadsafe(callback)
