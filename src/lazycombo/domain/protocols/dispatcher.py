"""Dispatcher protocol."""

from typing import Callable, Protocol

__all__ = ["Dispatcher"]


class Dispatcher(Protocol):
    """Schedules callbacks on the UI context.

    The UI context is the single thread that owns all combo state. Worker
    threads use a dispatcher to hop back onto it before touching that state.
    """

    def post(self, callback: Callable[[], None]) -> None:
        """Schedule ``callback`` to run on the UI context.

        Must be safe to call from any thread.

        Args:
            callback: Zero-argument callable
        """
        ...
