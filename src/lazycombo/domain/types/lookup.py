"""Lookup-related domain types."""

import threading
from dataclasses import dataclass, field
from typing import Any, Callable

from lazycombo.domain.exceptions import LazyComboError, LookupCancelledError

__all__ = ["CancellationToken", "LookupContext", "LookupAction", "Poster"]

# (generation, action) -> accepted
Poster = Callable[[int, Callable[[], None]], bool]


class CancellationToken:
    """Cooperative cancellation flag for one lookup invocation.

    The generation number identifies the invocation the token belongs to.
    Cancellation is advisory: the callback must poll ``is_cancelled`` (or call
    ``raise_if_cancelled()``) and stop on its own.
    """

    def __init__(self, generation: int):
        self.generation = generation
        self._event = threading.Event()

    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self) -> bool:
        """Request cancellation. Returns False if it was already cancelled."""
        if self._event.is_set():
            return False
        self._event.set()
        return True

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise LookupCancelledError(self.generation)

    def wait(self, timeout: float | None = None) -> bool:
        """
        Block until cancelled or until the timeout elapses.

        Handy for callbacks that would otherwise ``time.sleep()``.

        Returns:
            True if the token was cancelled
        """
        return self._event.wait(timeout)

    def __repr__(self) -> str:
        state = "cancelled" if self.is_cancelled else "active"
        return f"CancellationToken(generation={self.generation}, {state})"


@dataclass
class LookupContext:
    """Per-invocation context handed to the lookup callback.

    ``tag`` arrives holding the continuation value of the previous invocation
    and may be reassigned by the callback (e.g. a pagination cursor). Results
    should be delivered through ``set_items()`` or ``post()``, which hop back
    to the UI context and are dropped once a newer invocation has started.
    """

    input_text: str
    cancellation_token: CancellationToken
    tag: Any = None
    _poster: Poster | None = field(default=None, repr=False, compare=False)
    _items_sink: Callable[[Any], None] | None = field(default=None, repr=False, compare=False)

    @property
    def generation(self) -> int:
        return self.cancellation_token.generation

    @property
    def is_cancelled(self) -> bool:
        return self.cancellation_token.is_cancelled

    def raise_if_cancelled(self) -> None:
        self.cancellation_token.raise_if_cancelled()

    def post(self, action: Callable[[], None]) -> bool:
        """
        Run ``action`` on the UI context on behalf of this invocation.

        Returns:
            False if the invocation is cancelled, already superseded or its
            dispatcher is closed
        """
        if self.is_cancelled:
            return False
        if self._poster is None:
            action()
            return True
        return self._poster(self.generation, action)

    def set_items(self, items: Any) -> bool:
        """Replace the combo's items source with ``items`` (via ``post``)."""
        sink = self._items_sink
        if sink is None:
            raise LazyComboError("This lookup context is not attached to a combo box")
        return self.post(lambda: sink(items))


LookupAction = Callable[[LookupContext], None]
