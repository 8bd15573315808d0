"""Event types for the event bus system.

This module defines the events a combo box publishes so that hosts (a
Textual widget, tests, application code) can observe it without coupling to
its internals.
"""

import time
from dataclasses import dataclass, field
from typing import Any


@dataclass
class Event:
    """Base class for all events.

    The timestamp field is automatically set when the event is created.
    """

    timestamp: float = field(default_factory=time.time, init=False)
    """Timestamp when the event was created (Unix timestamp)."""


@dataclass
class PropertyChanged(Event):
    """Event published whenever an observable property is written with a new value.

    Attributes:
        source: The object owning the property
        name: Property name (e.g. "selected_item")
        old_value: Value before the write
        new_value: Value after the write
    """

    source: Any
    """Object that owns the property."""
    name: str
    """Name of the property that changed."""
    old_value: Any = None
    """Previous value."""
    new_value: Any = None
    """New value."""


@dataclass
class DropDownOpened(Event):
    """Event published each time the dropdown list transitions to open."""

    source: Any
    """The combo whose dropdown opened."""


@dataclass
class CurrentItemChanged(Event):
    """Event published when the items view cursor moves.

    Attributes:
        position: New cursor position (-1 when there is no current item)
        item: The new current item (None when position is -1)
    """

    position: int
    """New cursor position."""
    item: Any = None
    """New current item."""


@dataclass
class LookupStarted(Event):
    """Event published on the UI context when a lookup invocation is issued."""

    generation: int
    """Invocation number (1-based, increasing)."""
    input_text: str
    """Text the lookup was issued for."""
    asynchronous: bool = True
    """Whether the callback runs on a worker thread."""


@dataclass
class LookupCompleted(Event):
    """Event published on the UI context after a lookup callback returns.

    Attributes:
        generation: Invocation number
        cancelled: Whether the invocation had been cancelled by the time it returned
        error: Exception raised by the callback, if any
    """

    generation: int
    """Invocation number."""
    cancelled: bool = False
    """True if the invocation was superseded or cancelled."""
    error: BaseException | None = None
    """Exception raised by the callback, if any."""


@dataclass
class ItemsViewReset(Event):
    """Event published after the items view was rebuilt for a new items source.

    Published once the view holds the new snapshot and the display text has
    been resynchronized, so subscribers can render the list from the view.
    """

    source: Any
    """The combo whose items view was rebuilt."""
    count: int = 0
    """Number of items in the new snapshot."""
