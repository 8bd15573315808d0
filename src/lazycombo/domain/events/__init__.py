"""Event system for decoupled component communication.

The combo model publishes events, hosts subscribe to them.

Example:
    ```python
    from lazycombo.domain.events import EventBus, DropDownOpened

    bus = EventBus()
    bus.subscribe(DropDownOpened, lambda event: print("opened"))
    ```
"""

from .bus import EventBus
from .types import (
    CurrentItemChanged,
    DropDownOpened,
    Event,
    ItemsViewReset,
    LookupCompleted,
    LookupStarted,
    PropertyChanged,
)

__all__ = [
    "EventBus",
    "Event",
    "PropertyChanged",
    "DropDownOpened",
    "CurrentItemChanged",
    "ItemsViewReset",
    "LookupStarted",
    "LookupCompleted",
]
