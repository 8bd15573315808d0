"""
LazyCombo - a combo box whose candidates are produced lazily by a lookup callback.

The model (``LazyCombo``) is toolkit independent; ``LazyComboBox`` hosts it
in a Textual app.
"""

from lazycombo.application import (
    AsyncioDispatcher,
    ImmediateDispatcher,
    ItemsView,
    LazyCombo,
    LookupCoordinator,
    QueueDispatcher,
)
from lazycombo.config import ComboConfig
from lazycombo.domain.events import (
    CurrentItemChanged,
    DropDownOpened,
    EventBus,
    ItemsViewReset,
    LookupCompleted,
    LookupStarted,
    PropertyChanged,
)
from lazycombo.domain.exceptions import DispatcherClosedError, LazyComboError, LookupCancelledError
from lazycombo.domain.types import CancellationToken, InteractionState, LookupAction, LookupContext, SelectionState

__version__ = "0.1.0"

__all__ = [
    "LazyCombo",
    "ItemsView",
    "LookupCoordinator",
    "ImmediateDispatcher",
    "QueueDispatcher",
    "AsyncioDispatcher",
    "ComboConfig",
    "EventBus",
    "PropertyChanged",
    "DropDownOpened",
    "CurrentItemChanged",
    "ItemsViewReset",
    "LookupStarted",
    "LookupCompleted",
    "LazyComboError",
    "LookupCancelledError",
    "DispatcherClosedError",
    "CancellationToken",
    "LookupContext",
    "LookupAction",
    "InteractionState",
    "SelectionState",
]
