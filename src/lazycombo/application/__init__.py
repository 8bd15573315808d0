"""
Application layer - the combo box model and its collaborating components.

- ItemsView: cursor over a snapshot of the candidate collection
- LookupCoordinator: lookup invocation, cancellation and result marshaling
- TextSelectionSynchronizer: typed text / selection / display text consistency
- InteractionStateMachine: dropdown and editing transitions
- LazyCombo: the model wiring them together
"""

from .combo import LazyCombo
from .dispatch import AsyncioDispatcher, ImmediateDispatcher, QueueDispatcher
from .interaction import InteractionStateMachine, NullHost
from .items_view import NO_POSITION, ItemsView
from .lookup import LatestSlot, LookupCoordinator
from .synchronizer import TextSelectionSynchronizer

__all__ = [
    "LazyCombo",
    "ItemsView",
    "NO_POSITION",
    "LookupCoordinator",
    "LatestSlot",
    "TextSelectionSynchronizer",
    "InteractionStateMachine",
    "NullHost",
    "ImmediateDispatcher",
    "QueueDispatcher",
    "AsyncioDispatcher",
]
