"""Interaction and selection state types."""

from dataclasses import dataclass
from enum import Enum
from typing import Any

__all__ = ["InteractionState", "SelectionState"]


class InteractionState(Enum):
    """Coarse interaction state of a combo box.

    EDITING is a text-focus sub-mode; while editing, the dropdown may be open
    or closed, and ``LazyCombo.interaction_state`` reports EDITING.
    """

    CLOSED = "closed"
    OPEN = "open"
    EDITING = "editing"


@dataclass(frozen=True)
class SelectionState:
    """Snapshot of the selection-related properties of a combo box."""

    selected_item: Any
    display_text: str | None
    is_editing: bool
