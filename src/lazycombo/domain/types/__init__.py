"""Shared domain types."""

from lazycombo.domain.types.interaction import InteractionState, SelectionState
from lazycombo.domain.types.lookup import CancellationToken, LookupAction, LookupContext

__all__ = [
    "CancellationToken",
    "LookupAction",
    "LookupContext",
    "InteractionState",
    "SelectionState",
]
