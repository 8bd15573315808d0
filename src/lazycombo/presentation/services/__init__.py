"""
Presentation services for lazycombo.

Services that bridge the toolkit-independent model to Textual.
"""

from .dispatch import DispatchedCallback, TextualDispatcher, run_dispatched

__all__ = [
    "DispatchedCallback",
    "TextualDispatcher",
    "run_dispatched",
]
