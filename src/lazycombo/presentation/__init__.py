"""
LazyCombo Presentation Layer - Textual host for the combo box model.

- widgets: the LazyComboBox widget and its parts
- services: the Textual dispatcher used to deliver lookup results
- tui: a small demo application
"""

from .services import TextualDispatcher
from .widgets import LazyComboBox

__all__ = ["LazyComboBox", "TextualDispatcher"]
