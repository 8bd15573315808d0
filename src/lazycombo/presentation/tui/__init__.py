"""
LazyCombo demo TUI.
"""

from .demo_app import LazyComboDemoApp

__all__ = ["LazyComboDemoApp"]
