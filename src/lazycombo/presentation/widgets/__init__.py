"""
LazyCombo widgets - Textual widgets hosting the combo model.
"""

from .lazy_combo_box import ComboInput, ComboList, LazyComboBox, SelectedItemDisplay

__all__ = [
    "LazyComboBox",
    "ComboInput",
    "ComboList",
    "SelectedItemDisplay",
]
