"""
TextSelectionSynchronizer - keeps typed text, selection and display text consistent.

Selecting an item rewrites the text from the item's text member. Typing
rewrites nothing but issues a new lookup. Text written by the synchronizer
itself is flagged as programmatic so it never loops back into a lookup.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, Iterator

from lazycombo.domain.events import ItemsViewReset
from lazycombo.logger import get_logger
from lazycombo.utils import resolve_display_text

if TYPE_CHECKING:
    from lazycombo.application.combo import LazyCombo

logger = get_logger("synchronizer")


class TextSelectionSynchronizer:
    """Text/selection bookkeeping for one LazyCombo."""

    def __init__(self, combo: "LazyCombo"):
        self._combo = combo
        self._text_from_code = False

    @property
    def is_programmatic(self) -> bool:
        """True while the synchronizer itself is writing the text."""
        return self._text_from_code

    @contextmanager
    def programmatic_text(self) -> Iterator[None]:
        """Mark text writes inside the block as not user-originated."""
        previous = self._text_from_code
        self._text_from_code = True
        try:
            yield
        finally:
            self._text_from_code = previous

    def display_text_for(self, item: Any) -> str | None:
        return resolve_display_text(item, self._combo.text_member)

    def on_selection_changed(self, item: Any) -> None:
        """Rewrite text and display text from the newly selected item."""
        text = self.display_text_for(item)
        with self.programmatic_text():
            self._combo.text = text or ""
            self._combo._set_display_text(text)
        logger.debug(f"Selection text set to {text!r}")

    def on_text_changed(self, text: str) -> bool:
        """
        React to a text write.

        Returns:
            True if the write was user input and a lookup was issued
        """
        if self._text_from_code:
            return False
        combo = self._combo
        logger.debug(f"User typed {text!r}")
        combo.lookup.invoke(text, async_=True)
        combo.is_dropdown_open = True
        return True

    def on_items_source_replaced(self) -> None:
        """
        Rebuild the view, resync the display text and publish ItemsViewReset.

        While the user is editing only the display text is refreshed, so
        arriving results never overwrite what is being typed.
        """
        combo = self._combo
        combo.view.reset()
        self.resync()
        combo.event_bus.publish(ItemsViewReset(source=combo, count=len(combo.view)))

    def resync(self) -> None:
        """Recompute texts from the current selection (display text only while editing)."""
        combo = self._combo
        if combo.is_editing:
            combo._set_display_text(self.display_text_for(combo.selected_item))
            return
        self.on_selection_changed(combo.selected_item)

    def on_selected_item_assigned(self, item: Any) -> None:
        """
        Resync after ``selected_item`` changed.

        Without an items source (manual selection mode) a synchronous lookup
        follows, letting the callback validate or augment the assigned value.
        Callback errors propagate; the assignment itself stays in place.
        """
        self.on_selection_changed(item)
        combo = self._combo
        if combo.items_source is None and item is not None:
            combo.lookup.invoke(combo.text, async_=False)
