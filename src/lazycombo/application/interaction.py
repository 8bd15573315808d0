"""
InteractionStateMachine - translates user actions into combo state transitions.

States are CLOSED/OPEN for the dropdown plus an orthogonal EDITING sub-mode
for text focus. Transitions:

    activate display   editable: enter EDITING, focus text, select all
                       otherwise: toggle OPEN/CLOSED
    user text change   -> OPEN (via the synchronizer)
    OPEN entry         sync lookup if no items source, publish DropDownOpened,
                       focus the widget unless editing
    home/end/up/down   move cursor (wrapping), force OPEN, scroll into view
    enter              commit current item and close (no-op without one)
    list current moved selected_item := current item
    list click         selected_item := current item, close
    list focus lost    close
    text focus lost    leave EDITING
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from lazycombo.domain.events import DropDownOpened
from lazycombo.domain.protocols import ComboHost
from lazycombo.domain.types import InteractionState
from lazycombo.logger import get_logger

if TYPE_CHECKING:
    from lazycombo.application.combo import LazyCombo

logger = get_logger("interaction")

NAVIGATION_KEYS = frozenset({"home", "end", "up", "down"})
COMMIT_KEYS = frozenset({"enter", "return"})


class NullHost:
    """ComboHost that ignores every request (headless use)."""

    def focus_text_input(self) -> None:
        pass

    def select_all_text(self) -> None:
        pass

    def focus_widget(self) -> None:
        pass

    def scroll_into_view(self, item: Any) -> None:
        pass


class InteractionStateMachine:
    """Dropdown/editing state machine for one LazyCombo."""

    def __init__(self, combo: "LazyCombo", host: ComboHost | None = None):
        self._combo = combo
        self.host: ComboHost = host or NullHost()

    @property
    def state(self) -> InteractionState:
        if self._combo.is_editing:
            return InteractionState.EDITING
        if self._combo.is_dropdown_open:
            return InteractionState.OPEN
        return InteractionState.CLOSED

    # ------------------------------------------------------------------
    # Dropdown
    # ------------------------------------------------------------------

    def open(self) -> None:
        self._combo.is_dropdown_open = True

    def close(self) -> None:
        self._combo.is_dropdown_open = False

    def toggle(self) -> None:
        self._combo.is_dropdown_open = not self._combo.is_dropdown_open

    def on_dropdown_opened(self) -> None:
        """Entry action of the OPEN state."""
        combo = self._combo
        if combo.items_source is None:
            combo.lookup.invoke(combo.text, async_=False)
        logger.debug("Dropdown opened")
        combo.event_bus.publish(DropDownOpened(source=combo))
        if not combo.is_editing:
            self.host.focus_widget()

    # ------------------------------------------------------------------
    # User actions
    # ------------------------------------------------------------------

    def activate_display(self) -> None:
        """The user clicked (or otherwise activated) the selected-item area."""
        combo = self._combo
        if combo.is_editable:
            combo.is_editing = True
            self.host.focus_text_input()
            self.host.select_all_text()
        else:
            self.toggle()

    def handle_key(self, key: str) -> bool:
        """
        Route a key press.

        Args:
            key: Key name (Textual naming: "home", "end", "up", "down", "enter")

        Returns:
            True if the key was consumed
        """
        view = self._combo.view
        if not view.is_available:
            return False

        if key in NAVIGATION_KEYS:
            self.open()
            if key == "home":
                view.move_first()
            elif key == "end":
                view.move_last()
            elif key == "down":
                view.move_next()
            else:
                view.move_previous()
            self.host.scroll_into_view(view.current_item)
            return True

        if key in COMMIT_KEYS:
            return self.commit()

        return False

    def commit(self) -> bool:
        """Commit the current item and close. Returns False if there is none."""
        view = self._combo.view
        if not view.has_current:
            return False
        item = view.current_item
        logger.debug(f"Committing current item {item!r}")
        self._combo.selected_item = item
        self.close()
        return True

    def on_list_selection_changed(self) -> None:
        view = self._combo.view
        if not view.is_available:
            return
        self._combo.selected_item = view.current_item

    def on_list_clicked(self) -> None:
        view = self._combo.view
        if not view.is_available:
            return
        self._combo.selected_item = view.current_item
        self.close()

    def on_list_focus_lost(self) -> None:
        self.close()

    def on_text_focus_lost(self) -> None:
        self._combo.is_editing = False
