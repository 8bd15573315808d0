"""
LazyComboBox - Textual host for the LazyCombo model.

The widget is made of three parts:

- SelectedItemDisplay: shows the display text; clicking it activates the combo
- ComboInput: the text box used while editing; routes navigation keys
- ComboList: the dropdown list of candidates

The widget owns no combo state. It mirrors the model's PropertyChanged events
onto its parts and feeds user actions into ``combo.interaction``.
"""

from __future__ import annotations

from typing import Any, Callable

from rich.text import Text
from textual import events
from textual.app import ComposeResult
from textual.message import Message
from textual.widget import Widget
from textual.widgets import Input, OptionList, Static
from textual.widgets.option_list import Option

from lazycombo.application.combo import LazyCombo
from lazycombo.domain.events import CurrentItemChanged, ItemsViewReset, PropertyChanged
from lazycombo.domain.events import DropDownOpened as DropDownOpenedEvent
from lazycombo.domain.types import LookupAction
from lazycombo.logger import get_logger
from lazycombo.presentation.services.dispatch import DispatchedCallback, TextualDispatcher, run_dispatched

logger = get_logger("lazy_combo_box")


class SelectedItemDisplay(Static):
    """Read-only area showing the selected item's display text."""

    class Activated(Message):
        """Posted when the display area is clicked."""

    def on_click(self, event: events.Click) -> None:
        event.stop()
        self.post_message(self.Activated())


class ComboInput(Input):
    """Text box that offers each key to the combo before handling it itself."""

    def __init__(
        self,
        key_handler: Callable[[str], bool],
        on_focus_lost: Callable[[], None],
        **kwargs: Any,
    ):
        super().__init__(**kwargs)
        self._key_handler = key_handler
        self._on_focus_lost = on_focus_lost

    async def _on_key(self, event: events.Key) -> None:
        if self._key_handler(event.key):
            event.stop()
            event.prevent_default()
            return
        await super()._on_key(event)

    def on_blur(self, event: events.Blur) -> None:
        self._on_focus_lost()


class ComboList(OptionList):
    """Dropdown list of candidates."""

    def __init__(self, on_focus_lost: Callable[[], None], **kwargs: Any):
        super().__init__(**kwargs)
        self._on_focus_lost = on_focus_lost

    def on_blur(self, event: events.Blur) -> None:
        self._on_focus_lost()


class LazyComboBox(Widget, can_focus=True):
    """Combo box whose candidates are fetched by a lookup callback as the user types."""

    DEFAULT_CSS = """
    LazyComboBox {
        height: auto;
    }

    LazyComboBox > SelectedItemDisplay {
        height: 1;
        padding: 0 1;
        background: $boost;
    }

    LazyComboBox:focus > SelectedItemDisplay {
        background: $accent 40%;
    }

    LazyComboBox.-loading > SelectedItemDisplay {
        color: $text-muted;
        text-style: italic;
    }

    LazyComboBox > ComboInput {
        display: none;
    }

    LazyComboBox > ComboList {
        display: none;
        height: auto;
        max-height: 10;
        border: round $accent;
    }
    """

    PLACEHOLDER = "Select..."

    class DropDownOpened(Message):
        """Posted each time the dropdown opens."""

        def __init__(self, combo_box: "LazyComboBox") -> None:
            super().__init__()
            self.combo_box = combo_box

        @property
        def control(self) -> "LazyComboBox":
            return self.combo_box

    class SelectionChanged(Message):
        """Posted when the selected item changes."""

        def __init__(self, combo_box: "LazyComboBox", item: Any) -> None:
            super().__init__()
            self.combo_box = combo_box
            self.item = item

        @property
        def control(self) -> "LazyComboBox":
            return self.combo_box

    def __init__(
        self,
        lookup_action: LookupAction | None = None,
        *,
        text_member: str | None = None,
        is_editable: bool | None = None,
        combo: LazyCombo | None = None,
        placeholder: str | None = None,
        name: str | None = None,
        id: str | None = None,
        classes: str | None = None,
    ):
        """
        Initialize the widget.

        Args:
            lookup_action: Callback populating the candidates (ignored if combo is given)
            text_member: Member of a candidate supplying its display text
            is_editable: Whether the user can type
            combo: Existing model to host; a new one is created otherwise
            placeholder: Text shown when nothing is selected
        """
        super().__init__(name=name, id=id, classes=classes)
        self._owns_combo = combo is None
        self.combo = combo or LazyCombo(lookup_action, text_member=text_member, is_editable=is_editable)
        self.combo.set_host(self)
        self._placeholder = placeholder or self.PLACEHOLDER
        self._display: SelectedItemDisplay | None = None
        self._input: ComboInput | None = None
        self._list: ComboList | None = None

    def compose(self) -> ComposeResult:
        self._display = SelectedItemDisplay(self._placeholder)
        self._input = ComboInput(
            self._route_key,
            self.combo.interaction.on_text_focus_lost,
            value=self.combo.text,
            placeholder="Type to search",
        )
        self._list = ComboList(self.combo.interaction.on_list_focus_lost)
        yield self._display
        yield self._input
        yield self._list

    def on_mount(self) -> None:
        self.combo.set_dispatcher(TextualDispatcher(self))
        bus = self.combo.event_bus
        bus.subscribe(PropertyChanged, self._on_property_changed)
        bus.subscribe(DropDownOpenedEvent, self._on_dropdown_opened)
        bus.subscribe(CurrentItemChanged, self._on_current_item_changed)
        bus.subscribe(ItemsViewReset, self._on_items_view_reset)
        self._refresh_parts()
        logger.info(f"LazyComboBox mounted (id={self.id}, editable={self.combo.is_editable})")

    def on_dispatched_callback(self, message: DispatchedCallback) -> None:
        run_dispatched(message)

    def on_unmount(self) -> None:
        bus = self.combo.event_bus
        bus.unsubscribe(PropertyChanged, self._on_property_changed)
        bus.unsubscribe(DropDownOpenedEvent, self._on_dropdown_opened)
        bus.unsubscribe(CurrentItemChanged, self._on_current_item_changed)
        bus.unsubscribe(ItemsViewReset, self._on_items_view_reset)
        if self._owns_combo:
            self.combo.close()

    # ------------------------------------------------------------------
    # ComboHost
    # ------------------------------------------------------------------

    def focus_text_input(self) -> None:
        if self._input is not None:
            self._input.focus()

    def select_all_text(self) -> None:
        if self._input is not None:
            self._input.select_all()

    def focus_widget(self) -> None:
        self.focus()

    def scroll_into_view(self, item: Any) -> None:
        position = self.combo.view.current_position
        if self._list is not None and position >= 0:
            # Highlighting an option scrolls it into view
            self._list.highlighted = position

    # ------------------------------------------------------------------
    # User input
    # ------------------------------------------------------------------

    def _route_key(self, key: str) -> bool:
        return self.combo.interaction.handle_key(key)

    def on_key(self, event: events.Key) -> None:
        # Keys typed into the text box bubble through here; only handle our own
        if not self.has_focus:
            return
        if self.combo.interaction.handle_key(event.key) or self._activate_key(event.key):
            event.stop()
            event.prevent_default()

    def _activate_key(self, key: str) -> bool:
        if key != "space":
            return False
        self.combo.interaction.activate_display()
        return True

    def on_selected_item_display_activated(self, event: SelectedItemDisplay.Activated) -> None:
        event.stop()
        self.combo.interaction.activate_display()

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input is not self._input:
            return
        event.stop()
        # Programmatic writes echo back as Changed with the model's own text
        if event.value != self.combo.text:
            self.combo.text = event.value

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input is self._input:
            event.stop()

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        if event.option_list is not self._list:
            return
        event.stop()
        self.combo.view.move_to_position(event.option_index)
        self.combo.interaction.on_list_clicked()

    def on_option_list_option_highlighted(self, event: OptionList.OptionHighlighted) -> None:
        if event.option_list is not self._list:
            return
        event.stop()
        # Only user navigation inside the list moves the cursor; highlights we
        # set ourselves (or that follow a rebuild) are ignored.
        if self._list is None or not self._list.has_focus:
            return
        if event.option_index != self.combo.view.current_position:
            self.combo.view.move_to_position(event.option_index)

    # ------------------------------------------------------------------
    # Model -> widget
    # ------------------------------------------------------------------

    def _on_property_changed(self, event: PropertyChanged) -> None:
        if event.source is not self.combo or not self.is_mounted:
            return
        name = event.name
        if name == "text":
            if self._input is not None and self._input.value != event.new_value:
                with self._input.prevent(Input.Changed):
                    self._input.value = event.new_value
        elif name == "display_text":
            self._refresh_display()
        elif name == "is_dropdown_open":
            if self._list is not None:
                self._list.display = bool(event.new_value)
        elif name == "is_editing":
            self._refresh_editing()
        elif name == "is_loading":
            self.set_class(bool(event.new_value), "-loading")
        elif name == "selected_item":
            self.post_message(self.SelectionChanged(self, event.new_value))

    def _on_dropdown_opened(self, event: DropDownOpenedEvent) -> None:
        if event.source is self.combo:
            self.post_message(self.DropDownOpened(self))

    def _on_items_view_reset(self, event: ItemsViewReset) -> None:
        # The view is only rebuilt after items_source has been published
        if event.source is self.combo and self.is_mounted:
            self._rebuild_list()

    def _on_current_item_changed(self, event: CurrentItemChanged) -> None:
        if self._list is None or not self.is_mounted:
            return
        self._list.highlighted = event.position if event.position >= 0 else None

    def _refresh_parts(self) -> None:
        self._refresh_display()
        self._refresh_editing()
        self._rebuild_list()
        if self._list is not None:
            self._list.display = self.combo.is_dropdown_open
        self.set_class(self.combo.is_loading, "-loading")

    def _refresh_display(self) -> None:
        if self._display is None:
            return
        text = self.combo.display_text
        self._display.update(Text(text) if text else Text(self._placeholder, style="dim"))

    def _refresh_editing(self) -> None:
        editing = self.combo.is_editing
        if self._input is not None:
            self._input.display = editing
        if self._display is not None:
            self._display.display = not editing

    def _rebuild_list(self) -> None:
        if self._list is None:
            return
        synchronizer = self.combo.synchronizer
        options = [Option(Text(synchronizer.display_text_for(item) or "")) for item in self.combo.view]
        self._list.clear_options()
        self._list.add_options(options)
        self._list.highlighted = None
        logger.debug(f"Dropdown list rebuilt with {len(options)} option(s)")
