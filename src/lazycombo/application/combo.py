"""
LazyCombo - the combo box model.

Owns the observable properties of a lazily populated combo box and wires the
ItemsView, LookupCoordinator, TextSelectionSynchronizer and
InteractionStateMachine together. The model has no UI toolkit dependency: a
host (see ``lazycombo.presentation.widgets.LazyComboBox``) renders it and
feeds user actions into ``interaction``.

All writes must happen on the UI context. Lookup callbacks running on worker
threads deliver results through ``LookupContext.set_items()``, which hops
back via the configured dispatcher.

Example:
    ```python
    def lookup(context: LookupContext) -> None:
        matches = [p for p in people if context.input_text.lower() in p.name.lower()]
        if not context.is_cancelled:
            context.set_items(matches)

    combo = LazyCombo(lookup, text_member="name")
    combo.event_bus.subscribe(DropDownOpened, lambda event: print("opened"))
    combo.text = "al"  # user input: async lookup, dropdown opens
    ...
    combo.process_pending()  # apply the results on this thread
    ```
"""

from __future__ import annotations

from typing import Any

from lazycombo.application.dispatch import QueueDispatcher
from lazycombo.application.interaction import InteractionStateMachine
from lazycombo.application.items_view import ItemsView
from lazycombo.application.lookup import LookupCoordinator
from lazycombo.application.synchronizer import TextSelectionSynchronizer
from lazycombo.config import ComboConfig
from lazycombo.domain.events import CurrentItemChanged, EventBus
from lazycombo.domain.observable import ObservableProperty
from lazycombo.domain.protocols import ComboHost, Dispatcher
from lazycombo.domain.types import InteractionState, LookupAction, SelectionState
from lazycombo.logger import get_logger

logger = get_logger("combo")


class LazyCombo:
    """Selector whose candidates are produced on demand by a lookup callback."""

    items_source = ObservableProperty(None, identity=True)
    selected_item = ObservableProperty(None)
    text = ObservableProperty("")
    display_text = ObservableProperty(None, read_only=True)
    is_loading = ObservableProperty(False, read_only=True)
    is_dropdown_open = ObservableProperty(False)
    is_editing = ObservableProperty(False)
    text_member = ObservableProperty(None)
    is_editable = ObservableProperty(True)
    lookup_action = ObservableProperty(None, identity=True)

    # Styling hooks: stored and published, interpreted by the host only
    dropdown_button_style = ObservableProperty(None)
    popup_border_style = ObservableProperty(None)
    list_style = ObservableProperty(None)
    text_box_style = ObservableProperty(None)

    def __init__(
        self,
        lookup_action: LookupAction | None = None,
        *,
        text_member: str | None = None,
        is_editable: bool | None = None,
        dispatcher: Dispatcher | None = None,
        host: ComboHost | None = None,
        event_bus: EventBus | None = None,
        config: ComboConfig | None = None,
    ):
        """
        Initialize the combo model.

        Args:
            lookup_action: Callback populating the candidates from typed text
            text_member: Member of a candidate supplying its display text
            is_editable: Whether the user can type (defaults to config)
            dispatcher: UI-context dispatcher used by async lookups. When
                omitted, results are queued until ``process_pending()`` runs
            host: UI primitives (focus, scrolling); no-ops when omitted
            event_bus: Bus receiving PropertyChanged and friends
            config: Defaults and worker pool settings
        """
        config = config or ComboConfig()
        self.config = config
        self.event_bus = event_bus or EventBus()

        self.view = ItemsView(lambda: self.items_source)
        self.lookup = LookupCoordinator(
            lambda: self.lookup_action,
            dispatcher=dispatcher,
            items_sink=self._apply_items,
            on_loading_changed=self._set_loading,
            event_bus=self.event_bus,
            max_workers=config.max_workers,
            thread_name_prefix=config.thread_name_prefix,
        )
        self.synchronizer = TextSelectionSynchronizer(self)
        self.interaction = InteractionStateMachine(self, host)
        self.view.on_current_changed(self._on_current_changed)

        self.lookup_action = lookup_action
        self.text_member = text_member if text_member is not None else config.text_member
        self.is_editable = config.is_editable if is_editable is None else is_editable
        logger.debug(f"LazyCombo created (text_member={self.text_member!r}, editable={self.is_editable})")

    # ------------------------------------------------------------------
    # Derived state
    # ------------------------------------------------------------------

    @property
    def interaction_state(self) -> InteractionState:
        return self.interaction.state

    @property
    def selection_state(self) -> SelectionState:
        return SelectionState(
            selected_item=self.selected_item,
            display_text=self.display_text,
            is_editing=self.is_editing,
        )

    @property
    def current_item(self) -> Any:
        return self.view.current_item

    @property
    def retained_tag(self) -> Any:
        return self.lookup.retained_tag

    def set_dispatcher(self, dispatcher: Dispatcher) -> None:
        """
        Swap the UI-context dispatcher (e.g. once a host app is running).

        Call from the owning thread. Callbacks still queued on a replaced
        QueueDispatcher are run before returning.
        """
        previous = self.lookup.dispatcher
        self.lookup.dispatcher = dispatcher
        if isinstance(previous, QueueDispatcher) and previous is not dispatcher:
            previous.drain()

    def process_pending(self, max_items: int | None = None) -> int:
        """
        Apply async lookup results waiting on the default QueueDispatcher.

        Call from the owning thread. Returns the number of callbacks run (0
        when another dispatcher is in use).
        """
        dispatcher = self.lookup.dispatcher
        if not isinstance(dispatcher, QueueDispatcher):
            return 0
        return dispatcher.drain(max_items)

    def set_host(self, host: ComboHost) -> None:
        self.interaction.host = host

    def close(self) -> None:
        """Cancel outstanding lookups and release the worker pool."""
        self.lookup.shutdown()

    # ------------------------------------------------------------------
    # Internal writers for read-only properties
    # ------------------------------------------------------------------

    def _set_display_text(self, text: str | None) -> None:
        type(self).display_text.set(self, text)

    def _set_loading(self, value: bool) -> None:
        type(self).is_loading.set(self, value)

    def _apply_items(self, items: Any) -> None:
        self.items_source = items

    def _on_current_changed(self, position: int, item: Any) -> None:
        self.event_bus.publish(CurrentItemChanged(position=position, item=item))
        # A cursor move is the list's selection-changed notification
        self.interaction.on_list_selection_changed()

    # ------------------------------------------------------------------
    # Validators and watchers (called by ObservableProperty)
    # ------------------------------------------------------------------

    def validate_text(self, value: Any) -> str:
        return "" if value is None else str(value)

    def validate_is_editing(self, value: Any) -> bool:
        return bool(value) and self.is_editable

    def watch_text(self, old: str, new: str) -> None:
        self.synchronizer.on_text_changed(new)

    def watch_selected_item(self, old: Any, new: Any) -> None:
        self.synchronizer.on_selected_item_assigned(new)

    def watch_items_source(self, old: Any, new: Any) -> None:
        self.synchronizer.on_items_source_replaced()

    def watch_text_member(self, old: str | None, new: str | None) -> None:
        self.synchronizer.resync()

    def watch_is_dropdown_open(self, old: bool, new: bool) -> None:
        if new:
            self.interaction.on_dropdown_opened()

    def watch_is_editable(self, old: bool, new: bool) -> None:
        if not new:
            self.is_editing = False
