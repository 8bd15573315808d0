"""
ItemsView - cursor over the combo's candidate collection.

The view snapshots the caller-owned collection in its iteration order and
keeps an index cursor ("current item") over the snapshot. It never sorts,
groups or mutates the caller's data.
"""

from __future__ import annotations

from typing import Any, Callable, Iterable, Iterator

from lazycombo.logger import get_logger

logger = get_logger("items_view")

NO_POSITION = -1

SourceGetter = Callable[[], Iterable[Any] | None]
CurrentChangedHandler = Callable[[int, Any], None]


class ItemsView:
    """
    Index cursor over a lazily built snapshot of an items source.

    The snapshot is rebuilt on first access after construction or ``reset()``.
    ``reset()`` must be called whenever the backing collection reference
    changes. An absent source (None) is a valid state: the view reports
    ``is_available == False`` and every move is a no-op.
    """

    def __init__(self, source_getter: SourceGetter):
        """
        Initialize the view.

        Args:
            source_getter: Returns the current backing collection (or None)
        """
        self._source_getter = source_getter
        self._items: list[Any] | None = None
        self._built = False
        self._position = NO_POSITION
        self._listeners: list[CurrentChangedHandler] = []
        # Always empty: caller data is never reordered or grouped.
        self.sort_keys: list[Any] = []
        self.group_keys: list[Any] = []

    @classmethod
    def from_items(cls, items: Iterable[Any] | None) -> "ItemsView":
        """Create a view over a fixed collection."""
        return cls(lambda: items)

    # ------------------------------------------------------------------
    # Snapshot
    # ------------------------------------------------------------------

    def _ensure(self) -> list[Any] | None:
        if not self._built:
            source = self._source_getter()
            self._items = None if source is None else list(source)
            self.sort_keys.clear()
            self.group_keys.clear()
            self._position = NO_POSITION
            self._built = True
            logger.debug(f"Built items view ({'no source' if self._items is None else len(self._items)} items)")
        return self._items

    def reset(self) -> None:
        """Invalidate the snapshot; the next access rebuilds it from the source."""
        self._items = None
        self._built = False
        self._position = NO_POSITION

    @property
    def is_available(self) -> bool:
        """True when a backing collection is attached."""
        return self._ensure() is not None

    @property
    def items(self) -> tuple[Any, ...]:
        return tuple(self._ensure() or ())

    def __len__(self) -> int:
        return len(self._ensure() or ())

    def __iter__(self) -> Iterator[Any]:
        return iter(self.items)

    def __contains__(self, item: object) -> bool:
        return item in (self._ensure() or ())

    # ------------------------------------------------------------------
    # Cursor
    # ------------------------------------------------------------------

    @property
    def current_position(self) -> int:
        self._ensure()
        return self._position

    @property
    def has_current(self) -> bool:
        return self.current_position != NO_POSITION

    @property
    def current_item(self) -> Any:
        items = self._ensure()
        if not items or self._position == NO_POSITION:
            return None
        return items[self._position]

    def move_first(self) -> bool:
        items = self._ensure()
        if not items:
            return False
        return self._set_position(0)

    def move_last(self) -> bool:
        items = self._ensure()
        if not items:
            return False
        return self._set_position(len(items) - 1)

    def move_next(self) -> bool:
        """Advance the cursor, wrapping from the last item to the first."""
        items = self._ensure()
        if not items:
            return False
        position = self._position + 1
        if position >= len(items):
            position = 0
        return self._set_position(position)

    def move_previous(self) -> bool:
        """Step the cursor back, wrapping from the first item (or none) to the last."""
        items = self._ensure()
        if not items:
            return False
        position = self._position - 1
        if position < 0:
            position = len(items) - 1
        return self._set_position(position)

    def move_to_position(self, position: int) -> bool:
        """Move to an explicit index; out-of-range positions clear the cursor."""
        items = self._ensure() or []
        if position < 0 or position >= len(items):
            position = NO_POSITION
        return self._set_position(position)

    def move_to(self, item: Any) -> bool:
        """Move to the first snapshot entry equal to ``item``; clear the cursor if absent."""
        items = self._ensure() or []
        for index, candidate in enumerate(items):
            if candidate is item or candidate == item:
                return self._set_position(index)
        return self._set_position(NO_POSITION)

    def _set_position(self, position: int) -> bool:
        if position == self._position:
            return False
        self._position = position
        item = self.current_item
        logger.debug(f"Current item moved to position {position}")
        for listener in list(self._listeners):
            listener(position, item)
        return True

    # ------------------------------------------------------------------
    # Notifications
    # ------------------------------------------------------------------

    def on_current_changed(self, handler: CurrentChangedHandler) -> None:
        """Register ``handler(position, item)`` for cursor moves."""
        if handler not in self._listeners:
            self._listeners.append(handler)

    def remove_current_changed(self, handler: CurrentChangedHandler) -> None:
        if handler in self._listeners:
            self._listeners.remove(handler)
