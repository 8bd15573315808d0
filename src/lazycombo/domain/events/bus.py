"""Event bus implementation for decoupled event-driven communication.

The EventBus lets the combo model publish property changes and dropdown
notifications without knowing who listens (a Textual widget, a test, the
application that embeds the combo).

Event Handler Contract:
    Event handlers MUST be synchronous (non-async) functions. This is enforced
    at subscription time. Handlers run on the thread that publishes, which for
    a combo box is always the UI context.
"""

import inspect
from typing import Callable, Type, TypeVar

from lazycombo.logger import get_logger

from .types import Event

logger = get_logger("events.bus")

T = TypeVar("T", bound=Event)

# Type alias for event handlers - must be synchronous
EventHandler = Callable[[Event], None]


class EventBus:
    """Event bus for publishing and subscribing to events.

    Example:
        ```python
        bus = EventBus()

        def on_change(event: PropertyChanged):
            print(f"{event.name}: {event.old_value!r} -> {event.new_value!r}")

        bus.subscribe(PropertyChanged, on_change)
        bus.publish(PropertyChanged(source=combo, name="text", old_value="", new_value="al"))
        ```

    Thread safety:
        This implementation is NOT thread-safe. Worker threads must hop back
        to the UI context (see ``Dispatcher``) before publishing.
    """

    def __init__(self):
        """Initialize the event bus."""
        self._handlers: dict[Type[Event], list[Callable[[Event], None]]] = {}
        """Registry of event handlers by event type."""

    def subscribe(self, event_type: Type[T], handler: Callable[[T], None]) -> None:
        """
        Subscribe to events of a specific type.

        Args:
            event_type: The type of event to subscribe to (e.g., PropertyChanged)
            handler: Callback invoked with the event instance. MUST be synchronous.

        Raises:
            TypeError: If handler is an async function (coroutine function)
        """
        if inspect.iscoroutinefunction(handler):
            raise TypeError(
                f"Event handlers must be synchronous functions. "
                f"Handler {handler.__name__} is an async function (coroutine function). "
                f"To perform async work, schedule it using asyncio.create_task() instead."
            )

        if event_type not in self._handlers:
            self._handlers[event_type] = []

        # Avoid duplicate subscriptions of the same handler
        if handler not in self._handlers[event_type]:
            self._handlers[event_type].append(handler)  # type: ignore[arg-type]
            logger.debug(f"Subscribed handler for {event_type.__name__}")
        else:
            logger.debug(f"Handler already subscribed for {event_type.__name__}, skipping")

    def unsubscribe(self, event_type: Type[T], handler: Callable[[T], None]) -> None:
        """
        Unsubscribe a handler from events of a specific type.

        If the handler was not subscribed, this is a no-op.
        """
        if event_type in self._handlers:
            try:
                self._handlers[event_type].remove(handler)  # type: ignore[arg-type]
                logger.debug(f"Unsubscribed handler for {event_type.__name__}")
            except ValueError:
                logger.debug(f"Handler not found in subscriptions for {event_type.__name__}")

    def publish(self, event: Event) -> None:
        """
        Publish an event to all subscribed handlers.

        Handlers are called synchronously in subscription order. A handler that
        raises is logged and does not prevent the remaining handlers from running.
        """
        event_type = type(event)
        # Copy so handlers may (un)subscribe while being notified
        handlers = list(self._handlers.get(event_type, []))

        if not handlers:
            return

        for handler in handlers:
            try:
                handler(event)
            except Exception as e:
                logger.opt(exception=e).error(f"Error in event handler for {event_type.__name__}: {e}")

    def clear(self) -> None:
        """Clear all event subscriptions."""
        self._handlers.clear()
        logger.debug("Event bus cleared")

    def has_subscribers(self, event_type: Type[Event]) -> bool:
        """Check if there are any subscribers for a specific event type."""
        return event_type in self._handlers and len(self._handlers[event_type]) > 0
