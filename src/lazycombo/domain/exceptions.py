"""Domain-specific exceptions."""

__all__ = ["LazyComboError", "LookupCancelledError", "DispatcherClosedError"]


class LazyComboError(Exception):
    """Base class for lazycombo errors."""


class LookupCancelledError(LazyComboError):
    """Raised by a lookup callback that noticed its cancellation token.

    The coordinator treats this as a silent cancellation: it is logged at
    debug level and never reaches the invocation call-site.
    """

    def __init__(self, generation: int):
        super().__init__(f"Lookup #{generation} was cancelled")
        self.generation = generation


class DispatcherClosedError(LazyComboError):
    """Raised when posting to a dispatcher that has been closed."""
