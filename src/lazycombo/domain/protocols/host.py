"""Combo host protocol."""

from typing import Any, Protocol

__all__ = ["ComboHost"]


class ComboHost(Protocol):
    """UI primitives the interaction state machine needs from its host.

    A Textual widget implements these against its child widgets; headless
    users can pass an object with no-op methods.
    """

    def focus_text_input(self) -> None:
        """Move input focus into the text box."""
        ...

    def select_all_text(self) -> None:
        """Select the whole content of the text box."""
        ...

    def focus_widget(self) -> None:
        """Move input focus onto the combo itself."""
        ...

    def scroll_into_view(self, item: Any) -> None:
        """Make ``item`` visible in the dropdown list."""
        ...
