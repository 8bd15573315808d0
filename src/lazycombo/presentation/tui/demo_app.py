"""
LazyComboDemoApp - small Textual app showing a lazily populated combo box.

The lookup simulates a slow remote search: it waits ``lookup_delay`` seconds
(aborting early when cancelled) and then filters a catalogue of countries.
The continuation tag counts how many searches completed so far.
"""

from dataclasses import dataclass

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.widgets import Footer, Header, Static

from lazycombo.config import ComboConfig
from lazycombo.domain.types import LookupContext
from lazycombo.logger import get_logger
from lazycombo.presentation.widgets.lazy_combo_box import LazyComboBox

logger = get_logger("demo_app")


@dataclass(frozen=True)
class Country:
    name: str
    code: str

    def __str__(self) -> str:
        return f"{self.name} ({self.code})"


CATALOGUE = (
    Country("Argentina", "AR"),
    Country("Australia", "AU"),
    Country("Austria", "AT"),
    Country("Belgium", "BE"),
    Country("Brazil", "BR"),
    Country("Canada", "CA"),
    Country("Chile", "CL"),
    Country("Denmark", "DK"),
    Country("Finland", "FI"),
    Country("France", "FR"),
    Country("Germany", "DE"),
    Country("Greece", "GR"),
    Country("Iceland", "IS"),
    Country("India", "IN"),
    Country("Ireland", "IE"),
    Country("Italy", "IT"),
    Country("Japan", "JP"),
    Country("Mexico", "MX"),
    Country("Netherlands", "NL"),
    Country("New Zealand", "NZ"),
    Country("Norway", "NO"),
    Country("Portugal", "PT"),
    Country("Spain", "ES"),
    Country("Sweden", "SE"),
    Country("Switzerland", "CH"),
    Country("United Kingdom", "GB"),
    Country("United States", "US"),
)


def search_countries(text: str) -> list[Country]:
    needle = text.strip().lower()
    if not needle:
        return list(CATALOGUE)
    return [country for country in CATALOGUE if needle in country.name.lower() or needle == country.code.lower()]


def make_country_lookup(delay: float):
    """Build a lookup callback that simulates ``delay`` seconds of latency."""

    def lookup(context: LookupContext) -> None:
        if delay > 0 and context.cancellation_token.wait(delay):
            logger.debug(f"Search for {context.input_text!r} cancelled")
            return
        matches = search_countries(context.input_text)
        context.tag = (context.tag or 0) + 1
        context.set_items(matches)

    return lookup


class LazyComboDemoApp(App):
    """Demo application hosting one LazyComboBox."""

    TITLE = "LazyCombo"
    SUB_TITLE = "Lazily populated combo box"

    CSS = """
    #demo {
        padding: 1 2;
    }

    #status {
        margin-top: 1;
        color: $text-muted;
    }
    """

    BINDINGS = [
        Binding("ctrl+q", "quit", "Quit", priority=True),
        Binding("escape", "close_dropdown", "Close", show=False),
    ]

    def __init__(self, config: ComboConfig | None = None):
        super().__init__()
        self.config = config or ComboConfig()

    def compose(self) -> ComposeResult:
        yield Header()
        with Vertical(id="demo"):
            yield Static("Country")
            yield LazyComboBox(
                make_country_lookup(self.config.lookup_delay),
                is_editable=self.config.is_editable,
                text_member="name",
                id="country",
            )
            yield Static("Nothing selected", id="status")
        yield Footer()

    def on_mount(self) -> None:
        self.query_one("#country", LazyComboBox).focus()
        logger.info(f"Demo app started (delay={self.config.lookup_delay}s, editable={self.config.is_editable})")

    def action_close_dropdown(self) -> None:
        self.query_one("#country", LazyComboBox).combo.interaction.close()

    def on_lazy_combo_box_selection_changed(self, event: LazyComboBox.SelectionChanged) -> None:
        combo = event.combo_box.combo
        searches = combo.retained_tag or 0
        if event.item is None:
            self._set_status(f"Nothing selected ({searches} searches)")
        else:
            self._set_status(f"Selected {event.item} ({searches} searches)")

    def on_lazy_combo_box_drop_down_opened(self, event: LazyComboBox.DropDownOpened) -> None:
        logger.debug("Dropdown opened")

    def _set_status(self, text: str) -> None:
        self.query_one("#status", Static).update(text)
