import pytest
from textual.app import App, ComposeResult

from lazycombo.presentation.widgets.lazy_combo_box import ComboInput, ComboList, LazyComboBox

NAMES = ["Alice", "Albert", "Bob", "Carol"]


def name_lookup(context):
    text = context.input_text.lower()
    context.set_items([name for name in NAMES if text in name.lower()])


class _ComboApp(App):
    def __init__(self, widget: LazyComboBox) -> None:
        super().__init__()
        self._widget = widget
        self.selections = []
        self.opened = 0

    def compose(self) -> ComposeResult:
        yield self._widget

    def on_lazy_combo_box_selection_changed(self, event: LazyComboBox.SelectionChanged) -> None:
        self.selections.append(event.item)

    def on_lazy_combo_box_drop_down_opened(self, event: LazyComboBox.DropDownOpened) -> None:
        self.opened += 1


async def _wait_for(pilot, condition, attempts=100):
    for _ in range(attempts):
        if condition():
            return True
        await pilot.pause(0.02)
    return condition()


@pytest.mark.asyncio
async def test_read_only_combo_opens_on_click():
    widget = LazyComboBox(name_lookup, is_editable=False, id="combo")
    app = _ComboApp(widget)

    async with app.run_test() as pilot:
        await pilot.click("SelectedItemDisplay")
        await pilot.pause()

        combo = widget.combo
        assert combo.is_dropdown_open
        assert combo.items_source == NAMES
        assert app.opened == 1
        option_list = widget.query_one(ComboList)
        assert option_list.display
        assert option_list.option_count == len(NAMES)
        assert widget.has_focus


@pytest.mark.asyncio
async def test_typing_filters_and_enter_commits():
    widget = LazyComboBox(name_lookup, id="combo")
    app = _ComboApp(widget)

    async with app.run_test() as pilot:
        await pilot.click("SelectedItemDisplay")
        await pilot.pause()
        text_input = widget.query_one(ComboInput)
        assert widget.combo.is_editing
        assert text_input.display
        assert text_input.has_focus

        await pilot.press("a", "l")
        assert await _wait_for(pilot, lambda: widget.combo.items_source == ["Alice", "Albert"])
        assert widget.combo.text == "al"
        assert widget.query_one(ComboList).option_count == 2

        await pilot.press("down", "down", "enter")
        await pilot.pause()

        assert widget.combo.selected_item == "Albert"
        assert not widget.combo.is_dropdown_open
        assert text_input.value == "Albert"
        assert app.selections[-1] == "Albert"


@pytest.mark.asyncio
async def test_async_results_arrive_through_the_app():
    widget = LazyComboBox(name_lookup, id="combo")
    app = _ComboApp(widget)

    async with app.run_test() as pilot:
        combo = widget.combo
        combo.items_source = []
        combo.interaction.activate_display()
        await pilot.pause()

        await pilot.press("b")
        assert await _wait_for(pilot, lambda: combo.items_source == ["Albert", "Bob"])
        assert not combo.is_loading


@pytest.mark.asyncio
async def test_programmatic_selection_updates_parts():
    widget = LazyComboBox(name_lookup, id="combo")
    app = _ComboApp(widget)

    async with app.run_test() as pilot:
        widget.combo.items_source = list(NAMES)
        widget.combo.selected_item = "Carol"
        await pilot.pause()

        assert widget.combo.display_text == "Carol"
        assert widget.query_one(ComboInput).value == "Carol"
        assert app.selections == ["Carol"]
        assert not widget.combo.is_dropdown_open


@pytest.mark.asyncio
async def test_losing_text_focus_leaves_editing():
    widget = LazyComboBox(name_lookup, id="combo")
    app = _ComboApp(widget)

    async with app.run_test() as pilot:
        widget.combo.interaction.activate_display()
        await pilot.pause()
        assert widget.query_one(ComboInput).has_focus

        widget.focus()
        await pilot.pause()

        assert not widget.combo.is_editing
        assert not widget.query_one(ComboInput).display


@pytest.mark.asyncio
async def test_replacing_items_redraws_the_list_from_the_new_items():
    widget = LazyComboBox(name_lookup, id="combo")
    app = _ComboApp(widget)

    async with app.run_test() as pilot:
        option_list = widget.query_one(ComboList)

        widget.combo.items_source = ["A", "B", "C"]
        await pilot.pause()
        labels = [str(option_list.get_option_at_index(i).prompt) for i in range(option_list.option_count)]
        assert labels == ["A", "B", "C"]

        widget.combo.items_source = ["X"]
        await pilot.pause()
        assert option_list.option_count == 1
        assert str(option_list.get_option_at_index(0).prompt) == "X"
