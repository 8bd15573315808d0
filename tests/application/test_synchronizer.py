import pytest

from lazycombo.domain.events import ItemsViewReset, LookupStarted


@pytest.fixture
def started(make_combo):
    def attach(combo):
        events = []
        combo.event_bus.subscribe(LookupStarted, events.append)
        return events

    return attach


def test_selection_rewrites_text_without_user_lookup(make_combo, people, started):
    combo = make_combo()
    combo.items_source = people
    lookups = started(combo)

    combo.selected_item = people[0]

    assert combo.display_text == "Alice"
    assert combo.text == "Alice"
    assert lookups == []
    assert not combo.is_dropdown_open


def test_text_member_matches_case_insensitively_on_mappings(make_combo):
    combo = make_combo(lambda context: None, text_member="Name")
    combo.items_source = []

    combo.selected_item = {"name": "Alice", "age": 30}

    assert combo.display_text == "Alice"


def test_missing_text_member_falls_back_to_str(make_combo, people):
    combo = make_combo(text_member="nickname")
    combo.items_source = people

    combo.selected_item = people[2]

    assert combo.display_text == str(people[2])


def test_no_text_member_uses_str(make_combo):
    combo = make_combo(text_member=None)
    combo.items_source = [1, 2, 3]

    combo.selected_item = 2

    assert combo.display_text == "2"
    assert combo.text == "2"


def test_clearing_selection_clears_texts(make_combo, people):
    combo = make_combo()
    combo.items_source = people
    combo.selected_item = people[1]

    combo.selected_item = None

    assert combo.display_text is None
    assert combo.text == ""


def test_programmatic_scope_is_reentrant(make_combo):
    sync = make_combo().synchronizer
    assert not sync.is_programmatic
    with sync.programmatic_text():
        with sync.programmatic_text():
            assert sync.is_programmatic
        assert sync.is_programmatic
    assert not sync.is_programmatic


def test_user_text_issues_async_lookup_and_opens(make_combo, started):
    combo = make_combo()
    combo.items_source = []
    lookups = started(combo)

    assert combo.synchronizer.on_text_changed("bo") is True

    assert [(event.input_text, event.asynchronous) for event in lookups] == [("bo", True)]
    assert combo.is_dropdown_open


def test_programmatic_text_is_ignored(make_combo, started):
    combo = make_combo()
    lookups = started(combo)
    with combo.synchronizer.programmatic_text():
        assert combo.synchronizer.on_text_changed("bo") is False
    assert lookups == []


def test_items_replacement_keeps_display_for_selection(make_combo, people):
    combo = make_combo()
    combo.items_source = people
    combo.selected_item = people[0]

    combo.items_source = [people[0], people[3]]
    assert combo.display_text == "Alice"

    combo.items_source = [people[2]]
    assert combo.display_text == "Alice"
    assert combo.selected_item is people[0]


def test_items_replacement_while_editing_keeps_typed_text(make_combo, people):
    combo = make_combo()
    combo.items_source = []
    combo.selected_item = people[2]
    combo.is_editing = True
    with combo.synchronizer.programmatic_text():
        combo.text = "al"

    combo.items_source = people

    assert combo.text == "al"
    assert combo.display_text == "Bob"


def test_view_reset_is_published_once_the_view_holds_new_items(make_combo, people):
    combo = make_combo()
    combo.items_source = people
    seen = []
    combo.event_bus.subscribe(ItemsViewReset, lambda event: seen.append((event.count, combo.view.items)))

    combo.items_source = [people[1], people[2]]
    combo.items_source = [people[3]]

    assert seen == [(2, (people[1], people[2])), (1, (people[3],))]


def test_text_member_change_recomputes_display(make_combo):
    combo = make_combo()
    combo.items_source = []
    combo.selected_item = {"name": "Alice", "city": "Oslo"}

    combo.text_member = "city"

    assert combo.display_text == "Oslo"


def test_manual_selection_runs_sync_lookup(make_combo, people, started):
    seen = []

    def lookup(context):
        seen.append(context.input_text)

    combo = make_combo(lookup)
    lookups = started(combo)

    combo.selected_item = people[3]

    assert [(event.input_text, event.asynchronous) for event in lookups] == [("Carol", False)]
    assert seen == ["Carol"]
    assert not combo.is_loading


def test_manual_selection_lookup_errors_propagate_without_rollback(make_combo, people):
    def lookup(context):
        raise ValueError("unknown person")

    combo = make_combo(lookup)

    with pytest.raises(ValueError):
        combo.selected_item = people[0]

    assert combo.selected_item is people[0]
    assert combo.display_text == "Alice"
    assert not combo.is_loading
