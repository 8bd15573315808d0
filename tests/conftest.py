"""Shared fixtures for lazycombo tests."""

from dataclasses import dataclass
from typing import Any

import pytest

from lazycombo.application.combo import LazyCombo
from lazycombo.application.dispatch import QueueDispatcher
from lazycombo.domain.events import PropertyChanged


@dataclass(frozen=True)
class Person:
    name: str
    age: int


PEOPLE = [Person("Alice", 30), Person("Albert", 41), Person("Bob", 25), Person("Carol", 35)]


class RecordingHost:
    """ComboHost that records every request."""

    def __init__(self):
        self.calls: list[tuple[str, Any]] = []

    def focus_text_input(self) -> None:
        self.calls.append(("focus_text_input", None))

    def select_all_text(self) -> None:
        self.calls.append(("select_all_text", None))

    def focus_widget(self) -> None:
        self.calls.append(("focus_widget", None))

    def scroll_into_view(self, item: Any) -> None:
        self.calls.append(("scroll_into_view", item))

    def names(self) -> list[str]:
        return [name for name, _ in self.calls]


class ChangeRecorder:
    """Collects PropertyChanged events published on a bus."""

    def __init__(self, bus):
        self.events: list[PropertyChanged] = []
        bus.subscribe(PropertyChanged, self.events.append)

    def names(self) -> list[str]:
        return [event.name for event in self.events]

    def values(self, name: str) -> list[Any]:
        return [event.new_value for event in self.events if event.name == name]


def filter_people(text: str) -> list[Person]:
    return [person for person in PEOPLE if text.lower() in person.name.lower()]


def people_lookup(context) -> None:
    context.set_items(filter_people(context.input_text))


@pytest.fixture
def people():
    return list(PEOPLE)


@pytest.fixture
def host():
    return RecordingHost()


@pytest.fixture
def dispatcher():
    return QueueDispatcher("test")


@pytest.fixture
def make_combo(dispatcher, host):
    """Factory for combos that deliver async results through the test dispatcher."""
    created: list[LazyCombo] = []

    def factory(lookup_action=people_lookup, **kwargs) -> LazyCombo:
        kwargs.setdefault("text_member", "name")
        kwargs.setdefault("dispatcher", dispatcher)
        kwargs.setdefault("host", host)
        combo = LazyCombo(lookup_action, **kwargs)
        created.append(combo)
        return combo

    yield factory

    for combo in created:
        combo.close()


@pytest.fixture
def recorder_for():
    return ChangeRecorder
