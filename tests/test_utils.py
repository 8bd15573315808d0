import os
from dataclasses import dataclass

from lazycombo.utils import find_member, get_project_root, resolve_display_text


@dataclass
class City:
    Name: str
    population: int | None = None

    def describe(self):
        return f"{self.Name}!"


class Labelled:
    @property
    def label(self):
        return "from property"


class Child(Labelled):
    pass


def test_project_root_holds_the_sources():
    root = get_project_root()
    assert os.path.isdir(os.path.join(root, "src", "lazycombo"))


def test_find_member_is_case_insensitive():
    assert find_member(City("Oslo"), "name") == (True, "Oslo")
    assert find_member({"Title": "x"}, "title") == (True, "x")


def test_find_member_sees_inherited_properties():
    assert find_member(Child(), "LABEL") == (True, "from property")


def test_find_member_skips_methods_and_missing():
    assert find_member(City("Oslo"), "describe") == (False, None)
    assert find_member(City("Oslo"), "country") == (False, None)
    assert find_member(None, "name") == (False, None)
    assert find_member(City("Oslo"), None) == (False, None)


def test_resolve_display_text():
    assert resolve_display_text(City("Oslo"), "name") == "Oslo"
    assert resolve_display_text(City("Oslo", 700000), "Population") == "700000"
    assert resolve_display_text(City("Oslo"), "population") is None
    assert resolve_display_text(City("Oslo"), "missing") == str(City("Oslo"))
    assert resolve_display_text(42, None) == "42"
    assert resolve_display_text(None, "name") is None
