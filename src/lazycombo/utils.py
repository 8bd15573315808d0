"""
Utility functions for lazycombo.
"""

import os
from collections.abc import Mapping
from typing import Any


def get_project_root() -> str:
    """
    Get the project root directory (parent of src/lazycombo).

    Returns:
        Absolute path to the project root directory
    """
    return os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


def find_member(item: Any, member_name: str | None) -> tuple[bool, Any]:
    """
    Look up a named member on a candidate item, ignoring case.

    Mapping keys are checked first, then instance attributes, then public
    attributes and properties of the item's type (including inherited ones).
    Methods never match.

    Args:
        item: The candidate item
        member_name: Name of the member, matched case-insensitively

    Returns:
        ``(True, value)`` when found, ``(False, None)`` otherwise
    """
    if item is None or not member_name:
        return False, None

    wanted = member_name.lower()

    if isinstance(item, Mapping):
        for key in item.keys():
            if isinstance(key, str) and key.lower() == wanted:
                return True, item[key]

    names = list(getattr(item, "__dict__", {}).keys())
    names.extend(name for name in dir(type(item)) if not name.startswith("_"))

    for name in names:
        if name.lower() != wanted:
            continue
        try:
            value = getattr(item, name)
        except AttributeError:
            continue
        if callable(value):
            continue
        return True, value

    return False, None


def resolve_display_text(item: Any, text_member: str | None) -> str | None:
    """
    Compute the display string for a candidate item.

    Uses the configured text member when it resolves on the item and falls
    back to ``str(item)`` otherwise. A member whose value is None yields None.

    Args:
        item: The candidate item (None yields None)
        text_member: Name of the member supplying the display text

    Returns:
        The display text, or None
    """
    if item is None:
        return None
    found, value = find_member(item, text_member)
    if not found:
        return str(item)
    return None if value is None else str(value)
