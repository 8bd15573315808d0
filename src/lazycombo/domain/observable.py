"""Observable property descriptor.

An ``ObservableProperty`` stores its value on the owning instance and, on
every write that changes the value:

1. runs ``validate_<name>(value)`` on the owner (if defined) to coerce it,
2. stores the value,
3. publishes ``PropertyChanged`` on the owner's ``event_bus`` (if any),
4. runs ``watch_<name>(old, new)`` on the owner (if defined).

The validate/watch naming follows Textual's reactive attributes so the combo
model reads like a Textual widget while staying usable without an app.

Validation runs on every write, even when the coerced value equals the
current one. Exceptions from validate/watch hooks propagate to the writer.
"""

from typing import Any, Generic, TypeVar

from lazycombo.domain.events.types import PropertyChanged

__all__ = ["ObservableProperty"]

T = TypeVar("T")


class ObservableProperty(Generic[T]):
    """Descriptor for a change-notifying attribute.

    Args:
        default: Value returned before the first write
        identity: Compare old and new values with ``is`` instead of ``==``
        read_only: Reject public writes; the owner writes through ``set()``
    """

    def __init__(self, default: T | None = None, *, identity: bool = False, read_only: bool = False):
        self.default = default
        self.identity = identity
        self.read_only = read_only
        self.name = ""
        self._attr = ""

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name
        self._attr = f"_observable_{name}"

    def __get__(self, obj: Any, objtype: type | None = None) -> Any:
        if obj is None:
            return self
        return obj.__dict__.get(self._attr, self.default)

    def __set__(self, obj: Any, value: Any) -> None:
        if self.read_only:
            raise AttributeError(f"{type(obj).__name__}.{self.name} is read-only")
        self.set(obj, value)

    def set(self, obj: Any, value: Any) -> bool:
        """
        Write the value, bypassing the read-only guard.

        Returns:
            True if the value changed and notifications were sent
        """
        validate = getattr(obj, f"validate_{self.name}", None)
        if validate is not None:
            value = validate(value)

        old = self.__get__(obj)
        if self._same(old, value):
            return False

        obj.__dict__[self._attr] = value

        bus = getattr(obj, "event_bus", None)
        if bus is not None:
            bus.publish(PropertyChanged(source=obj, name=self.name, old_value=old, new_value=value))

        watch = getattr(obj, f"watch_{self.name}", None)
        if watch is not None:
            watch(old, value)
        return True

    def _same(self, old: Any, new: Any) -> bool:
        if old is new:
            return True
        if self.identity:
            return False
        try:
            return bool(old == new)
        except Exception:
            # Items with exotic __eq__ are treated as different
            return False
