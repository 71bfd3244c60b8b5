"""Non-owning references that become invalid when the target is collected."""

from __future__ import annotations

import weakref
from typing import Any, Generic, TypeVar

T = TypeVar("T")


class WeakPtr(Generic[T]):
    """A weak reference to an object, comparable by the identity of its target."""

    __slots__ = ("_ref", "__weakref__")

    def __init__(self, obj: T | WeakPtr[T] | None = None) -> None:
        self._ref: weakref.ref[Any] | None = None
        self.connect(obj)

    def connect(self, obj: T | WeakPtr[T] | None) -> None:
        """Point at ``obj`` (or at what another WeakPtr points at); None disconnects."""
        if isinstance(obj, WeakPtr):
            obj = obj.pointer()
        self._ref = None if obj is None else weakref.ref(obj)

    def pointer(self) -> T | None:
        """The referenced object, or None if it no longer exists."""
        return None if self._ref is None else self._ref()

    def valid(self) -> bool:
        """True if the referenced object still exists."""
        return self.pointer() is not None

    def access(self) -> T:
        """The referenced object; raise ReferenceError if it does not exist."""
        target = self.pointer()
        if target is None:
            raise ReferenceError("WeakPtr.access: the object you intend to access does not exist")
        return target

    @property
    def object(self) -> T:
        return self.access()

    def __bool__(self) -> bool:
        return self.valid()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, WeakPtr):
            return NotImplemented
        return self.pointer() is other.pointer()

    __hash__ = None  # type: ignore[assignment]

    def cast(self, objecttype: type) -> WeakPtr[Any] | None:
        """A WeakPtr to the same object if it is an ``objecttype``, else None."""
        target = self.pointer()
        if not isinstance(target, objecttype):
            return None
        return WeakPtr(target)

    def __repr__(self) -> str:
        return f"WeakPtr({self.pointer()!r})"