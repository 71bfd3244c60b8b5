"""Named variant values attached to physics objects."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from typing import Any

from pxlkit.variant import (
    FLOATING_TYPES,
    INTEGER_TYPES,
    OBJECT_TYPES,
    Variant,
    VariantType,
)


def _kind_matches(value: Any, vtype: VariantType) -> bool:
    if isinstance(value, Variant):
        return value.type is vtype
    if value is None:
        return False
    if isinstance(value, bool):
        return vtype is VariantType.BOOL
    if isinstance(value, int):
        return vtype in INTEGER_TYPES
    if isinstance(value, float):
        return vtype in FLOATING_TYPES
    if isinstance(value, str):
        return vtype is VariantType.STRING
    if isinstance(value, (list, tuple)):
        return vtype is VariantType.VECTOR
    return vtype in OBJECT_TYPES


class UserRecords:
    """A key-sorted collection of string keys mapped to :class:`Variant` values."""

    def __init__(self, items: Mapping[str, Any] | Iterable[tuple[str, Any]] | None = None) -> None:
        self._data: dict[str, Variant] = {}
        if items is not None:
            pairs = items.items() if isinstance(items, Mapping) else items
            for key, value in pairs:
                self.set(key, value)

    def set(self, key: str, value: Any) -> None:
        """Insert or replace the entry for ``key``."""
        self._data[key] = Variant(value)

    def get(self, key: str) -> Variant:
        """Return the entry for ``key``; raise KeyError if absent."""
        try:
            return self._data[key]
        except KeyError:
            raise KeyError(f"UserRecords.get: key '{key}' not found") from None

    def find(self, key: str) -> Variant | None:
        """Return the entry for ``key`` or None."""
        return self._data.get(key)

    def has(self, key: str) -> bool:
        """True if an entry for ``key`` exists."""
        return key in self._data

    def change(self, key: str, value: Any) -> None:
        """Replace an existing entry with a value of the same type."""
        existing = self._data.get(key)
        if existing is None:
            raise KeyError(f"UserRecords.change: entry '{key}' not found")
        if not _kind_matches(value, existing.type):
            raise TypeError(f"UserRecords.change: entry '{key}' of wrong type")
        self._data[key] = Variant(value, existing.type)

    def erase(self, key: str) -> None:
        """Remove the entry for ``key``; raise KeyError if absent."""
        if self._data.pop(key, None) is None:
            raise KeyError(f"Cannot erase unknown key: {key}")

    def clear(self) -> None:
        """Remove all entries."""
        self._data.clear()

    def copy(self) -> "UserRecords":
        """Return an independent copy."""
        duplicate = UserRecords()
        duplicate._data = {key: Variant(value) for key, value in self._data.items()}
        return duplicate

    def to_string(self) -> str:
        """Render one line per entry, sorted by key."""
        return "\n".join(
            f"{key} [{self._data[key].type_name()}]: {self._data[key]}" for key in self
        )

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._data))

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __getitem__(self, key: str) -> Variant:
        return self.get(key)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, UserRecords):
            return NotImplemented
        return self._data == other._data

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        inner = ", ".join(f"{key!r}: {self._data[key]!r}" for key in self)
        return f"UserRecords({{{inner}}})"


class UserRecordHelper:
    """Mixin giving an object its own :class:`UserRecords`."""

    def __init__(self) -> None:
        self._user_records = UserRecords()

    @property
    def user_records(self) -> UserRecords:
        return self._user_records

    @user_records.setter
    def user_records(self, value: UserRecords) -> None:
        self._user_records = value.copy()

    def set_user_record(self, key: str, value: Any) -> None:
        """Insert or replace a user record."""
        self._user_records.set(key, value)

    def get_user_record(self, key: str) -> Variant:
        """Return a user record; raise KeyError if absent."""
        return self._user_records.get(key)

    def has_user_record(self, key: str) -> bool:
        """True if the user record exists."""
        return self._user_records.has(key)

    def erase_user_record(self, key: str) -> None:
        """Remove a user record; raise KeyError if absent."""
        self._user_records.erase(key)