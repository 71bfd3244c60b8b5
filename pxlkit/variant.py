"""A tagged value holding one of a fixed set of scalar, string or object types."""

from __future__ import annotations

import copy as _copy
import math
import struct
from enum import IntEnum
from typing import Any


class VariantType(IntEnum):
    """The kinds of value a :class:`Variant` can hold."""

    NONE = 0
    BOOL = 1
    CHAR = 2
    UCHAR = 3
    INT16 = 4
    UINT16 = 5
    INT32 = 6
    UINT32 = 7
    INT64 = 8
    UINT64 = 9
    FLOAT = 10
    DOUBLE = 11
    STRING = 12
    SERIALIZABLE = 13
    BASIC3VECTOR = 14
    LORENTZVECTOR = 15
    VECTOR = 16

    @property
    def type_name(self) -> str:
        """The lower-case name of this type."""
        return self.name.lower()


# bit width and signedness of each integer type
_INT_LAYOUT = {
    VariantType.CHAR: (8, True),
    VariantType.UCHAR: (8, False),
    VariantType.INT16: (16, True),
    VariantType.UINT16: (16, False),
    VariantType.INT32: (32, True),
    VariantType.UINT32: (32, False),
    VariantType.INT64: (64, True),
    VariantType.UINT64: (64, False),
}

INTEGER_TYPES = frozenset(_INT_LAYOUT)
FLOATING_TYPES = frozenset({VariantType.FLOAT, VariantType.DOUBLE})
OBJECT_TYPES = frozenset(
    {VariantType.SERIALIZABLE, VariantType.BASIC3VECTOR, VariantType.LORENTZVECTOR}
)
_SCALAR_TYPES = INTEGER_TYPES | FLOATING_TYPES | {VariantType.BOOL}

_PYTHON_TYPES = {
    bool: VariantType.BOOL,
    int: VariantType.INT64,
    float: VariantType.DOUBLE,
    str: VariantType.STRING,
    list: VariantType.VECTOR,
}


class BadConversion(Exception):
    """Raised when a variant cannot be read or converted as the requested type."""

    def __init__(self, source: VariantType, target: VariantType) -> None:
        self.source = VariantType(source)
        self.target = VariantType(target)
        super().__init__(
            f"Variant: bad conversion from '{self.source.type_name}' "
            f"to '{self.target.type_name}'"
        )


def _int_range(vtype: VariantType) -> tuple[int, int]:
    bits, signed = _INT_LAYOUT[vtype]
    if signed:
        return -(1 << (bits - 1)), (1 << (bits - 1)) - 1
    return 0, (1 << bits) - 1


def _wrap(value: int, vtype: VariantType) -> int:
    bits, signed = _INT_LAYOUT[vtype]
    value &= (1 << bits) - 1
    if signed and value >= 1 << (bits - 1):
        value -= 1 << bits
    return value


def _to_float32(value: float) -> float:
    try:
        return struct.unpack("<f", struct.pack("<f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def _default(vtype: VariantType) -> Any:
    if vtype is VariantType.BOOL:
        return False
    if vtype in INTEGER_TYPES:
        return 0
    if vtype in FLOATING_TYPES:
        return 0.0
    if vtype is VariantType.STRING:
        return ""
    if vtype is VariantType.VECTOR:
        return []
    return None


def _infer(value: Any) -> VariantType:
    if value is None:
        return VariantType.NONE
    if isinstance(value, bool):
        return VariantType.BOOL
    if isinstance(value, int):
        low, high = _int_range(VariantType.INT64)
        if low <= value <= high:
            return VariantType.INT64
        if 0 <= value <= _int_range(VariantType.UINT64)[1]:
            return VariantType.UINT64
        raise OverflowError(f"integer {value} does not fit in 64 bits")
    if isinstance(value, float):
        return VariantType.DOUBLE
    if isinstance(value, str):
        return VariantType.STRING
    if isinstance(value, (list, tuple)):
        return VariantType.VECTOR
    return VariantType.SERIALIZABLE


def _coerce(value: Any, vtype: VariantType) -> Any:
    if vtype is VariantType.NONE:
        if value is not None:
            raise TypeError("a variant of type 'none' holds no value")
        return None
    if vtype is VariantType.BOOL:
        if isinstance(value, (bool, int, float)):
            return bool(value)
        raise TypeError(f"cannot store {value!r} as bool")
    if vtype in INTEGER_TYPES:
        if vtype is VariantType.CHAR and isinstance(value, str) and len(value) == 1:
            value = ord(value)
        if isinstance(value, bool):
            return int(value)
        if isinstance(value, int):
            return _wrap(value, vtype)
        if isinstance(value, float):
            if not math.isfinite(value):
                raise ValueError(f"cannot store {value!r} as {vtype.type_name}")
            return _wrap(int(value), vtype)
        raise TypeError(f"cannot store {value!r} as {vtype.type_name}")
    if vtype in FLOATING_TYPES:
        if not isinstance(value, (bool, int, float)):
            raise TypeError(f"cannot store {value!r} as {vtype.type_name}")
        value = float(value)
        return _to_float32(value) if vtype is VariantType.FLOAT else value
    if vtype is VariantType.STRING:
        if not isinstance(value, str):
            raise TypeError(f"cannot store {value!r} as string")
        return value
    if vtype is VariantType.VECTOR:
        if isinstance(value, (str, bytes)) or not hasattr(value, "__iter__"):
            raise TypeError(f"cannot store {value!r} as vector")
        return [Variant(item) for item in value]
    return _copy.deepcopy(value)


class Variant:
    """A value together with the :class:`VariantType` it is stored as."""

    __slots__ = ("type", "value")

    def __init__(self, value: Any = None, type: VariantType | None = None) -> None:
        if isinstance(value, Variant):
            if type is None or VariantType(type) is value.type:
                self.type = value.type
                self.value = _copy.deepcopy(value.value)
                return
            target = VariantType(type)
            self.type = target
            self.value = value.to(target)
            return
        if type is None:
            vtype = _infer(value)
        else:
            vtype = VariantType(type)
            if value is None:
                value = _default(vtype)
        self.type = vtype
        self.value = _coerce(value, vtype)

    def type_name(self) -> str:
        """The name of the held type."""
        return self.type.type_name

    def is_valid(self) -> bool:
        """True unless the variant is empty."""
        return self.type is not VariantType.NONE

    def check(self, expected: VariantType) -> None:
        """Raise :class:`BadConversion` unless the variant holds ``expected``."""
        expected = VariantType(expected)
        if self.type is not expected:
            raise BadConversion(self.type, expected)

    def to(self, target: VariantType | type) -> Any:
        """Return the value converted to ``target`` (a VariantType or a Python type)."""
        target = _resolve(target)
        if self.type is VariantType.NONE:
            raise BadConversion(self.type, target)
        if target is self.type:
            return _copy.deepcopy(self.value)
        if target is VariantType.STRING:
            return self._format()
        if self.type is VariantType.STRING:
            return Variant.from_string(self.value, target).value
        if self.type in _SCALAR_TYPES and target in _SCALAR_TYPES:
            try:
                return _coerce(self.value, target)
            except (TypeError, ValueError):
                raise BadConversion(self.type, target) from None
        raise BadConversion(self.type, target)

    def clear(self) -> None:
        """Drop the held value and become empty."""
        self.type = VariantType.NONE
        self.value = None

    @staticmethod
    def from_string(text: str, type: VariantType) -> "Variant":
        """Parse ``text`` into a variant of the given type."""
        vtype = VariantType(type)
        if vtype is VariantType.STRING:
            return Variant(text, vtype)
        if vtype is VariantType.NONE:
            return Variant()
        stripped = text.strip()
        if vtype is VariantType.BOOL:
            lowered = stripped.lower()
            if lowered in ("true", "1"):
                return Variant(True)
            if lowered in ("false", "0"):
                return Variant(False)
            raise BadConversion(VariantType.STRING, vtype)
        if vtype in INTEGER_TYPES:
            try:
                number = int(stripped, 10)
            except ValueError:
                raise BadConversion(VariantType.STRING, vtype) from None
            low, high = _int_range(vtype)
            if not low <= number <= high:
                raise BadConversion(VariantType.STRING, vtype)
            return Variant(number, vtype)
        if vtype in FLOATING_TYPES:
            try:
                number = float(stripped)
            except ValueError:
                raise BadConversion(VariantType.STRING, vtype) from None
            return Variant(number, vtype)
        raise BadConversion(VariantType.STRING, vtype)

    @staticmethod
    def to_type(name: str) -> VariantType:
        """Look up a VariantType by its name."""
        try:
            return VariantType[name.strip().upper()]
        except KeyError:
            raise ValueError(f"unknown variant type '{name}'") from None

    def _format(self) -> str:
        if self.type is VariantType.BOOL:
            return "true" if self.value else "false"
        if self.type in INTEGER_TYPES:
            return str(self.value)
        if self.type is VariantType.FLOAT:
            return f"{self.value:.9g}"
        if self.type is VariantType.DOUBLE:
            return repr(self.value)
        if self.type is VariantType.STRING:
            return self.value
        raise BadConversion(self.type, VariantType.STRING)

    def __str__(self) -> str:
        if self.type is VariantType.NONE:
            return ""
        if self.type is VariantType.VECTOR:
            return "(" + ", ".join(str(item) for item in self.value) + ")"
        if self.type in OBJECT_TYPES:
            return str(self.value)
        return self._format()

    def __repr__(self) -> str:
        return f"Variant({self.value!r}, VariantType.{self.type.name})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Variant):
            return self.type is other.type and self.value == other.value
        if self.type is VariantType.NONE:
            return other is None
        return self.value == other

    __hash__ = None  # type: ignore[assignment]


def _resolve(target: VariantType | type) -> VariantType:
    if isinstance(target, VariantType):
        return target
    if isinstance(target, int):
        return VariantType(target)
    try:
        return _PYTHON_TYPES[target]
    except (KeyError, TypeError):
        raise ValueError(f"no variant type for {target!r}") from None