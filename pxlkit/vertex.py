"""A point in space where particles are produced or decay."""

from __future__ import annotations

from typing import Any

from pxlkit.user_record import UserRecordHelper


class Vertex(UserRecordHelper):
    """A vertex with a three-vector position, a name and user records."""

    def __init__(self, x: float = 0.0, y: float = 0.0, z: float = 0.0, name: str = "") -> None:
        super().__init__()
        self.name = name
        self.x = float(x)
        self.y = float(y)
        self.z = float(z)

    @property
    def vector(self) -> tuple[float, float, float]:
        """The position as an ``(x, y, z)`` tuple."""
        return (self.x, self.y, self.z)

    @vector.setter
    def vector(self, value: tuple[float, float, float]) -> None:
        self.set_xyz(*value)

    def set_xyz(self, x: float, y: float, z: float) -> None:
        """Set all three coordinates."""
        self.x, self.y, self.z = float(x), float(y), float(z)

    def add_xyz(self, x: float, y: float, z: float) -> None:
        """Shift the position by the given amounts."""
        self.x += x
        self.y += y
        self.z += z

    def add_vertex(self, other: "Vertex") -> None:
        """Add the position of ``other`` to this one."""
        self.add_xyz(other.x, other.y, other.z)

    def __iadd__(self, other: "Vertex") -> "Vertex":
        if not isinstance(other, Vertex):
            return NotImplemented
        self.add_vertex(other)
        return self

    def __isub__(self, other: "Vertex") -> "Vertex":
        if not isinstance(other, Vertex):
            return NotImplemented
        self.add_xyz(-other.x, -other.y, -other.z)
        return self

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Vertex):
            return NotImplemented
        return self.vector == other.vector

    __hash__ = None  # type: ignore[assignment]

    def copy(self) -> "Vertex":
        """An independent copy with the same position, name and user records."""
        duplicate = Vertex(self.x, self.y, self.z, self.name)
        duplicate.user_records = self.user_records
        return duplicate

    def __repr__(self) -> str:
        return f"Vertex(x={self.x!r}, y={self.y!r}, z={self.z!r}, name={self.name!r})"