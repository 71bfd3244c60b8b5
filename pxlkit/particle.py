"""A particle with a four-momentum, charge and PDG number."""

from __future__ import annotations

import math
from typing import Any

from pxlkit.user_record import UserRecordHelper


class Particle(UserRecordHelper):
    """A particle in (px, py, pz, E) representation, with name and user records."""

    def __init__(
        self,
        px: float = 0.0,
        py: float = 0.0,
        pz: float = 0.0,
        e: float = 0.0,
        charge: float = 0.0,
        pdg_number: int = 0,
        name: str = "",
    ) -> None:
        super().__init__()
        self.name = name
        self.px, self.py, self.pz, self.e = float(px), float(py), float(pz), float(e)
        self.charge = float(charge)
        self.pdg_number = int(pdg_number)

    @property
    def p4(self) -> tuple[float, float, float, float]:
        """The four-vector as ``(px, py, pz, E)``."""
        return (self.px, self.py, self.pz, self.e)

    @p4.setter
    def p4(self, value: tuple[float, float, float, float]) -> None:
        self.set_p4(*value)

    @property
    def p(self) -> float:
        """Absolute momentum."""
        return math.sqrt(self.px**2 + self.py**2 + self.pz**2)

    @property
    def pt(self) -> float:
        """Transverse momentum."""
        return math.hypot(self.px, self.py)

    @property
    def mass(self) -> float:
        """Invariant mass; negative if the four-vector is space-like."""
        m2 = self.e**2 - (self.px**2 + self.py**2 + self.pz**2)
        return math.sqrt(m2) if m2 >= 0 else -math.sqrt(-m2)

    @property
    def eta(self) -> float:
        """Pseudorapidity; infinite along the beam axis."""
        pt = self.pt
        if pt == 0.0:
            return 0.0 if self.pz == 0.0 else math.copysign(math.inf, self.pz)
        return math.asinh(self.pz / pt)

    @property
    def et(self) -> float:
        """Transverse energy."""
        p = self.p
        return self.e * self.pt / p if p > 0.0 else 0.0

    @property
    def phi(self) -> float:
        """Azimuth angle."""
        if self.px == 0.0 and self.py == 0.0:
            return 0.0
        return math.atan2(self.py, self.px)

    @property
    def theta(self) -> float:
        """Polar angle."""
        pt = self.pt
        if pt == 0.0 and self.pz == 0.0:
            return 0.0
        return math.atan2(pt, self.pz)

    def set_p4(self, px: float, py: float, pz: float, e: float) -> None:
        """Set all four components."""
        self.px, self.py, self.pz, self.e = float(px), float(py), float(pz), float(e)

    def add_p4(self, px: float, py: float, pz: float, e: float) -> None:
        """Add the given components to the four-vector."""
        self.px += px
        self.py += py
        self.pz += pz
        self.e += e

    def add_particle(self, other: "Particle") -> None:
        """Add the four-vector and charge of ``other``."""
        self.add_p4(*other.p4)
        self.charge += other.charge

    def __iadd__(self, other: "Particle") -> "Particle":
        if not isinstance(other, Particle):
            return NotImplemented
        self.add_particle(other)
        return self

    def __isub__(self, other: "Particle") -> "Particle":
        """Subtract the four-vector of ``other``; its charge is added."""
        if not isinstance(other, Particle):
            return NotImplemented
        self.add_p4(-other.px, -other.py, -other.pz, -other.e)
        self.charge += other.charge
        return self

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Particle):
            return NotImplemented
        return (
            self.p4 == other.p4
            and self.charge == other.charge
            and self.pdg_number == other.pdg_number
        )

    __hash__ = None  # type: ignore[assignment]

    def copy(self) -> "Particle":
        """An independent copy with the same kinematics, name and user records."""
        duplicate = Particle(*self.p4, self.charge, self.pdg_number, self.name)
        duplicate.user_records = self.user_records
        return duplicate

    def boost_vector(self) -> tuple[float, float, float]:
        """The velocity ``(px/E, py/E, pz/E)`` of this particle."""
        if self.e == 0.0:
            raise ZeroDivisionError("boost_vector: particle has zero energy")
        return (self.px / self.e, self.py / self.e, self.pz / self.e)

    def boost(self, bx: float, by: float, bz: float) -> None:
        """Lorentz-boost the four-vector by the velocity ``(bx, by, bz)``."""
        b2 = bx * bx + by * by + bz * bz
        if b2 >= 1.0:
            raise ValueError("boost: velocity must be smaller than the speed of light")
        gamma = 1.0 / math.sqrt(1.0 - b2)
        bp = bx * self.px + by * self.py + bz * self.pz
        gamma2 = (gamma - 1.0) / b2 if b2 > 0.0 else 0.0
        self.px += gamma2 * bp * bx + gamma * bx * self.e
        self.py += gamma2 * bp * by + gamma * by * self.e
        self.pz += gamma2 * bp * bz + gamma * bz * self.e
        self.e = gamma * (self.e + bp)

    def __repr__(self) -> str:
        return (
            f"Particle(px={self.px!r}, py={self.py!r}, pz={self.pz!r}, e={self.e!r}, "
            f"charge={self.charge!r}, pdg_number={self.pdg_number!r}, name={self.name!r})"
        )