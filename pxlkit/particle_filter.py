"""Selection and transverse-momentum ordering of particles."""

from __future__ import annotations

from collections.abc import Callable, Iterable

from pxlkit.particle import Particle


def pt_descending(particles: Iterable[Particle]) -> list[Particle]:
    """The particles sorted by transverse momentum, highest first."""
    return sorted(particles, key=lambda particle: particle.pt, reverse=True)


class ParticlePtEtaNameCriterion:
    """Accepts particles by name, minimum pt and maximum |eta|.

    An empty name, a non-positive ``pt_min`` or a non-positive ``eta_max``
    switches the corresponding requirement off.
    """

    def __init__(self, name: str = "", pt_min: float = 0.0, eta_max: float = 0.0) -> None:
        self.name = name
        self.pt_min = pt_min
        self.eta_max = eta_max

    def __call__(self, particle: Particle) -> bool:
        if self.name and particle.name != self.name:
            return False
        if self.pt_min > 0.0 and particle.pt < self.pt_min:
            return False
        if self.eta_max > 0.0 and abs(particle.eta) > self.eta_max:
            return False
        return True


class ParticlePtCriterion:
    """Accepts particles whose pt is at least ``pt_min`` (if positive)."""

    def __init__(self, pt_min: float = 0.0) -> None:
        self.pt_min = pt_min

    def __call__(self, particle: Particle) -> bool:
        return not (self.pt_min > 0.0 and particle.pt < self.pt_min)


def filter_particles(
    particles: Iterable[Particle],
    criterion: Callable[[Particle], bool] | None = None,
) -> list[Particle]:
    """The particles accepted by ``criterion``, sorted by pt, highest first."""
    selected = particles if criterion is None else (p for p in particles if criterion(p))
    return pt_descending(selected)