# MIT License (see LICENSE)
"""
Ordered, index-addressable particle storage.

Indices are assigned on insertion and never change: there is no removal.
Once frozen (the simulation loop has started) no particle can be added.
"""
from __future__ import annotations
from numbers import Integral
from typing import Iterator

from .errors import IndexOutOfRangeError, InvalidParameterError
from .types import Particle


class ParticleStore:
    """List of particles addressed by the index returned from add()."""

    def __init__(self) -> None:
        self._particles: list[Particle] = []
        self._frozen = False

    def add(self, particle: Particle) -> int:
        """Append a particle and return its index."""
        if self._frozen:
            raise InvalidParameterError("Cannot add particles once the simulation has started")
        if not isinstance(particle, Particle):
            raise TypeError(f"Expected Particle, got {type(particle).__name__}")
        self._particles.append(particle)
        return len(self._particles) - 1

    def check_index(self, index: int) -> int:
        """Return index as a plain int if it refers to a stored particle, else raise."""
        # bool is an Integral but never a valid index
        if isinstance(index, bool) or not isinstance(index, Integral) or not 0 <= index < len(self._particles):
            raise IndexOutOfRangeError(index, len(self._particles))
        return int(index)

    def get(self, index: int) -> Particle:
        return self._particles[self.check_index(index)]

    def set(self, index: int, particle: Particle) -> None:
        if not isinstance(particle, Particle):
            raise TypeError(f"Expected Particle, got {type(particle).__name__}")
        self._particles[self.check_index(index)] = particle

    def freeze(self) -> None:
        """Fix the particle count."""
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def __getitem__(self, index: int) -> Particle:
        return self.get(index)

    def __len__(self) -> int:
        return len(self._particles)

    def __iter__(self) -> Iterator[Particle]:
        return iter(self._particles)
