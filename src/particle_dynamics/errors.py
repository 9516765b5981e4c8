# MIT License (see LICENSE)
"""
Exception types raised by the particle dynamics engine.

Construction-time problems (bad indices, bad parameters) are raised from the
mutator that received them. Numerical problems found while stepping are
raised from ParticlesSystem.advance() before any state has been touched.

Each class also derives from the closest builtin so callers that only know
about IndexError / ValueError / ArithmeticError still catch them.
"""
from __future__ import annotations


class ParticleSystemError(Exception):
    """Base class for every error raised by particle_dynamics."""


class IndexOutOfRangeError(ParticleSystemError, IndexError):
    """A particle index does not refer to a particle in the store."""

    def __init__(self, index: int, count: int) -> None:
        super().__init__(f"Particle index {index} out of range for {count} particle(s)")
        self.index = index
        self.count = count


class InvalidParameterError(ParticleSystemError, ValueError):
    """A physical or numerical parameter is outside its valid domain."""


class DegenerateGeometryError(ParticleSystemError, ArithmeticError):
    """
    A force needs a direction between two particles that sit on top of each other.

    Attributes:
        interaction_index: Registration position of the offending interaction
            (None when raised by a bare force function).
        index_a, index_b: Particle indices involved, when known.
    """

    def __init__(
        self,
        message: str,
        interaction_index: int | None = None,
        index_a: int | None = None,
        index_b: int | None = None,
    ) -> None:
        super().__init__(message)
        self.interaction_index = interaction_index
        self.index_a = index_a
        self.index_b = index_b
