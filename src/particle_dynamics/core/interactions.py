# MIT License (see LICENSE)
"""
Interaction variants registered on a ParticlesSystem.

- PairwiseForce: a force kind acting between two particles.
- ExternalForce: a force kind acting on one particle from outside the system.

Both are immutable; particle indices are checked against the store when the
interaction is registered.
"""
from __future__ import annotations
from dataclasses import dataclass

from ..errors import InvalidParameterError
from .forces import ExternalForceKind, ForceKind, Damping, Elastic, Gravitational, Sticky, LinearDrag, UniformGravity

_PAIRWISE_KINDS = (Elastic, Damping, Gravitational, Sticky)
_EXTERNAL_KINDS = (LinearDrag, UniformGravity)


@dataclass(frozen=True)
class PairwiseForce:
    """
    Force between particles `index_a` and `index_b`.

    The force on A is forces.force_on_a(kind, A, B), the force on B its negation.
    """
    index_a: int
    index_b: int
    kind: ForceKind

    def __post_init__(self) -> None:
        if not isinstance(self.kind, _PAIRWISE_KINDS):
            raise TypeError(f"Not a pairwise force kind: {type(self.kind).__name__}")
        if self.index_a == self.index_b:
            raise InvalidParameterError(f"A particle cannot interact with itself (index {self.index_a})")

    @property
    def indices(self) -> tuple[int, ...]:
        return (self.index_a, self.index_b)


@dataclass(frozen=True)
class ExternalForce:
    """External force acting on particle `index`."""
    index: int
    kind: ExternalForceKind

    def __post_init__(self) -> None:
        if not isinstance(self.kind, _EXTERNAL_KINDS):
            raise TypeError(f"Not an external force kind: {type(self.kind).__name__}")

    @property
    def indices(self) -> tuple[int, ...]:
        return (self.index,)


Interaction = PairwiseForce | ExternalForce
