# MIT License (see LICENSE)
"""
Reflective boundary constraints.

A constraint is applied after the kinematic update of a step and corrects a
single particle's velocity against a fixed geometric boundary:

- Plane: once the particle is on the forbidden side (signed distance < 0),
  the velocity is mirrored about the plane, v' = v - 2 (v·n̂) n̂.
- Sphere: once the particle is no longer strictly inside, the radial
  component of the velocity is reversed, v' = v - 2 proj_r(v) with
  r = x - center.

Only the velocity changes. Positions are never pulled back onto the boundary,
so with a large dt a particle can stay outside for a step before the
reflected velocity brings it back. The reflection is applied on every step the
particle is outside, which may flip it more than once.
"""
from __future__ import annotations
from dataclasses import dataclass

from ..geometry import Geometry, Plane, Sphere
from ..types import Particle
from ..units import Position, Velocity
from ..util import dot, project_onto, unit


@dataclass(frozen=True)
class ExternalConstraint:
    """
    Confines particle `index` by a fixed geometric boundary.

    Attributes:
        index: Constrained particle.
        geometry: Plane (particle kept on the normal side) or Sphere
                  (particle kept inside).
    """
    index: int
    geometry: Geometry

    def __post_init__(self) -> None:
        if not isinstance(self.geometry, (Plane, Sphere)):
            raise TypeError(f"Unknown constraint geometry: {type(self.geometry).__name__}")

    @property
    def indices(self) -> tuple[int, ...]:
        return (self.index,)


Constraint = ExternalConstraint


def resolve(geometry: Geometry, particle: Particle) -> tuple[Position, Velocity]:
    """
    Corrected (position, velocity) for a particle against a boundary.

    The particle is not modified; unchanged quantities are returned as copies.

    Raises:
        TypeError: If `geometry` is not a supported boundary.
    """
    pos = particle.position.copy()
    vel = particle.velocity

    if isinstance(geometry, Plane):
        if geometry.signed_distance(pos) < 0.0:
            n_hat = unit(geometry.normal)
            return pos, vel - n_hat * (2.0 * dot(vel, n_hat))
        return pos, vel.copy()

    if isinstance(geometry, Sphere):
        if geometry.is_inside(pos):
            return pos, vel.copy()
        radial = pos - geometry.center
        return pos, vel - project_onto(vel, radial) * 2.0

    raise TypeError(f"Unknown constraint geometry: {type(geometry)}")
