# MIT License (see LICENSE)
"""
Force model: pairwise and external force kinds and their evaluation.

Pairwise kinds act between particles A and B. With r = x_B - x_A, d = |r| and
r̂ = r / d, the force on A is:

    Elastic(k, d0)              r̂ (d - d0) k
    Damping(c)                  r̂ ((v_B - v_A) · r̂) c
    Gravitational(G)            r̂ G m_A m_B / d²
    Sticky(d_well, d_max, Fs, Fr)
                                0        if d > d_max
                                r̂ Fs     if d_well < d ≤ d_max
                               -r̂ Fr     if d ≤ d_well

and the force on B is its negation (Newton's third law). Sticky is
discontinuous at d_well and d_max.

External kinds act on a single particle:

    LinearDrag(c)               -c v
    UniformGravity(g)           m g

All evaluation functions are pure. Every pairwise kind needs r̂, so two
coincident particles (d == 0) raise DegenerateGeometryError instead of
producing NaNs.
"""
from __future__ import annotations
from dataclasses import dataclass

import numpy as np

from ..constants import GRAVITATIONAL_CONSTANT
from ..errors import DegenerateGeometryError, InvalidParameterError
from ..types import Particle
from ..units import Acceleration, Force, acceleration
from ..util import dot, norm, zero3


def _finite(name: str, value: float) -> float:
    value = float(value)
    if not np.isfinite(value):
        raise InvalidParameterError(f"{name} must be finite, got {value}")
    return value


# =============================================================================
# Pairwise force kinds
# =============================================================================

@dataclass(frozen=True)
class Elastic:
    """
    Ideal spring.

    Attributes:
        k: Stiffness.
        d0: Rest length (≥ 0).
    """
    k: float
    d0: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "k", _finite("Elastic k", self.k))
        d0 = _finite("Elastic d0", self.d0)
        if d0 < 0.0:
            raise InvalidParameterError(f"Elastic rest length must be non-negative, got {d0}")
        object.__setattr__(self, "d0", d0)


@dataclass(frozen=True)
class Damping:
    """Linear damping along the separation axis, c is the proportionality factor."""
    c: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "c", _finite("Damping c", self.c))


@dataclass(frozen=True)
class Gravitational:
    """
    Newtonian attraction.

    Attributes:
        constant: Gravitational constant G. Defaults to GRAVITATIONAL_CONSTANT.
    """
    constant: float = GRAVITATIONAL_CONSTANT

    def __post_init__(self) -> None:
        object.__setattr__(self, "constant", _finite("Gravitational constant", self.constant))


@dataclass(frozen=True)
class Sticky:
    """
    Piecewise-constant short-range force.

    Attributes:
        d_well: Below this distance the particles repel.
        d_max: Between d_well and d_max they attract; beyond, no force.
        f_sticky: Magnitude of the attraction.
        f_repulsive: Magnitude of the repulsion.
    """
    d_well: float
    d_max: float
    f_sticky: float
    f_repulsive: float

    def __post_init__(self) -> None:
        for name in ("d_well", "d_max", "f_sticky", "f_repulsive"):
            object.__setattr__(self, name, _finite(f"Sticky {name}", getattr(self, name)))
        if not 0.0 <= self.d_well <= self.d_max:
            raise InvalidParameterError(
                f"Sticky requires 0 <= d_well <= d_max, got d_well={self.d_well}, d_max={self.d_max}"
            )


ForceKind = Elastic | Damping | Gravitational | Sticky


# =============================================================================
# External force kinds
# =============================================================================

@dataclass(frozen=True)
class LinearDrag:
    """Drag proportional to velocity, F = -coefficient * v."""
    coefficient: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "coefficient", _finite("LinearDrag coefficient", self.coefficient))


@dataclass(frozen=True)
class UniformGravity:
    """Uniform gravitational field, F = m * g."""
    acceleration: Acceleration

    def __post_init__(self) -> None:
        object.__setattr__(self, "acceleration", acceleration(self.acceleration))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, UniformGravity):
            return NotImplemented
        return np.array_equal(self.acceleration, other.acceleration)

    def __hash__(self) -> int:
        return hash(tuple(self.acceleration.tolist()))


ExternalForceKind = LinearDrag | UniformGravity


# =============================================================================
# Evaluation
# =============================================================================

def force_on_a(kind: ForceKind, a: Particle, b: Particle) -> Force:
    """
    Force acting on particle `a` due to its interaction with `b`.

    Raises:
        DegenerateGeometryError: If a and b are at the same position.
        TypeError: If `kind` is not a pairwise force kind.
    """
    r = b.position - a.position
    d = norm(r)
    if d == 0.0:
        raise DegenerateGeometryError(
            f"{type(kind).__name__} force is undefined for coincident particles at {a.position.tolist()}"
        )
    r_hat = r / d

    if isinstance(kind, Elastic):
        return r_hat * ((d - kind.d0) * kind.k)
    if isinstance(kind, Damping):
        return r_hat * (dot(b.velocity - a.velocity, r_hat) * kind.c)
    if isinstance(kind, Gravitational):
        return r_hat * (kind.constant * a.mass * b.mass / (d * d))
    if isinstance(kind, Sticky):
        if d > kind.d_max:
            return zero3()
        if d > kind.d_well:
            return r_hat * kind.f_sticky
        return r_hat * -kind.f_repulsive

    raise TypeError(f"Unknown pairwise force kind: {type(kind)}")


def force_on_b(kind: ForceKind, a: Particle, b: Particle) -> Force:
    """Force acting on particle `b`, the negation of force_on_a()."""
    return -force_on_a(kind, a, b)


def external_force(kind: ExternalForceKind, particle: Particle) -> Force:
    """
    Force acting on a particle due to an external agent.

    Raises:
        TypeError: If `kind` is not an external force kind.
    """
    if isinstance(kind, LinearDrag):
        return particle.velocity * -kind.coefficient
    if isinstance(kind, UniformGravity):
        return kind.acceleration * particle.mass

    raise TypeError(f"Unknown external force kind: {type(kind)}")
