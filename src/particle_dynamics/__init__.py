# MIT License (see LICENSE)
"""
particle_dynamics - Classical point-mass particle dynamics.

A variable number of point masses evolve under pairwise and external forces,
confined by reflective geometric boundaries, advanced in fixed time steps.

Main entry points:
    - ParticlesSystem: Particles, interactions, constraints and the clock.
    - Particle: A point mass with position and velocity.
    - Plane, Sphere: Boundary geometry.
    - Snapshot: Sequence-numbered export of the system state.

Submodules:
    - core: Force kinds, interactions, integrator, invariants.
    - constraints: Reflective boundary constraints.
    - io: JSON system documents and SQLite snapshot storage.

Example:
    from particle_dynamics import ParticlesSystem, Particle, Sphere
    from particle_dynamics.core import PairwiseForce, Elastic
    from particle_dynamics.constraints import ExternalConstraint

    system = ParticlesSystem()
    a = system.add_particle(Particle(position=(1, 0, 0)))
    b = system.add_particle(Particle(position=(-1, 0, 0)))
    system.add_interaction(PairwiseForce(a, b, Elastic(k=1.0, d0=0.5)))
    system.add_constraint(ExternalConstraint(a, Sphere(center=(0, 0, 0), radius=1.0)))
    system.advance(1e-3)
"""
from .system import ParticlesSystem
from .types import Particle
from .geometry import Plane, Sphere
from .snapshot import Snapshot, ParticleState
from .errors import (
    ParticleSystemError,
    IndexOutOfRangeError,
    InvalidParameterError,
    DegenerateGeometryError,
)

__all__ = [
    # Core simulation
    "ParticlesSystem",
    "Particle",
    # Geometry
    "Plane",
    "Sphere",
    # Snapshots
    "Snapshot",
    "ParticleState",
    # Errors
    "ParticleSystemError",
    "IndexOutOfRangeError",
    "InvalidParameterError",
    "DegenerateGeometryError",
]
