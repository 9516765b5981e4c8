# MIT License (see LICENSE)
"""
Core physics components.

This subpackage provides:
    - Force kinds and their evaluation (Elastic, Damping, Gravitational,
      Sticky, LinearDrag, UniformGravity).
    - Interaction variants (PairwiseForce, ExternalForce).
    - The explicit integrator (accumulate_accelerations, half_step_update).
    - Invariants (kinetic_energy, linear_momentum).

Typical usage:
    from particle_dynamics.core import Elastic, PairwiseForce

    system.add_interaction(PairwiseForce(0, 1, Elastic(k=1.0, d0=0.5)))
"""
from .forces import (
    Elastic,
    Damping,
    Gravitational,
    Sticky,
    LinearDrag,
    UniformGravity,
    ForceKind,
    ExternalForceKind,
    force_on_a,
    force_on_b,
    external_force,
)
from .interactions import PairwiseForce, ExternalForce, Interaction
from .integrators import accumulate_accelerations, half_step_update
from .invariants import kinetic_energy, linear_momentum

__all__ = [
    # Force kinds
    "Elastic",
    "Damping",
    "Gravitational",
    "Sticky",
    "LinearDrag",
    "UniformGravity",
    "ForceKind",
    "ExternalForceKind",
    # Force evaluation
    "force_on_a",
    "force_on_b",
    "external_force",
    # Interactions
    "PairwiseForce",
    "ExternalForce",
    "Interaction",
    # Integrator
    "accumulate_accelerations",
    "half_step_update",
    # Invariants
    "kinetic_energy",
    "linear_momentum",
]
