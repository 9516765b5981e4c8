# MIT License (see LICENSE)
"""
Time integration for the particle system.

One step is split in two pure functions so the caller can compute the whole
new state before committing any of it:

- accumulate_accelerations: evaluates every interaction, in registration
  order, and sums F/m per particle.
- half_step_update: explicit update with a half-step velocity correction in
  the position,
      dv = a dt
      dx = v dt + dv dt / 2
      x' = x + dx,   v' = v + dv
  Forces are not re-evaluated after the velocity update, so this is not
  velocity Verlet even though the position update has the same form.

Summation follows registration order so results are bit-reproducible.
"""
from __future__ import annotations
from typing import Sequence

import numpy as np

from ..errors import DegenerateGeometryError
from ..types import Particle
from .forces import force_on_a, external_force
from .interactions import Interaction, PairwiseForce, ExternalForce


def accumulate_accelerations(
    particles: Sequence[Particle],
    interactions: Sequence[Interaction],
) -> np.ndarray:
    """
    Acceleration of every particle due to all interactions.

    Args:
        particles: Particles addressed by index.
        interactions: Interactions in registration order.

    Returns:
        Array of shape (N, 3).

    Raises:
        DegenerateGeometryError: If a pairwise interaction joins two coincident
            particles. The error records the interaction's position in
            `interactions` and both particle indices.
    """
    acc = np.zeros((len(particles), 3), dtype=np.float64)
    for n, interaction in enumerate(interactions):
        if isinstance(interaction, PairwiseForce):
            ia, ib = interaction.index_a, interaction.index_b
            a, b = particles[ia], particles[ib]
            try:
                f = force_on_a(interaction.kind, a, b)
            except DegenerateGeometryError as exc:
                raise DegenerateGeometryError(
                    f"Interaction #{n} between particles {ia} and {ib}: {exc}",
                    interaction_index=n,
                    index_a=ia,
                    index_b=ib,
                ) from exc
            acc[ia] += f / a.mass
            acc[ib] += -f / b.mass
        elif isinstance(interaction, ExternalForce):
            p = particles[interaction.index]
            acc[interaction.index] += external_force(interaction.kind, p) / p.mass
        else:
            raise TypeError(f"Unknown interaction type: {type(interaction)}")
    return acc


def half_step_update(
    positions: np.ndarray,
    velocities: np.ndarray,
    accelerations: np.ndarray,
    dt: float,
) -> tuple[np.ndarray, np.ndarray]:
    """
    Advance positions and velocities by dt under constant acceleration.

    All arguments are (N, 3) arrays of the state at the start of the step;
    none of them is modified.

    Returns:
        Tuple (new_positions, new_velocities).
    """
    dv = accelerations * dt
    dx = velocities * dt + dv * dt / 2.0
    return positions + dx, velocities + dv
