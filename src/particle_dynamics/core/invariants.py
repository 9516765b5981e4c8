# MIT License (see LICENSE)
"""
Utilities for calculating physical invariants and conserved quantities.

Used for verifying simulation correctness. With only pairwise internal forces
and no constraints, total linear momentum is conserved; with only damping
between particles, kinetic energy never grows.
"""
from __future__ import annotations
from typing import Iterable

import numpy as np

from ..types import Particle


def kinetic_energy(particles: Iterable[Particle]) -> float:
    """
    Total kinetic energy of a set of particles.

    T = Σ 0.5 m v²
    """
    return float(sum(p.kinetic_energy for p in particles))


def linear_momentum(particles: Iterable[Particle]) -> np.ndarray:
    """
    Total linear momentum of a set of particles.

    P = Σ m v

    Returns:
        Momentum vector [Px, Py, Pz].
    """
    total = np.zeros(3, dtype=np.float64)
    for p in particles:
        total += p.mass * p.velocity
    return total
