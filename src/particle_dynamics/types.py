# MIT License (see LICENSE)
"""
Core type definitions for the particle simulation.

A Particle is a point mass with position and velocity. Equations of motion
are plain Newtonian mechanics:
  - dx/dt = v
  - dv/dt = F/m
"""
from __future__ import annotations
from dataclasses import dataclass

import numpy as np

from .errors import InvalidParameterError
from .units import Mass, Position, Velocity, position, velocity
from .util import dot


@dataclass
class Particle:
    """
    A point mass with kinematic state.

    Attributes:
        position: Position [x, y, z].
        velocity: Velocity [vx, vy, vz].
        mass: Mass, strictly positive.

    Note:
        Position and velocity are converted to float64 numpy arrays on init,
        so tuples and lists are accepted.
    """
    position: Position
    velocity: Velocity = (0.0, 0.0, 0.0)
    mass: Mass = 1.0

    def __post_init__(self) -> None:
        self.position = position(self.position)
        self.velocity = velocity(self.velocity)
        mass = float(self.mass)
        if not np.isfinite(mass) or mass <= 0.0:
            raise InvalidParameterError(f"Particle mass must be positive, got {self.mass}")
        self.mass = mass

    @property
    def momentum(self) -> np.ndarray:
        """Linear momentum m·v."""
        return self.velocity * self.mass

    @property
    def kinetic_energy(self) -> float:
        """Kinetic energy ½ m v²."""
        return 0.5 * self.mass * dot(self.velocity, self.velocity)

    def copy(self) -> Particle:
        """Independent copy (arrays are copied)."""
        return Particle(position=self.position.copy(), velocity=self.velocity.copy(), mass=self.mass)
