# MIT License (see LICENSE)
"""
Read-only, sequence-numbered exports of particle state.

A Snapshot is what the engine hands to persistence collaborators. Its JSON
form has a fixed field order:

{
  "sequence_index": int,
  "time": float,
  "particles": [
    {
      "index": int,
      "position": {"x": float, "y": float, "z": float},
      "velocity": {"x": float, "y": float, "z": float},
      "mass": float
    }
  ]
}
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Iterable

import numpy as np

from .types import Particle
from .units import Position, Velocity


def _frozen_copy(v: np.ndarray) -> np.ndarray:
    out = np.array(v, dtype=np.float64)
    out.flags.writeable = False
    return out


def _xyz(v: np.ndarray) -> dict[str, float]:
    return {"x": float(v[0]), "y": float(v[1]), "z": float(v[2])}


@dataclass(frozen=True, eq=False)
class ParticleState:
    """Kinematic state of one particle at snapshot time (arrays are read-only copies)."""
    index: int
    position: Position
    velocity: Velocity
    mass: float

    @classmethod
    def of(cls, index: int, particle: Particle) -> ParticleState:
        return cls(
            index=index,
            position=Position(_frozen_copy(particle.position)),
            velocity=Velocity(_frozen_copy(particle.velocity)),
            mass=particle.mass,
        )

    def to_json(self) -> dict[str, Any]:
        return {
            "index": self.index,
            "position": _xyz(self.position),
            "velocity": _xyz(self.velocity),
            "mass": self.mass,
        }


@dataclass(frozen=True, eq=False)
class Snapshot:
    """
    Full particle state at one point in simulated time.

    Attributes:
        sequence_index: Position of this snapshot in the export sequence,
                        starting at 0 and unique per system.
        time: Simulated time.
        particles: Particle states ordered by index.
    """
    sequence_index: int
    time: float
    particles: tuple[ParticleState, ...]

    @classmethod
    def capture(cls, sequence_index: int, time: float, particles: Iterable[Particle]) -> Snapshot:
        return cls(
            sequence_index=sequence_index,
            time=time,
            particles=tuple(ParticleState.of(i, p) for i, p in enumerate(particles)),
        )

    def to_json(self) -> dict[str, Any]:
        return {
            "sequence_index": self.sequence_index,
            "time": self.time,
            "particles": [p.to_json() for p in self.particles],
        }
