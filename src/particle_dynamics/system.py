# MIT License (see LICENSE)
"""
The particle system and its simulation step.

ParticlesSystem owns:
- The particle store (index-addressable, append-only).
- The interactions (pairwise and external forces), in registration order.
- The boundary constraints, in registration order.
- The simulation clock and the snapshot sequence counter.

One call to advance(dt):
    1. Accumulate F/m per particle over all interactions.
    2. Integrate positions and velocities (core.integrators.half_step_update).
    3. Resolve every constraint against the updated state.
    4. Commit the new state and advance the clock.

All of steps 1-3 work on scratch state, so an error in any of them leaves the
system exactly as it was before the call.
"""
from __future__ import annotations
import copy
import logging
from contextlib import nullcontext
from numbers import Integral
from typing import Callable

import numpy as np

from .constraints.boundary import ExternalConstraint, Constraint, resolve
from .core.integrators import accumulate_accelerations, half_step_update
from .core.interactions import ExternalForce, Interaction, PairwiseForce
from .errors import InvalidParameterError
from .profiler import Profiler
from .snapshot import Snapshot
from .store import ParticleStore
from .types import Particle

logger = logging.getLogger(__name__)


class ParticlesSystem:
    """
    A collection of interacting particles.

    Args:
        profiler: Optional Profiler timing the "forces", "integrate" and
                  "constraints" phases of each step.
        time: Initial simulated time (≥ 0). Only set when resuming.
        snapshots_saved: Snapshots already exported (≥ 0). Only set when
                         resuming.
    """

    def __init__(
        self,
        profiler: Profiler | None = None,
        time: float = 0.0,
        snapshots_saved: int = 0,
    ) -> None:
        if isinstance(time, (str, bytes)):
            raise InvalidParameterError(f"time must be a number, got {time!r}")
        try:
            time = float(time)
        except (TypeError, ValueError) as exc:
            raise InvalidParameterError(f"time must be a number, got {time!r}") from exc
        if not np.isfinite(time) or time < 0.0:
            raise InvalidParameterError(f"time must be finite and non-negative, got {time}")
        # bool is an Integral but not a count
        if isinstance(snapshots_saved, bool) or not isinstance(snapshots_saved, Integral) or snapshots_saved < 0:
            raise InvalidParameterError(f"snapshots_saved must be a non-negative integer, got {snapshots_saved!r}")

        self.profiler = profiler
        self.particles = ParticleStore()
        self._interactions: list[Interaction] = []
        self._constraints: list[Constraint] = []
        self._time = time
        self._snapshots_saved = int(snapshots_saved)

    def __repr__(self) -> str:
        return (
            f"ParticlesSystem(particles={len(self.particles)}, interactions={len(self._interactions)}, "
            f"constraints={len(self._constraints)}, time={self._time!r}, snapshots_saved={self._snapshots_saved})"
        )

    @property
    def time(self) -> float:
        """Simulated time. Starts at 0 and never decreases."""
        return self._time

    @property
    def snapshots_saved(self) -> int:
        """Number of snapshots exported so far; also the sequence index of the next one."""
        return self._snapshots_saved

    @property
    def started(self) -> bool:
        """True once a step has been committed; the particle count is then fixed."""
        return self.particles.frozen

    @property
    def interactions(self) -> tuple[Interaction, ...]:
        return tuple(self._interactions)

    @property
    def constraints(self) -> tuple[Constraint, ...]:
        return tuple(self._constraints)

    def add_particle(self, particle: Particle) -> int:
        """
        Add a particle to the system.

        Returns:
            The particle's index, used to refer to it in interactions and
            constraints.

        Raises:
            InvalidParameterError: If the simulation has already been advanced.
        """
        index = self.particles.add(particle)
        logger.debug("Added particle %d (mass=%g)", index, particle.mass)
        return index

    def add_interaction(self, interaction: Interaction) -> int:
        """
        Register an interaction.

        Returns:
            Registration position of the interaction.

        Raises:
            IndexOutOfRangeError: If it refers to a particle that does not exist.
        """
        if not isinstance(interaction, (PairwiseForce, ExternalForce)):
            raise TypeError(f"Unknown interaction type: {type(interaction).__name__}")
        for index in interaction.indices:
            self.particles.check_index(index)
        self._interactions.append(interaction)
        logger.debug("Registered %s on particles %s", type(interaction.kind).__name__, interaction.indices)
        return len(self._interactions) - 1

    def add_constraint(self, constraint: Constraint) -> int:
        """
        Register a boundary constraint.

        Returns:
            Registration position of the constraint.

        Raises:
            IndexOutOfRangeError: If it refers to a particle that does not exist.
        """
        if not isinstance(constraint, ExternalConstraint):
            raise TypeError(f"Unknown constraint type: {type(constraint).__name__}")
        self.particles.check_index(constraint.index)
        self._constraints.append(constraint)
        logger.debug("Registered %s constraint on particle %d", type(constraint.geometry).__name__, constraint.index)
        return len(self._constraints) - 1

    def _section(self, name: str):
        if self.profiler is None:
            return nullcontext()
        return self.profiler.section(name)

    def advance(self, dt: float) -> None:
        """
        Advance the simulation by one step of length dt.

        Raises:
            InvalidParameterError: If dt is negative or not finite.
            DegenerateGeometryError: If a pairwise force joins two coincident
                particles. The system is left unchanged.
        """
        dt = float(dt)
        if not np.isfinite(dt) or dt < 0.0:
            raise InvalidParameterError(f"Time step must be finite and non-negative, got {dt}")

        particles = list(self.particles)
        n = len(particles)

        with self._section("forces"):
            acc = accumulate_accelerations(particles, self._interactions)

        with self._section("integrate"):
            x0 = np.zeros((n, 3), dtype=np.float64)
            v0 = np.zeros((n, 3), dtype=np.float64)
            for i, p in enumerate(particles):
                x0[i] = p.position
                v0[i] = p.velocity
            x1, v1 = half_step_update(x0, v0, acc, dt)

            # Scratch particles; the stored ones are only touched on commit.
            staged = []
            for i, p in enumerate(particles):
                s = copy.copy(p)
                s.position = x1[i]
                s.velocity = v1[i]
                staged.append(s)

        with self._section("constraints"):
            for c in self._constraints:
                s = staged[c.index]
                s.position, s.velocity = resolve(c.geometry, s)

        for p, s in zip(particles, staged):
            p.position = s.position
            p.velocity = s.velocity
        self._time += dt
        self.particles.freeze()

    def snapshot(self) -> Snapshot:
        """
        Export the current state.

        Does not touch the particles or the clock; only the sequence counter
        moves on, so every snapshot carries a unique, increasing index.
        """
        snap = Snapshot.capture(self._snapshots_saved, self._time, self.particles)
        self._snapshots_saved += 1
        logger.debug("Snapshot %d at t=%g", snap.sequence_index, snap.time)
        return snap

    def run(
        self,
        dt: float,
        steps: int,
        snapshot_every: int = 0,
        on_snapshot: Callable[[Snapshot], None] | None = None,
    ) -> list[Snapshot]:
        """
        Advance `steps` times with a fixed dt.

        When snapshot_every > 0 a snapshot is taken before the first step and
        after every `snapshot_every`-th step, and passed to `on_snapshot` if
        given.

        Returns:
            The snapshots taken, in order.
        """
        if steps < 0:
            raise InvalidParameterError(f"steps must be non-negative, got {steps}")
        if snapshot_every < 0:
            raise InvalidParameterError(f"snapshot_every must be non-negative, got {snapshot_every}")

        taken: list[Snapshot] = []

        def export() -> None:
            snap = self.snapshot()
            taken.append(snap)
            if on_snapshot is not None:
                on_snapshot(snap)

        logger.info(
            "Running %d step(s) of dt=%g on %d particle(s), %d interaction(s), %d constraint(s)",
            steps, dt, len(self.particles), len(self._interactions), len(self._constraints),
        )
        if snapshot_every:
            export()
        for n_step in range(1, steps + 1):
            self.advance(dt)
            if snapshot_every and n_step % snapshot_every == 0:
                export()
        logger.info("Reached t=%g after %d step(s), %d snapshot(s) taken", self.time, steps, len(taken))
        return taken
