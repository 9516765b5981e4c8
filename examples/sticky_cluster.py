"""
Sticky particles falling inside a spherical container.

Run:
  python examples/sticky_cluster.py [output_dir]

Writes snapshots to <output_dir>/sticky.db and the final system to
<output_dir>/sticky.json, which load_system() can resume from.
"""
import logging
import os
import sys

import numpy as np
from particle_dynamics import ParticlesSystem, Particle, Sphere
from particle_dynamics.core import PairwiseForce, ExternalForce, Sticky, LinearDrag, UniformGravity
from particle_dynamics.constraints import ExternalConstraint
from particle_dynamics.io import SnapshotDatabase, save_system
from particle_dynamics.logging_config import setup_logging

N_PARTICLES = 11

setup_logging(logging.INFO)
out_dir = sys.argv[1] if len(sys.argv) > 1 else "."

rng = np.random.default_rng(1)  # determinism
system = ParticlesSystem()
for _ in range(N_PARTICLES):
    x, y = rng.uniform(-0.5, 0.5, 2)
    system.add_particle(Particle(position=(x, y, 0.0), mass=1.0))

container = Sphere(center=(0.0, 0.0, 0.0), radius=1.0)
for n in range(N_PARTICLES):
    system.add_interaction(ExternalForce(n, UniformGravity((0.0, -1.0, 0.0))))
    system.add_interaction(ExternalForce(n, LinearDrag(1.0)))
    system.add_constraint(ExternalConstraint(n, container))
    for m in range(n + 1, N_PARTICLES):
        system.add_interaction(PairwiseForce(n, m, Sticky(0.2, 0.21, 10.0, 99.0)))

with SnapshotDatabase(os.path.join(out_dir, "sticky.db")) as db:
    system.run(dt=1e-5, steps=200_000, snapshot_every=10_000, on_snapshot=db.write)

save_system(system, os.path.join(out_dir, "sticky.json"))
