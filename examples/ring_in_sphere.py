# examples/ring_in_sphere.py
import numpy as np
from particle_dynamics import ParticlesSystem, Particle, Sphere
from particle_dynamics.core import PairwiseForce, Elastic, Damping
from particle_dynamics.constraints import ExternalConstraint

system = ParticlesSystem()
for pos in [(1.0, 0.0, 0.0), (0.0, 1.0, 0.0), (-1.0, 0.0, 0.0), (0.0, -1.0, 0.0)]:
    system.add_particle(Particle(position=pos, mass=1.0))

container = Sphere(center=(0.0, 0.0, 0.0), radius=1.0)
for i in range(4):
    j = (i + 1) % 4
    system.add_interaction(PairwiseForce(i, j, Elastic(k=1.0, d0=0.5)))
    system.add_interaction(PairwiseForce(i, j, Damping(c=0.5)))
    system.add_constraint(ExternalConstraint(i, container))

for snap in system.run(dt=1e-5, steps=99_999, snapshot_every=9_999):
    radii = [np.linalg.norm(p.position) for p in snap.particles]
    print(f"#{snap.sequence_index:2d} t={snap.time:.4f} max|x|={max(radii):.6f}")
