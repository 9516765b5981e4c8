"""
Microbenchmark: time per step vs number of particles.
Run:
  python benchmarks/bench_steps.py
"""
import time
import numpy as np
from particle_dynamics import ParticlesSystem, Particle, Sphere
from particle_dynamics.core import PairwiseForce, ExternalForce, Sticky, LinearDrag, UniformGravity
from particle_dynamics.constraints import ExternalConstraint
from particle_dynamics.profiler import Profiler

def run(n: int, steps: int = 300):
    prof = Profiler()
    system = ParticlesSystem(profiler=prof)

    rng = np.random.default_rng(12345)  # determinism (no randomness elsewhere)
    for _ in range(n):
        system.add_particle(Particle(position=rng.uniform(-0.5, 0.5, 3), mass=1.0))

    container = Sphere(center=(0.0, 0.0, 0.0), radius=1.0)
    for i in range(n):
        system.add_interaction(ExternalForce(i, UniformGravity((0.0, -1.0, 0.0))))
        system.add_interaction(ExternalForce(i, LinearDrag(1.0)))
        system.add_constraint(ExternalConstraint(i, container))
        for j in range(i + 1, n):
            system.add_interaction(PairwiseForce(i, j, Sticky(0.2, 0.21, 10.0, 99.0)))

    # warmup
    for _ in range(30):
        system.advance(1e-4)

    t0 = time.perf_counter()
    for _ in range(steps):
        system.advance(1e-4)
    t1 = time.perf_counter()

    per_step = (t1 - t0) / steps
    return per_step, prof.stats.summary()

if __name__ == "__main__":
    for n in [4, 11, 25, 50]:
        per_step, summary = run(n)
        print(f"N={n:4d}  step={1e3*per_step:8.3f} ms  steps/s={1/per_step:8.1f}")
        for k in ["forces", "integrate", "constraints"]:
            if k in summary:
                print(" ", k, summary[k])
        print()
