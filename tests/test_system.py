import numpy as np
import pytest
from particle_dynamics import (
    ParticlesSystem, Particle, Sphere, Plane,
    IndexOutOfRangeError, InvalidParameterError, DegenerateGeometryError,
)
from particle_dynamics.core import (
    PairwiseForce, ExternalForce, Elastic, Damping, Gravitational, Sticky,
    LinearDrag, UniformGravity, accumulate_accelerations, kinetic_energy, linear_momentum,
)
from particle_dynamics.constraints import ExternalConstraint
from particle_dynamics.profiler import Profiler


def _state(system):
    return (
        np.array([p.position for p in system.particles]),
        np.array([p.velocity for p in system.particles]),
    )


def _cluster(n=5, seed=7):
    """Particles with mixed masses, positions and velocities; no forces yet."""
    rng = np.random.default_rng(seed)
    system = ParticlesSystem()
    for _ in range(n):
        system.add_particle(Particle(
            position=rng.uniform(-1.0, 1.0, 3),
            velocity=rng.uniform(-0.5, 0.5, 3),
            mass=float(rng.uniform(0.5, 2.0)),
        ))
    return system


def test_add_particle_returns_sequential_indices():
    system = ParticlesSystem()
    assert system.add_particle(Particle(position=(0, 0, 0))) == 0
    assert system.add_particle(Particle(position=(1, 0, 0))) == 1
    assert len(system.particles) == 2


def test_registration_checks_indices_immediately():
    system = ParticlesSystem()
    system.add_particle(Particle(position=(0, 0, 0)))
    system.add_particle(Particle(position=(1, 0, 0)))

    with pytest.raises(IndexOutOfRangeError):
        system.add_interaction(PairwiseForce(0, 2, Elastic(1.0, 0.5)))
    with pytest.raises(IndexError):
        system.add_interaction(ExternalForce(-1, LinearDrag(1.0)))
    with pytest.raises(IndexOutOfRangeError):
        system.add_constraint(ExternalConstraint(5, Sphere(center=(0, 0, 0), radius=1.0)))

    assert system.interactions == ()
    assert system.constraints == ()


def test_invalid_parameters_rejected_at_construction():
    with pytest.raises(InvalidParameterError):
        Particle(position=(0, 0, 0), mass=0.0)
    with pytest.raises(InvalidParameterError):
        Particle(position=(0, 0, 0), mass=-1.0)
    with pytest.raises(ValueError):
        Particle(position=(0, 0, 0, 0))


def test_particle_count_fixed_after_first_step():
    system = ParticlesSystem()
    system.add_particle(Particle(position=(0, 0, 0)))
    system.advance(0.1)
    assert system.started
    with pytest.raises(InvalidParameterError):
        system.add_particle(Particle(position=(1, 0, 0)))


def test_negative_dt_rejected():
    system = ParticlesSystem()
    system.add_particle(Particle(position=(0, 0, 0)))
    with pytest.raises(InvalidParameterError):
        system.advance(-1e-3)
    assert system.time == 0.0


def test_elastic_equilibrium_gives_zero_acceleration():
    system = ParticlesSystem()
    a = system.add_particle(Particle(position=(0.0, 0.0, 0.0)))
    b = system.add_particle(Particle(position=(0.5, 0.0, 0.0)))
    system.add_interaction(PairwiseForce(a, b, Elastic(k=1.0, d0=0.5)))

    acc = accumulate_accelerations(list(system.particles), system.interactions)
    assert np.array_equal(acc, np.zeros((2, 3)))

    system.advance(1e-2)
    assert np.array_equal(system.particles[a].position, [0.0, 0.0, 0.0])
    assert np.array_equal(system.particles[b].position, [0.5, 0.0, 0.0])


def test_free_particle_kinematics():
    """
    Constant acceleration is integrated exactly:
      x(t) = x0 + v0 t + 1/2 g t^2
      v(t) = v0 + g t
    """
    system = ParticlesSystem()
    p = Particle(position=(0.0, 10.0, 0.0), velocity=(1.0, 0.0, 0.0), mass=2.0)
    system.add_particle(p)
    system.add_interaction(ExternalForce(0, UniformGravity(acceleration=(0.0, -9.81, 0.0))))

    dt, steps = 1e-2, 100
    for _ in range(steps):
        system.advance(dt)

    T = dt * steps
    assert system.time == pytest.approx(T)
    assert np.allclose(p.position, [T, 10.0 - 0.5 * 9.81 * T * T, 0.0])
    assert np.allclose(p.velocity, [1.0, -9.81 * T, 0.0])


def test_momentum_conserved_with_pairwise_forces_only():
    system = _cluster()
    n = len(system.particles)
    for i in range(n):
        for j in range(i + 1, n):
            system.add_interaction(PairwiseForce(i, j, Elastic(k=2.0, d0=0.3)))
            system.add_interaction(PairwiseForce(i, j, Damping(c=0.1)))
            system.add_interaction(PairwiseForce(i, j, Gravitational(constant=0.01)))
            system.add_interaction(PairwiseForce(i, j, Sticky(0.05, 0.1, 1.0, 5.0)))

    p0 = linear_momentum(system.particles)
    for _ in range(500):
        system.advance(1e-3)
        assert np.allclose(linear_momentum(system.particles), p0, atol=1e-10)


def test_damping_never_increases_kinetic_energy():
    system = _cluster(n=6, seed=3)
    n = len(system.particles)
    for i in range(n):
        for j in range(i + 1, n):
            system.add_interaction(PairwiseForce(i, j, Damping(c=0.8)))

    ke = kinetic_energy(system.particles)
    for _ in range(300):
        system.advance(1e-3)
        ke_next = kinetic_energy(system.particles)
        assert ke_next <= ke + 1e-12
        ke = ke_next


def _mixed_system(close_range=True):
    """
    Four particles in a sphere of radius 2 with every force kind.

    close_range=False replaces the sticky and gravitational pairs with
    springs, which keeps speeds low enough for a fixed overshoot margin at
    the wall.
    """
    system = _cluster(n=4, seed=11)
    system.add_interaction(PairwiseForce(0, 1, Elastic(1.0, 0.5)))
    if close_range:
        system.add_interaction(PairwiseForce(1, 2, Sticky(0.2, 0.5, 1.0, 3.0)))
        system.add_interaction(PairwiseForce(2, 3, Gravitational()))
    else:
        system.add_interaction(PairwiseForce(1, 2, Elastic(1.0, 0.5)))
        system.add_interaction(PairwiseForce(2, 3, Elastic(1.0, 0.5)))
    system.add_interaction(PairwiseForce(3, 0, Damping(0.5)))
    for i in range(4):
        system.add_interaction(ExternalForce(i, LinearDrag(0.2)))
        system.add_interaction(ExternalForce(i, UniformGravity((0.0, -1.0, 0.0))))
        system.add_constraint(ExternalConstraint(i, Sphere(center=(0, 0, 0), radius=2.0)))
    system.add_constraint(ExternalConstraint(0, Plane(position=(0, -1, 0), normal=(0, 1, 0))))
    return system


def test_runs_are_bit_identical():
    s1, s2 = _mixed_system(), _mixed_system()
    for _ in range(1000):
        s1.advance(1e-3)
        s2.advance(1e-3)

    x1, v1 = _state(s1)
    x2, v2 = _state(s2)
    assert np.array_equal(x1, x2)
    assert np.array_equal(v1, v2)
    assert s1.time == s2.time


def test_constraints_keep_particles_near_sphere():
    """
    With moderate speeds a particle can overshoot the wall by at most about
    one step of travel before the reflected velocity brings it back.
    """
    system = _mixed_system(close_range=False)
    dt = 1e-3
    for _ in range(2000):
        speed = max(np.linalg.norm(p.velocity) for p in system.particles)
        system.advance(dt)
        for p in system.particles:
            assert np.linalg.norm(p.position) <= 2.0 + 1e-2
        assert speed * dt < 1e-2


def test_degenerate_step_leaves_state_untouched():
    system = ParticlesSystem()
    system.add_particle(Particle(position=(0.0, 0.0, 0.0), velocity=(1.0, 0.0, 0.0)))
    system.add_particle(Particle(position=(1.0, 0.0, 0.0)))
    system.add_particle(Particle(position=(1.0, 0.0, 0.0)))
    system.add_interaction(ExternalForce(0, UniformGravity((0.0, -1.0, 0.0))))
    system.add_interaction(PairwiseForce(0, 1, Elastic(1.0, 0.5)))
    system.add_interaction(PairwiseForce(1, 2, Elastic(1.0, 0.5)))
    system.add_constraint(ExternalConstraint(0, Plane(position=(0, 0, 0), normal=(0, 1, 0))))

    x0, v0 = _state(system)
    with pytest.raises(DegenerateGeometryError) as info:
        system.advance(1e-2)

    assert info.value.interaction_index == 2
    assert (info.value.index_a, info.value.index_b) == (1, 2)
    x1, v1 = _state(system)
    assert np.array_equal(x0, x1)
    assert np.array_equal(v0, v1)
    assert system.time == 0.0
    assert not system.started


def test_failed_first_step_still_accepts_particles():
    system = ParticlesSystem()
    system.add_particle(Particle(position=(1.0, 1.0, 0.0)))
    system.add_particle(Particle(position=(1.0, 1.0, 0.0)))
    system.add_interaction(PairwiseForce(0, 1, Gravitational()))

    with pytest.raises(DegenerateGeometryError):
        system.advance(1e-3)

    assert system.add_particle(Particle(position=(0.0, 0.0, 0.0))) == 2
    assert len(system.particles) == 3
    assert not system.started


@pytest.mark.parametrize("kwargs", [
    {"time": -5.0},
    {"time": "abc"},
    {"time": "1.5"},
    {"time": float("inf")},
    {"time": None},
    {"snapshots_saved": -1},
    {"snapshots_saved": "3"},
    {"snapshots_saved": 1.5},
    {"snapshots_saved": True},
])
def test_invalid_clock_rejected(kwargs):
    with pytest.raises(InvalidParameterError):
        ParticlesSystem(**kwargs)


def test_clock_is_read_only():
    system = ParticlesSystem(time=2.5, snapshots_saved=np.int64(4))
    assert system.time == 2.5
    assert system.snapshots_saved == 4

    with pytest.raises(AttributeError):
        system.time = 0.0
    with pytest.raises(AttributeError):
        system.snapshots_saved = 0

    system.advance(0.5)
    assert system.time == 3.0
    assert system.snapshot().sequence_index == 4
    assert system.snapshots_saved == 5


def test_run_collects_periodic_snapshots():
    system = _mixed_system()
    seen = []
    snaps = system.run(dt=1e-3, steps=10, snapshot_every=4, on_snapshot=seen.append)

    # Initial state plus after steps 4 and 8.
    assert [s.sequence_index for s in snaps] == [0, 1, 2]
    assert seen == snaps
    assert snaps[0].time == 0.0
    assert snaps[2].time == pytest.approx(8e-3)
    assert system.time == pytest.approx(10e-3)
    assert system.snapshots_saved == 3


def test_profiler_records_phases():
    prof = Profiler()
    system = _mixed_system()
    system.profiler = prof
    for _ in range(3):
        system.advance(1e-3)

    summary = prof.stats.summary()
    for name in ("forces", "integrate", "constraints"):
        assert summary[name]["n"] == 3
