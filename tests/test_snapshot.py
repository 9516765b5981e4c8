import numpy as np
import pytest
from particle_dynamics import ParticlesSystem, Particle
from particle_dynamics.core import PairwiseForce, Elastic


def _pair():
    system = ParticlesSystem()
    system.add_particle(Particle(position=(0.0, 0.0, 0.0), velocity=(0.1, 0.0, 0.0), mass=1.0))
    system.add_particle(Particle(position=(1.0, 0.0, 0.0), velocity=(0.0, 0.2, 0.0), mass=2.0))
    system.add_interaction(PairwiseForce(0, 1, Elastic(1.0, 0.5)))
    return system


def test_snapshot_twice_without_advance():
    system = _pair()
    s0 = system.snapshot()
    s1 = system.snapshot()

    assert (s0.sequence_index, s1.sequence_index) == (0, 1)
    assert s0.time == s1.time
    j0, j1 = s0.to_json(), s1.to_json()
    assert j0["particles"] == j1["particles"]
    assert system.snapshots_saved == 2


def test_snapshot_does_not_change_the_simulation():
    a, b = _pair(), _pair()
    for _ in range(10):
        a.snapshot()
        a.advance(1e-2)
        b.advance(1e-2)
    for pa, pb in zip(a.particles, b.particles):
        assert np.array_equal(pa.position, pb.position)
        assert np.array_equal(pa.velocity, pb.velocity)


def test_snapshot_is_detached_from_live_state():
    system = _pair()
    snap = system.snapshot()
    system.advance(0.5)

    assert np.array_equal(snap.particles[0].position, [0.0, 0.0, 0.0])
    assert snap.time == 0.0
    with pytest.raises(ValueError):
        snap.particles[0].position[0] = 1.0


def test_snapshot_json_layout():
    system = _pair()
    system.advance(0.25)
    data = system.snapshot().to_json()

    assert list(data) == ["sequence_index", "time", "particles"]
    assert data["time"] == 0.25
    first = data["particles"][0]
    assert list(first) == ["index", "position", "velocity", "mass"]
    assert set(first["position"]) == {"x", "y", "z"}
    assert [p["index"] for p in data["particles"]] == [0, 1]
    assert data["particles"][1]["mass"] == 2.0
