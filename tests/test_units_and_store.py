import numpy as np
import pytest
from particle_dynamics import Particle, IndexOutOfRangeError, InvalidParameterError
from particle_dynamics.store import ParticleStore
from particle_dynamics.units import position, velocity, acceleration, force


def test_vector_helpers_copy_and_validate():
    src = np.array([1.0, 2.0, 3.0])
    p = position(src)
    src[0] = 9.0
    assert p.tolist() == [1.0, 2.0, 3.0]
    assert velocity([0, 0, 1]).dtype == np.float64

    with pytest.raises(InvalidParameterError):
        acceleration((1.0, 2.0))
    with pytest.raises(InvalidParameterError):
        force((1.0, float("nan"), 0.0))
    with pytest.raises(InvalidParameterError):
        position("abc")


def test_store_bounds_checked_access():
    store = ParticleStore()
    assert store.add(Particle(position=(0, 0, 0))) == 0
    assert store.add(Particle(position=(1, 0, 0))) == 1

    store.set(1, Particle(position=(2, 0, 0), mass=3.0))
    assert store.get(1).mass == 3.0
    assert store[np.int64(0)] is store.get(0)

    with pytest.raises(IndexOutOfRangeError):
        store.get(2)
    with pytest.raises(IndexOutOfRangeError):
        store.set(-1, Particle(position=(0, 0, 0)))
    with pytest.raises(IndexOutOfRangeError):
        store.get(True)


def test_frozen_store_rejects_additions():
    store = ParticleStore()
    store.add(Particle(position=(0, 0, 0)))
    store.freeze()
    with pytest.raises(InvalidParameterError):
        store.add(Particle(position=(0, 0, 0)))
    assert len(store) == 1


def test_particle_derived_quantities():
    p = Particle(position=(0, 0, 0), velocity=(3.0, 4.0, 0.0), mass=2.0)
    assert p.kinetic_energy == pytest.approx(25.0)
    assert np.allclose(p.momentum, [6.0, 8.0, 0.0])
    q = p.copy()
    q.velocity[0] = 0.0
    assert p.velocity[0] == 3.0
