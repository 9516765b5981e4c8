# MIT License (see LICENSE)
"""
Nominal vector types for the physical quantities handled by the engine.

Every vector is a float64 numpy array of shape (3,). The aliases below keep a
position from being passed where a velocity is expected: they are distinct
types for a static checker, and the constructor helpers validate shape and
finiteness at runtime. Public signatures in this package always use them.

    p = position((0.0, 1.0, 0.0))
    v = velocity((1.0, 0.0, 0.0))
"""
from __future__ import annotations
from typing import NewType

import numpy as np

from .errors import InvalidParameterError
from .util import f64, all_finite

Position = NewType("Position", np.ndarray)
Velocity = NewType("Velocity", np.ndarray)
Acceleration = NewType("Acceleration", np.ndarray)
Force = NewType("Force", np.ndarray)

Mass = float


def as_vector(x, quantity: str) -> np.ndarray:
    try:
        v = f64(x)
    except (TypeError, ValueError) as exc:
        raise InvalidParameterError(f"{quantity} must be a 3-vector of numbers, got {x!r}") from exc
    if v.shape != (3,):
        raise InvalidParameterError(f"{quantity} must have shape (3,), got {v.shape}")
    if not all_finite(v):
        raise InvalidParameterError(f"{quantity} must be finite, got {v.tolist()}")
    return v


def position(x) -> Position:
    """Tag an array-like as a position (length units)."""
    return Position(as_vector(x, "position"))


def velocity(x) -> Velocity:
    """Tag an array-like as a velocity (length/time units)."""
    return Velocity(as_vector(x, "velocity"))


def acceleration(x) -> Acceleration:
    """Tag an array-like as an acceleration (length/time² units)."""
    return Acceleration(as_vector(x, "acceleration"))


def force(x) -> Force:
    """Tag an array-like as a force (mass·length/time² units)."""
    return Force(as_vector(x, "force"))
