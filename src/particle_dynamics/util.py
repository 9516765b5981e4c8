# MIT License (see LICENSE)
"""
Utility functions for 3D vector math and numeric operations.

All functions operate on vectors represented as float64 numpy arrays of
shape (3,). They are pure: inputs are never modified.
"""
from __future__ import annotations

import numpy as np


def f64(x) -> np.ndarray:
    """
    Convert any array-like to a new float64 numpy array.

    Used throughout the codebase to ensure consistent numeric precision
    and allow tuple/list inputs for positions and velocities.
    """
    return np.array(x, dtype=np.float64)


def zero3() -> np.ndarray:
    """Fresh zero 3-vector."""
    return np.zeros(3, dtype=np.float64)


def dot(a: np.ndarray, b: np.ndarray) -> float:
    """Dot product written out component by component (fixed summation order)."""
    return float(a[0] * b[0] + a[1] * b[1] + a[2] * b[2])


def norm2(v: np.ndarray) -> float:
    """Squared magnitude of a 3D vector. Avoids sqrt for performance."""
    return dot(v, v)


def norm(v: np.ndarray) -> float:
    """Magnitude (length) of a 3D vector."""
    return float(np.sqrt(norm2(v)))


def unit(v: np.ndarray, eps: float = 1e-12) -> np.ndarray:
    """
    Return a unit (normalized) vector in the same direction as v.

    Returns zero vector if |v| < eps to avoid division by zero.
    """
    n = norm(v)
    if n < eps:
        return zero3()
    return v / n


def project_onto(v: np.ndarray, onto: np.ndarray) -> np.ndarray:
    """
    Vector projection of v onto the direction of `onto`.

    proj = (v · onto / |onto|²) onto. Projection onto the zero vector is zero.
    """
    d2 = norm2(onto)
    if d2 == 0.0:
        return zero3()
    return onto * (dot(v, onto) / d2)


def all_finite(v: np.ndarray) -> bool:
    return bool(np.all(np.isfinite(v)))
