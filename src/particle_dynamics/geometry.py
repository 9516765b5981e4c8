# MIT License (see LICENSE)
"""
Geometric primitives used as particle boundaries.

- Plane: infinite plane through a point; the normal points to the permitted side.
- Sphere: closed ball given by center and radius.

Both are immutable and validated on construction.
"""
from __future__ import annotations
from dataclasses import dataclass

import numpy as np

from .errors import InvalidParameterError
from .units import Position, as_vector, position
from .util import dot, norm, norm2


@dataclass(frozen=True)
class Plane:
    """
    Infinite plane.

    Attributes:
        position: Any point on the plane.
        normal: Direction of the permitted (outside) half-space. Need not be
                unit length but must not be zero.
    """
    position: Position
    normal: np.ndarray

    def __post_init__(self) -> None:
        object.__setattr__(self, "position", position(self.position))
        normal = as_vector(self.normal, "Plane normal")
        if norm2(normal) == 0.0:
            raise InvalidParameterError("Plane normal must be non-zero")
        object.__setattr__(self, "normal", normal)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Plane):
            return NotImplemented
        return np.array_equal(self.position, other.position) and np.array_equal(self.normal, other.normal)

    def __hash__(self) -> int:
        return hash((tuple(self.position.tolist()), tuple(self.normal.tolist())))

    def signed_distance(self, point: Position) -> float:
        """
        dot(point - position, normal).

        Scaled by |normal|; only the sign is meaningful for a non-unit normal.
        """
        return dot(point - self.position, self.normal)

    def is_outside(self, point: Position) -> bool:
        """True when the point lies on the permitted side (or on the plane)."""
        return self.signed_distance(point) >= 0.0


@dataclass(frozen=True)
class Sphere:
    """
    Sphere of given center and radius.

    Attributes:
        center: Sphere center.
        radius: Radius, strictly positive.
    """
    center: Position
    radius: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "center", position(self.center))
        radius = float(self.radius)
        if not np.isfinite(radius) or radius <= 0.0:
            raise InvalidParameterError(f"Sphere radius must be positive, got {self.radius}")
        object.__setattr__(self, "radius", radius)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Sphere):
            return NotImplemented
        return np.array_equal(self.center, other.center) and self.radius == other.radius

    def __hash__(self) -> int:
        return hash((tuple(self.center.tolist()), self.radius))

    def is_inside(self, point: Position) -> bool:
        """Strict containment: |point - center| < radius."""
        return norm(self.center - point) < self.radius

    def signed_distance(self, point: Position) -> float:
        """Distance to the surface, negative inside."""
        return norm(point - self.center) - self.radius


Geometry = Plane | Sphere
