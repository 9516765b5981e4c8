# MIT License (see LICENSE)
"""
Boundary constraints for particles.

This subpackage provides:
    - ExternalConstraint: binds one particle to a Plane or Sphere boundary.
    - resolve: pure velocity reflection against a boundary.

Typical usage:
    from particle_dynamics.constraints import ExternalConstraint
    from particle_dynamics.geometry import Sphere

    system.add_constraint(ExternalConstraint(0, Sphere(center=(0, 0, 0), radius=1.0)))
"""
from .boundary import ExternalConstraint, Constraint, resolve

__all__ = [
    "ExternalConstraint",
    "Constraint",
    "resolve",
]
