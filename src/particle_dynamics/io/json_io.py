# MIT License (see LICENSE)
"""
JSON serialization and deserialization for particle systems.

The document captures everything needed to resume a simulation: particles,
interactions, constraints, clock and snapshot counter. Floats are written
with full repr precision, so a restored system continues bit-identically.

JSON Schema (version 1):
------------------------
{
  "schema_version": 1,
  "time": float,                     # Default: 0.0
  "snapshots_saved": int,            # Default: 0
  "started": bool,                   # Particle count fixed; default: time > 0
  "particles": [
    {
      "position": [x, y, z],         # Required
      "velocity": [vx, vy, vz],      # Default: [0, 0, 0]
      "mass": float                  # Required, > 0
    }
  ],
  "interactions": [                  # Registration order is preserved
    {
      "type": "pairwise",
      "index_a": int, "index_b": int,
      "force": {"kind": "elastic", "k": float, "d0": float}
             | {"kind": "damping", "c": float}
             | {"kind": "gravitational", "constant": float}
             | {"kind": "sticky", "d_well": float, "d_max": float,
                "f_sticky": float, "f_repulsive": float}
    },
    {
      "type": "external",
      "index": int,
      "force": {"kind": "linear_drag", "coefficient": float}
             | {"kind": "uniform_gravity", "acceleration": [gx, gy, gz]}
    }
  ],
  "constraints": [
    {
      "type": "external",
      "index": int,
      "geometry": {"kind": "plane", "position": [x, y, z], "normal": [nx, ny, nz]}
                | {"kind": "sphere", "center": [x, y, z], "radius": float}
    }
  ]
}
"""
from __future__ import annotations
import json
import logging
from typing import Any

import numpy as np

from ..constants import GRAVITATIONAL_CONSTANT, SCHEMA_VERSION
from ..constraints.boundary import ExternalConstraint, Constraint
from ..core.forces import (
    Damping,
    Elastic,
    ExternalForceKind,
    ForceKind,
    Gravitational,
    LinearDrag,
    Sticky,
    UniformGravity,
)
from ..core.interactions import ExternalForce, Interaction, PairwiseForce
from ..errors import InvalidParameterError
from ..geometry import Geometry, Plane, Sphere
from ..system import ParticlesSystem
from ..types import Particle

logger = logging.getLogger(__name__)


def load_system_raw(path: str) -> dict[str, Any]:
    """
    Load raw JSON data from a system file without object construction.

    Args:
        path: Absolute or relative path to the JSON file.
    """
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def load_system(path: str) -> ParticlesSystem:
    """
    Load and construct a ParticlesSystem from a JSON file.

    Raises:
        FileNotFoundError: If the file cannot be found.
        json.JSONDecodeError: If the file is not valid JSON.
        InvalidParameterError: If the document is malformed or of another
            schema version.
        IndexOutOfRangeError: If an interaction or constraint refers to a
            particle the document does not define.
    """
    system = system_from_json(load_system_raw(path))
    logger.info(
        "Loaded system from %s: %d particle(s), t=%g, %d snapshot(s) saved",
        path, len(system.particles), system.time, system.snapshots_saved,
    )
    return system


def save_system(system: ParticlesSystem, path: str, indent: int | None = 2) -> None:
    """Save a ParticlesSystem to a JSON file on disk."""
    data = system_to_json(system)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=indent)
    logger.info("Saved system with %d particle(s) at t=%g to %s", len(system.particles), system.time, path)


# =============================================================================
# Serialization
# =============================================================================

def _to_list(arr: Any) -> list[float]:
    """Helper: Convert numpy array or tuple to a clean list of floats."""
    if isinstance(arr, np.ndarray):
        return arr.tolist()
    return [float(x) for x in arr]


def particle_to_json(p: Particle) -> dict[str, Any]:
    return {
        "position": _to_list(p.position),
        "velocity": _to_list(p.velocity),
        "mass": p.mass,
    }


def force_kind_to_json(kind: ForceKind | ExternalForceKind) -> dict[str, Any]:
    if isinstance(kind, Elastic):
        return {"kind": "elastic", "k": kind.k, "d0": kind.d0}
    if isinstance(kind, Damping):
        return {"kind": "damping", "c": kind.c}
    if isinstance(kind, Gravitational):
        return {"kind": "gravitational", "constant": kind.constant}
    if isinstance(kind, Sticky):
        return {
            "kind": "sticky",
            "d_well": kind.d_well,
            "d_max": kind.d_max,
            "f_sticky": kind.f_sticky,
            "f_repulsive": kind.f_repulsive,
        }
    if isinstance(kind, LinearDrag):
        return {"kind": "linear_drag", "coefficient": kind.coefficient}
    if isinstance(kind, UniformGravity):
        return {"kind": "uniform_gravity", "acceleration": _to_list(kind.acceleration)}
    raise TypeError(f"Cannot serialize unknown force kind: {type(kind)}")


def interaction_to_json(interaction: Interaction) -> dict[str, Any]:
    if isinstance(interaction, PairwiseForce):
        return {
            "type": "pairwise",
            "index_a": interaction.index_a,
            "index_b": interaction.index_b,
            "force": force_kind_to_json(interaction.kind),
        }
    if isinstance(interaction, ExternalForce):
        return {
            "type": "external",
            "index": interaction.index,
            "force": force_kind_to_json(interaction.kind),
        }
    raise TypeError(f"Cannot serialize unknown interaction type: {type(interaction)}")


def geometry_to_json(geometry: Geometry) -> dict[str, Any]:
    if isinstance(geometry, Plane):
        return {"kind": "plane", "position": _to_list(geometry.position), "normal": _to_list(geometry.normal)}
    if isinstance(geometry, Sphere):
        return {"kind": "sphere", "center": _to_list(geometry.center), "radius": geometry.radius}
    raise TypeError(f"Cannot serialize unknown geometry type: {type(geometry)}")


def constraint_to_json(constraint: Constraint) -> dict[str, Any]:
    return {
        "type": "external",
        "index": constraint.index,
        "geometry": geometry_to_json(constraint.geometry),
    }


def system_to_json(system: ParticlesSystem) -> dict[str, Any]:
    """Serialize a complete ParticlesSystem to a JSON-compatible dictionary."""
    return {
        "schema_version": SCHEMA_VERSION,
        "time": system.time,
        "snapshots_saved": system.snapshots_saved,
        "started": system.started,
        "particles": [particle_to_json(p) for p in system.particles],
        "interactions": [interaction_to_json(i) for i in system.interactions],
        "constraints": [constraint_to_json(c) for c in system.constraints],
    }


# =============================================================================
# Deserialization
# =============================================================================

def _field(d: dict[str, Any], key: str, what: str) -> Any:
    try:
        return d[key]
    except (KeyError, TypeError) as exc:
        raise InvalidParameterError(f"{what} definition missing required '{key}' field.") from exc


def particle_from_json(d: dict[str, Any]) -> Particle:
    return Particle(
        position=_field(d, "position", "Particle"),
        velocity=d.get("velocity", [0.0, 0.0, 0.0]),
        mass=_field(d, "mass", "Particle"),
    )


def force_kind_from_json(d: dict[str, Any]) -> ForceKind | ExternalForceKind:
    kind = _field(d, "kind", "Force")
    if kind == "elastic":
        return Elastic(k=_field(d, "k", "Elastic"), d0=_field(d, "d0", "Elastic"))
    if kind == "damping":
        return Damping(c=_field(d, "c", "Damping"))
    if kind == "gravitational":
        return Gravitational(constant=d.get("constant", GRAVITATIONAL_CONSTANT))
    if kind == "sticky":
        return Sticky(
            d_well=_field(d, "d_well", "Sticky"),
            d_max=_field(d, "d_max", "Sticky"),
            f_sticky=_field(d, "f_sticky", "Sticky"),
            f_repulsive=_field(d, "f_repulsive", "Sticky"),
        )
    if kind == "linear_drag":
        return LinearDrag(coefficient=_field(d, "coefficient", "LinearDrag"))
    if kind == "uniform_gravity":
        return UniformGravity(acceleration=_field(d, "acceleration", "UniformGravity"))
    raise InvalidParameterError(f"Unknown force kind: '{kind}'")


def interaction_from_json(d: dict[str, Any]) -> Interaction:
    i_type = _field(d, "type", "Interaction")
    kind = force_kind_from_json(_field(d, "force", "Interaction"))
    try:
        if i_type == "pairwise":
            return PairwiseForce(_field(d, "index_a", "Interaction"), _field(d, "index_b", "Interaction"), kind)
        if i_type == "external":
            return ExternalForce(_field(d, "index", "Interaction"), kind)
    except TypeError as exc:
        raise InvalidParameterError(f"Force kind '{d['force'].get('kind')}' not allowed in {i_type} interaction") from exc
    raise InvalidParameterError(f"Unknown interaction type: '{i_type}'")


def geometry_from_json(d: dict[str, Any]) -> Geometry:
    kind = _field(d, "kind", "Geometry")
    if kind == "plane":
        return Plane(position=_field(d, "position", "Plane"), normal=_field(d, "normal", "Plane"))
    if kind == "sphere":
        return Sphere(center=_field(d, "center", "Sphere"), radius=_field(d, "radius", "Sphere"))
    raise InvalidParameterError(f"Unknown geometry kind: '{kind}'")


def constraint_from_json(d: dict[str, Any]) -> Constraint:
    c_type = _field(d, "type", "Constraint")
    if c_type != "external":
        raise InvalidParameterError(f"Unknown constraint type: '{c_type}'")
    return ExternalConstraint(_field(d, "index", "Constraint"), geometry_from_json(_field(d, "geometry", "Constraint")))


def system_from_json(data: dict[str, Any]) -> ParticlesSystem:
    """
    Rebuild a ParticlesSystem from a dictionary produced by system_to_json().

    Interactions and constraints are registered in document order, which
    keeps subsequent steps bit-identical to the system that was saved.
    """
    version = data.get("schema_version")
    if version != SCHEMA_VERSION:
        raise InvalidParameterError(f"Unsupported schema version: {version!r} (expected {SCHEMA_VERSION})")

    system = ParticlesSystem(
        time=data.get("time", 0.0),
        snapshots_saved=data.get("snapshots_saved", 0),
    )
    for p_data in data.get("particles", []):
        system.add_particle(particle_from_json(p_data))
    for i_data in data.get("interactions", []):
        system.add_interaction(interaction_from_json(i_data))
    for c_data in data.get("constraints", []):
        system.add_constraint(constraint_from_json(c_data))

    started = data.get("started", system.time > 0.0)
    if not isinstance(started, bool):
        raise InvalidParameterError(f"started must be a boolean, got {started!r}")
    if started:
        system.particles.freeze()
    return system
