# MIT License (see LICENSE)
"""
Input/Output utilities for particle systems.

This subpackage provides:
    - JSON system documents: save and restore a complete system, including
      clock and snapshot counter, for resumable runs.
    - SnapshotDatabase: SQLite storage for snapshot sequences.

Typical usage:
    from particle_dynamics.io import load_system, save_system, SnapshotDatabase

    system = load_system("scenario.json")
    with SnapshotDatabase("run.db") as db:
        system.run(dt=1e-5, steps=1000, snapshot_every=100, on_snapshot=db.write)
    save_system(system, "resume.json")
"""
from .json_io import (
    load_system,
    load_system_raw,
    save_system,
    system_to_json,
    system_from_json,
)
from .sqlite_io import SnapshotDatabase

__all__ = [
    # Loading
    "load_system",
    "load_system_raw",
    # Saving
    "save_system",
    # Serialization
    "system_to_json",
    "system_from_json",
    # Snapshot storage
    "SnapshotDatabase",
]
