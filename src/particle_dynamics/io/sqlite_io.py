# MIT License (see LICENSE)
"""
SQLite storage for snapshot sequences.

Layout (one row per particle per snapshot, one row per snapshot time):

    particles_system(n_time INTEGER, n_particle INTEGER,
                     position_x FLOAT, position_y FLOAT, position_z FLOAT,
                     velocity_x FLOAT, velocity_y FLOAT, velocity_z FLOAT,
                     mass FLOAT)
    time(n_time INTEGER, time FLOAT)

n_time is the snapshot's sequence index. Each snapshot is written in a single
transaction, so a reader never sees half of one.
"""
from __future__ import annotations
import logging
import sqlite3

import numpy as np

from ..snapshot import ParticleState, Snapshot
from ..units import Position, Velocity

logger = logging.getLogger(__name__)

_SCHEMA = (
    "CREATE TABLE IF NOT EXISTS particles_system ("
    "n_time INTEGER, n_particle INTEGER, "
    "position_x FLOAT, position_y FLOAT, position_z FLOAT, "
    "velocity_x FLOAT, velocity_y FLOAT, velocity_z FLOAT, "
    "mass FLOAT)",
    "CREATE TABLE IF NOT EXISTS time (n_time INTEGER, time FLOAT)",
)


def _read_only(values) -> np.ndarray:
    v = np.array(values, dtype=np.float64)
    v.flags.writeable = False
    return v


class SnapshotDatabase:
    """
    Append-only snapshot store backed by an SQLite file.

    Usage:
        with SnapshotDatabase("run.db") as db:
            system.run(dt=1e-5, steps=99_999, snapshot_every=9_999, on_snapshot=db.write)
    """

    def __init__(self, path: str) -> None:
        self.path = path
        self._conn = sqlite3.connect(path)
        with self._conn:
            for statement in _SCHEMA:
                self._conn.execute(statement)
        logger.info("Opened snapshot database %s", path)

    def write(self, snapshot: Snapshot) -> None:
        """Store one snapshot atomically."""
        rows = [
            (
                snapshot.sequence_index,
                p.index,
                float(p.position[0]), float(p.position[1]), float(p.position[2]),
                float(p.velocity[0]), float(p.velocity[1]), float(p.velocity[2]),
                p.mass,
            )
            for p in snapshot.particles
        ]
        with self._conn:
            self._conn.executemany("INSERT INTO particles_system VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)", rows)
            self._conn.execute("INSERT INTO time VALUES (?, ?)", (snapshot.sequence_index, snapshot.time))
        logger.debug("Wrote snapshot %d (%d particle(s)) to %s", snapshot.sequence_index, len(rows), self.path)

    def read_times(self) -> list[tuple[int, float]]:
        """All stored (n_time, time) pairs, ordered by n_time."""
        cur = self._conn.execute("SELECT n_time, time FROM time ORDER BY n_time")
        return [(int(n), float(t)) for n, t in cur.fetchall()]

    def read_snapshot(self, n_time: int) -> Snapshot:
        """
        Rebuild a stored snapshot.

        Raises:
            KeyError: If no snapshot with this sequence index was stored.
        """
        row = self._conn.execute("SELECT time FROM time WHERE n_time = ?", (n_time,)).fetchone()
        if row is None:
            raise KeyError(f"No snapshot with sequence index {n_time} in {self.path}")
        cur = self._conn.execute(
            "SELECT n_particle, position_x, position_y, position_z, "
            "velocity_x, velocity_y, velocity_z, mass "
            "FROM particles_system WHERE n_time = ? ORDER BY n_particle",
            (n_time,),
        )
        particles = tuple(
            ParticleState(
                index=int(r[0]),
                position=Position(_read_only(r[1:4])),
                velocity=Velocity(_read_only(r[4:7])),
                mass=float(r[7]),
            )
            for r in cur.fetchall()
        )
        return Snapshot(sequence_index=int(n_time), time=float(row[0]), particles=particles)

    def close(self) -> None:
        self._conn.close()

    def __enter__(self) -> SnapshotDatabase:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
