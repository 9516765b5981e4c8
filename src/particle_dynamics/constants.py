# MIT License (see LICENSE)
"""
Numerical constants used by the force model and the persistence layer.

The engine works in arbitrary but consistent units; nothing here assumes SI.
"""
from __future__ import annotations

# Newtonian gravitational constant for pairwise gravity, F = G m_a m_b / d².
# Defaults to 1 (natural units). Pass Gravitational(constant=6.674e-11) for SI.
GRAVITATIONAL_CONSTANT: float = 1.0

# Version of the JSON system document written by io.json_io.
SCHEMA_VERSION: int = 1
