# MIT License (see LICENSE)
"""
Console logging for driver scripts.

The library only creates module loggers under the 'particle_dynamics'
namespace and never installs handlers itself.
"""
from __future__ import annotations
import logging
import sys


def setup_logging(level: int = logging.INFO) -> None:
    """Send 'particle_dynamics' log records at `level` and above to stdout."""
    logger = logging.getLogger("particle_dynamics")
    logger.setLevel(level)
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s", datefmt="%H:%M:%S"))
    logger.addHandler(handler)
