"""Orbital mechanics and multi-scale navigation engine."""

from .core.kepler import solve_kepler, true_anomaly
from .core.positions import PositionMode, all_body_positions, body_position, orbit_path
from .core.scale_level import ScaleLevel, ScaleLevelState
from .core.timekeeping import SimulatedClock
from .data.bodies import BODIES, UnknownBodyError, get_body
from .engine import Engine, FrameSnapshot, dispatch

__version__ = "0.1.0"

__all__ = [
    "BODIES",
    "Engine",
    "FrameSnapshot",
    "PositionMode",
    "ScaleLevel",
    "ScaleLevelState",
    "SimulatedClock",
    "UnknownBodyError",
    "all_body_positions",
    "body_position",
    "dispatch",
    "get_body",
    "orbit_path",
    "solve_kepler",
    "true_anomaly",
]
