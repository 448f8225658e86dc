"""Conversions between metres and the camera's log10 distance."""
from __future__ import annotations

import math


def meters_to_log_distance(meters: float) -> float:
    return math.log10(max(1.0, meters))


def log_distance_to_meters(log_distance: float) -> float:
    return 10.0**log_distance


def clamp_zoom(zoom: float, minimum: float, maximum: float) -> float:
    return max(minimum, min(maximum, zoom))


def format_distance(meters: float) -> str:
    if meters < 1000:
        return f"{round(meters)} m"
    km = meters / 1000.0
    if km < 10:
        return f"{km:.1f} km"
    return f"{round(km)} km"


__all__ = [
    "clamp_zoom",
    "format_distance",
    "log_distance_to_meters",
    "meters_to_log_distance",
]
