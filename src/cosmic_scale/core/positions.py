"""Body positions from Keplerian elements.

Two frames are supported. The Earth-relative frame puts Earth at the origin
and shrinks every offset by a uniform compression factor, so directions and
distance ratios are unchanged. The orrery frame is heliocentric and
compresses each distance to its square root in AU, which keeps the outer
planets on screen together with the inner ones.

Orbit paths are produced by :func:`orbit_path` with the same
:func:`orrery_compress` used for body positions; anything that draws an
orbit has to go through it or the path and the body drift apart.
"""
from __future__ import annotations

import math
from enum import Enum

import numpy as np

from ..data.bodies import BODY_DISPLAY_ORDER, ORBITAL_ELEMENTS, get_elements
from .config import POSITION_CFG, PositionCfg
from .kepler import SimDate, days_since_j2000, mean_anomaly_at, solve_kepler, true_anomaly
from .model import OrbitalElements


class PositionMode(Enum):
    EARTH_RELATIVE = "earth-relative"
    ORRERY = "orrery"


def _rotate_to_ecliptic(elements: OrbitalElements, x_orb: float, y_orb: float) -> np.ndarray:
    cos_w = math.cos(elements.w)
    sin_w = math.sin(elements.w)
    cos_i = math.cos(elements.i)
    sin_i = math.sin(elements.i)
    cos_o = math.cos(elements.omega)
    sin_o = math.sin(elements.omega)

    x = (cos_o * cos_w - sin_o * sin_w * cos_i) * x_orb + (
        -cos_o * sin_w - sin_o * cos_w * cos_i
    ) * y_orb
    y = (sin_o * cos_w + cos_o * sin_w * cos_i) * x_orb + (
        -sin_o * sin_w + cos_o * cos_w * cos_i
    ) * y_orb
    z = (sin_w * sin_i) * x_orb + (cos_w * sin_i) * y_orb
    return np.array([x, y, z], dtype=float)


def position_from_mean_anomaly(elements: OrbitalElements, mean_anomaly: float) -> np.ndarray:
    """Heliocentric position in metres for a given mean anomaly."""

    e = elements.e
    E = solve_kepler(mean_anomaly, e)
    nu = true_anomaly(E, e)
    r = elements.a * (1.0 - e * math.cos(E))
    return _rotate_to_ecliptic(elements, r * math.cos(nu), r * math.sin(nu))


def heliocentric_position(
    elements: OrbitalElements, date: SimDate, cfg: PositionCfg = POSITION_CFG
) -> np.ndarray:
    return position_from_mean_anomaly(elements, mean_anomaly_at(elements, date, cfg))


def earth_relative_position(
    elements: OrbitalElements, date: SimDate, cfg: PositionCfg = POSITION_CFG
) -> np.ndarray:
    body = heliocentric_position(elements, date, cfg)
    earth = heliocentric_position(ORBITAL_ELEMENTS["earth"], date, cfg)
    return (body - earth) * cfg.distance_compression


def orrery_scale(distance_au: float) -> float:
    """Square-root compression of a heliocentric distance in AU."""

    return math.sqrt(distance_au)


def orrery_compress(position: np.ndarray, cfg: PositionCfg = POSITION_CFG) -> np.ndarray:
    """Rescale ``position`` to its orrery distance, keeping its direction."""

    distance_au = float(np.linalg.norm(position)) / cfg.au_in_meters
    if distance_au <= 0.0:
        return np.array(position, dtype=float)
    return position * (orrery_scale(distance_au) / distance_au)


def orrery_position(
    elements: OrbitalElements, date: SimDate, cfg: PositionCfg = POSITION_CFG
) -> np.ndarray:
    return orrery_compress(heliocentric_position(elements, date, cfg), cfg)


def position_for(
    elements: OrbitalElements,
    date: SimDate,
    mode: PositionMode,
    cfg: PositionCfg = POSITION_CFG,
) -> np.ndarray:
    if mode is PositionMode.ORRERY:
        return orrery_position(elements, date, cfg)
    return earth_relative_position(elements, date, cfg)


def orbit_path(
    elements: OrbitalElements,
    segments: int | None = None,
    cfg: PositionCfg = POSITION_CFG,
) -> np.ndarray:
    """Closed orrery-frame orbit sampled uniformly in mean anomaly.

    Returns an array of shape ``(segments + 1, 3)``; the last sample repeats the first.
    """

    count = cfg.orbit_path_segments if segments is None else segments
    count = max(1, count)
    points = np.empty((count + 1, 3), dtype=float)
    for j in range(count + 1):
        mean_anomaly = (j / count) * 2.0 * math.pi
        points[j] = orrery_compress(position_from_mean_anomaly(elements, mean_anomaly), cfg)
    return points


def moon_offset(date: SimDate, cfg: PositionCfg = POSITION_CFG) -> np.ndarray:
    """Moon position relative to Earth on a simplified circular orbit."""

    phase = (days_since_j2000(date, cfg) % cfg.lunar_month_days) / cfg.lunar_month_days
    angle = phase * 2.0 * math.pi
    x = math.cos(angle) * cfg.moon_distance
    y = math.sin(angle) * cfg.moon_distance * math.sin(cfg.moon_inclination)
    z = math.sin(angle) * cfg.moon_distance * math.cos(cfg.moon_inclination)
    return np.array([x, y, z], dtype=float)


def body_position(
    key: str,
    date: SimDate,
    mode: PositionMode = PositionMode.EARTH_RELATIVE,
    cfg: PositionCfg = POSITION_CFG,
) -> np.ndarray:
    """Position of a catalog body, including the Sun and the Moon."""

    if key == "sun":
        if mode is PositionMode.ORRERY:
            return np.zeros(3, dtype=float)
        earth = heliocentric_position(ORBITAL_ELEMENTS["earth"], date, cfg)
        return -earth * cfg.distance_compression
    if key == "earth":
        if mode is PositionMode.ORRERY:
            return orrery_position(ORBITAL_ELEMENTS["earth"], date, cfg)
        return np.zeros(3, dtype=float)
    if key == "moon":
        return body_position("earth", date, mode, cfg) + moon_offset(date, cfg)
    return position_for(get_elements(key), date, mode, cfg)


def all_body_positions(
    date: SimDate,
    mode: PositionMode = PositionMode.EARTH_RELATIVE,
    keys: list[str] | None = None,
    cfg: PositionCfg = POSITION_CFG,
) -> dict[str, np.ndarray]:
    return {key: body_position(key, date, mode, cfg) for key in (keys or BODY_DISPLAY_ORDER)}


__all__ = [
    "PositionMode",
    "all_body_positions",
    "body_position",
    "earth_relative_position",
    "heliocentric_position",
    "moon_offset",
    "orbit_path",
    "orrery_compress",
    "orrery_position",
    "orrery_scale",
    "position_for",
    "position_from_mean_anomaly",
]
