"""Kepler's equation and anomaly conversions."""
from __future__ import annotations

import logging
import math
from datetime import datetime, timedelta, timezone
from typing import Union

from .config import POSITION_CFG, PositionCfg
from .model import OrbitalElements

log = logging.getLogger(__name__)

TWO_PI = 2.0 * math.pi


def solve_kepler(
    mean_anomaly: float,
    e: float,
    tolerance: float = POSITION_CFG.kepler_tolerance,
    max_iterations: int = POSITION_CFG.kepler_max_iterations,
) -> float:
    """Solve ``E - e*sin(E) = M`` for the eccentric anomaly ``E``.

    ``mean_anomaly`` may be any real value; it is wrapped into ``[0, 2*pi)``
    first. Newton-Raphson stops once a step is smaller than ``tolerance``.
    If the iteration budget runs out the last estimate is returned as is.
    """

    m = mean_anomaly % TWO_PI

    E = m + e * math.sin(m)
    for _ in range(max_iterations):
        dE = (E - e * math.sin(E) - m) / (1.0 - e * math.cos(E))
        E -= dE
        if abs(dE) < tolerance:
            return E

    log.debug("Kepler solver did not converge: M=%.6f e=%.6f E=%.6f", m, e, E)
    return E


def true_anomaly(E: float, e: float) -> float:
    """True anomaly for eccentric anomaly ``E``."""

    return 2.0 * math.atan2(
        math.sqrt(1.0 + e) * math.sin(E / 2.0),
        math.sqrt(1.0 - e) * math.cos(E / 2.0),
    )


def eccentric_from_true(nu: float, e: float) -> float:
    """Inverse of :func:`true_anomaly`, wrapped into ``[0, 2*pi)``."""

    E = 2.0 * math.atan2(
        math.sqrt(1.0 - e) * math.sin(nu / 2.0),
        math.sqrt(1.0 + e) * math.cos(nu / 2.0),
    )
    return E % TWO_PI


SimDate = Union[datetime, float]

_EARLIEST = datetime.min.replace(tzinfo=timezone.utc)
_LATEST = datetime.max.replace(tzinfo=timezone.utc)


def days_since_j2000(date: SimDate, cfg: PositionCfg = POSITION_CFG) -> float:
    """Days since the J2000 epoch; a plain number is taken as that count already."""

    if not isinstance(date, datetime):
        return float(date)
    if date.tzinfo is None:
        date = date.replace(tzinfo=timezone.utc)
    return (date - cfg.j2000_epoch).total_seconds() / 86_400.0


def date_from_days(days: float, cfg: PositionCfg = POSITION_CFG) -> datetime:
    """UTC date ``days`` after J2000, saturating at the ends of the datetime range."""

    # one day of slack keeps float rounding from stepping past the limits
    if days <= days_since_j2000(_EARLIEST, cfg) + 1.0:
        return _EARLIEST
    if days >= days_since_j2000(_LATEST, cfg) - 1.0:
        return _LATEST
    return cfg.j2000_epoch + timedelta(days=days)


def mean_anomaly_at(
    elements: OrbitalElements, date: SimDate, cfg: PositionCfg = POSITION_CFG
) -> float:
    return elements.m0 + elements.n * days_since_j2000(date, cfg)


__all__ = [
    "SimDate",
    "date_from_days",
    "days_since_j2000",
    "eccentric_from_true",
    "mean_anomaly_at",
    "solve_kepler",
    "true_anomaly",
]
