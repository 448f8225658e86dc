"""Data models for the body catalog."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class OrbitalElements:
    """Keplerian elements at the J2000 epoch.

    Lengths are in metres, angles in radians and the mean motion in radians
    per day. ``a`` and ``n`` are taken as given; neither is derived from the other.
    """

    a: float
    e: float
    i: float
    omega: float
    w: float
    m0: float
    n: float


@dataclass(frozen=True)
class PhysicalData:
    """Physical properties used for camera placement."""

    name: str
    radius_real: float
    visual_scale: float
    default_zoom: float
    axial_tilt: float
    rotation_period: float  # hours, negative means retrograde
    has_atmosphere: bool = False
    atmosphere_thickness: Optional[float] = None

    @property
    def visual_radius(self) -> float:
        return self.radius_real * self.visual_scale


@dataclass(frozen=True)
class BodyFacts:
    type: str
    diameter: str
    day_length: str
    fun_fact: str
    year_length: Optional[str] = None
    moons: Optional[str] = None

    def rows(self) -> list[tuple[str, str]]:
        rows = [("Type", self.type), ("Diameter", self.diameter), ("Day", self.day_length)]
        if self.year_length is not None:
            rows.append(("Year", self.year_length))
        if self.moons is not None:
            rows.append(("Moons", self.moons))
        return rows


@dataclass(frozen=True)
class BodyConfig:
    """Navigation entry for a body the camera can fly to."""

    key: str
    name: str
    radius: float
    default_zoom: float
    group: str
    facts: BodyFacts


__all__ = ["BodyConfig", "BodyFacts", "OrbitalElements", "PhysicalData"]
