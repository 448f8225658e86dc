"""Static catalog of the bodies the engine positions and navigates between."""
from __future__ import annotations

import math

from ..core.model import BodyConfig, BodyFacts, OrbitalElements, PhysicalData


class UnknownBodyError(KeyError):
    """Raised when a body id is not part of the catalog."""


def _deg(value: float) -> float:
    return value * math.pi / 180.0


# JPL approximate positions, J2000 epoch
# https://ssd.jpl.nasa.gov/planets/approx_pos.html
ORBITAL_ELEMENTS: dict[str, OrbitalElements] = {
    "mercury": OrbitalElements(
        a=57.909e9,
        e=0.20563,
        i=_deg(7.005),
        omega=_deg(48.331),
        w=_deg(29.124),
        m0=_deg(174.796),
        n=_deg(4.09233445),
    ),
    "venus": OrbitalElements(
        a=108.21e9,
        e=0.00677,
        i=_deg(3.3947),
        omega=_deg(76.680),
        w=_deg(54.884),
        m0=_deg(50.115),
        n=_deg(1.60213049),
    ),
    "earth": OrbitalElements(
        a=149.598e9,
        e=0.01671,
        i=0.0,
        omega=0.0,
        w=_deg(102.937),
        m0=_deg(357.529),
        n=_deg(0.98560028),
    ),
    "mars": OrbitalElements(
        a=227.94e9,
        e=0.09339,
        i=_deg(1.850),
        omega=_deg(49.558),
        w=_deg(286.502),
        m0=_deg(19.373),
        n=_deg(0.52402068),
    ),
    "jupiter": OrbitalElements(
        a=778.57e9,
        e=0.04839,
        i=_deg(1.304),
        omega=_deg(100.464),
        w=_deg(273.867),
        m0=_deg(20.020),
        n=_deg(0.08308529),
    ),
    "saturn": OrbitalElements(
        a=1433.53e9,
        e=0.05415,
        i=_deg(2.485),
        omega=_deg(113.665),
        w=_deg(339.392),
        m0=_deg(317.020),
        n=_deg(0.03340556),
    ),
    "uranus": OrbitalElements(
        a=2872.46e9,
        e=0.04717,
        i=_deg(0.773),
        omega=_deg(74.006),
        w=_deg(96.998),
        m0=_deg(142.238),
        n=_deg(0.01172528),
    ),
    "neptune": OrbitalElements(
        a=4495.06e9,
        e=0.00859,
        i=_deg(1.770),
        omega=_deg(131.783),
        w=_deg(276.336),
        m0=_deg(256.228),
        n=_deg(0.00598103),
    ),
}

PHYSICAL_DATA: dict[str, PhysicalData] = {
    "sun": PhysicalData(
        name="Sun",
        radius_real=696_340_000,
        visual_scale=0.5,
        default_zoom=9.8,
        axial_tilt=_deg(7.25),
        rotation_period=609.12,
    ),
    "mercury": PhysicalData(
        name="Mercury",
        radius_real=2_439_700,
        visual_scale=8,
        default_zoom=7.0,
        axial_tilt=_deg(0.034),
        rotation_period=1407.6,
    ),
    "venus": PhysicalData(
        name="Venus",
        radius_real=6_051_800,
        visual_scale=3,
        default_zoom=7.5,
        axial_tilt=_deg(177.4),
        rotation_period=-5832.5,
        has_atmosphere=True,
        atmosphere_thickness=0.15,
    ),
    "earth": PhysicalData(
        name="Earth",
        radius_real=6_371_000,
        visual_scale=1,
        default_zoom=7.5,
        axial_tilt=_deg(23.44),
        rotation_period=23.934,
        has_atmosphere=True,
        atmosphere_thickness=0.025,
    ),
    "moon": PhysicalData(
        name="Moon",
        radius_real=1_737_000,
        visual_scale=3,
        default_zoom=7.5,
        axial_tilt=_deg(6.68),
        rotation_period=655.7,
    ),
    "mars": PhysicalData(
        name="Mars",
        radius_real=3_389_500,
        visual_scale=5,
        default_zoom=7.3,
        axial_tilt=_deg(25.19),
        rotation_period=24.62,
        has_atmosphere=True,
        atmosphere_thickness=0.02,
    ),
    "jupiter": PhysicalData(
        name="Jupiter",
        radius_real=69_911_000,
        visual_scale=1,
        default_zoom=8.2,
        axial_tilt=_deg(3.13),
        rotation_period=9.93,
        has_atmosphere=True,
        atmosphere_thickness=0.05,
    ),
    "saturn": PhysicalData(
        name="Saturn",
        radius_real=58_232_000,
        visual_scale=1,
        default_zoom=8.5,
        axial_tilt=_deg(26.73),
        rotation_period=10.7,
        has_atmosphere=True,
        atmosphere_thickness=0.05,
    ),
    "uranus": PhysicalData(
        name="Uranus",
        radius_real=25_362_000,
        visual_scale=2,
        default_zoom=8.0,
        axial_tilt=_deg(97.77),
        rotation_period=-17.24,
        has_atmosphere=True,
        atmosphere_thickness=0.04,
    ),
    "neptune": PhysicalData(
        name="Neptune",
        radius_real=24_622_000,
        visual_scale=2,
        default_zoom=8.0,
        axial_tilt=_deg(28.32),
        rotation_period=16.11,
        has_atmosphere=True,
        atmosphere_thickness=0.04,
    ),
}


BODY_DEFINITIONS: tuple[BodyConfig, ...] = (
    BodyConfig(
        key="sun",
        name="Sun",
        radius=696_340_000 * 0.5,
        default_zoom=9.8,
        group="inner",
        facts=BodyFacts(
            type="G-type Main Sequence Star",
            diameter="1.39 million km",
            day_length="25 Earth days (equator)",
            fun_fact="Contains 99.86% of the Solar System's mass",
        ),
    ),
    BodyConfig(
        key="mercury",
        name="Mercury",
        radius=2_439_700 * 8,
        default_zoom=8.0,
        group="inner",
        facts=BodyFacts(
            type="Terrestrial Planet",
            diameter="4,879 km",
            day_length="59 Earth days",
            year_length="88 Earth days",
            moons="0",
            fun_fact="Fastest planet, orbiting the Sun in just 88 days",
        ),
    ),
    BodyConfig(
        key="venus",
        name="Venus",
        radius=6_051_800 * 3,
        default_zoom=8.0,
        group="inner",
        facts=BodyFacts(
            type="Terrestrial Planet",
            diameter="12,104 km",
            day_length="243 Earth days",
            year_length="225 Earth days",
            moons="0",
            fun_fact="Rotates backwards and has the longest day of any planet",
        ),
    ),
    BodyConfig(
        key="earth",
        name="Earth",
        radius=6_371_000,
        default_zoom=7.5,
        group="inner",
        facts=BodyFacts(
            type="Terrestrial Planet",
            diameter="12,742 km",
            day_length="24 hours",
            year_length="365.25 days",
            moons="1",
            fun_fact="The only known planet with life",
        ),
    ),
    BodyConfig(
        key="moon",
        name="Moon",
        radius=1_737_000 * 3,
        default_zoom=7.5,
        group="inner",
        facts=BodyFacts(
            type="Natural Satellite",
            diameter="3,474 km",
            day_length="29.5 Earth days",
            year_length="27.3 days (orbit)",
            fun_fact="Slowly drifting away from Earth at 3.8 cm per year",
        ),
    ),
    BodyConfig(
        key="mars",
        name="Mars",
        radius=3_389_500 * 5,
        default_zoom=8.0,
        group="inner",
        facts=BodyFacts(
            type="Terrestrial Planet",
            diameter="6,779 km",
            day_length="24h 37m",
            year_length="687 Earth days",
            moons="2",
            fun_fact="Home to Olympus Mons, the largest volcano in the Solar System",
        ),
    ),
    BodyConfig(
        key="jupiter",
        name="Jupiter",
        radius=69_911_000,
        default_zoom=8.6,
        group="outer",
        facts=BodyFacts(
            type="Gas Giant",
            diameter="139,820 km",
            day_length="9h 56m",
            year_length="11.9 Earth years",
            moons="95",
            fun_fact="The Great Red Spot is a storm larger than Earth",
        ),
    ),
    BodyConfig(
        key="saturn",
        name="Saturn",
        radius=58_232_000,
        default_zoom=8.7,
        group="outer",
        facts=BodyFacts(
            type="Gas Giant",
            diameter="116,460 km",
            day_length="10h 42m",
            year_length="29.4 Earth years",
            moons="146",
            fun_fact="Its rings span up to 282,000 km but are only 10m thick",
        ),
    ),
    BodyConfig(
        key="uranus",
        name="Uranus",
        radius=25_362_000 * 2,
        default_zoom=8.5,
        group="outer",
        facts=BodyFacts(
            type="Ice Giant",
            diameter="50,724 km",
            day_length="17h 14m",
            year_length="84 Earth years",
            moons="28",
            fun_fact="Rotates on its side with a 98° axial tilt",
        ),
    ),
    BodyConfig(
        key="neptune",
        name="Neptune",
        radius=24_622_000 * 2,
        default_zoom=8.5,
        group="outer",
        facts=BodyFacts(
            type="Ice Giant",
            diameter="49,244 km",
            day_length="16h 6m",
            year_length="165 Earth years",
            moons="16",
            fun_fact="Has the strongest winds in the Solar System at 2,100 km/h",
        ),
    ),
)

BODIES: dict[str, BodyConfig] = {body.key: body for body in BODY_DEFINITIONS}
BODY_DISPLAY_ORDER: list[str] = [body.key for body in BODY_DEFINITIONS]
DEFAULT_BODY_KEY = "earth"


def get_body(key: str) -> BodyConfig:
    try:
        return BODIES[key]
    except KeyError:
        raise UnknownBodyError(key) from None


def get_elements(key: str) -> OrbitalElements:
    try:
        return ORBITAL_ELEMENTS[key]
    except KeyError:
        raise UnknownBodyError(key) from None


def get_physical(key: str) -> PhysicalData:
    try:
        return PHYSICAL_DATA[key]
    except KeyError:
        raise UnknownBodyError(key) from None


def arrival_zoom(key: str) -> float:
    """Camera log-distance used when arriving at ``key``."""

    return get_body(key).default_zoom


__all__ = [
    "BODIES",
    "BODY_DEFINITIONS",
    "BODY_DISPLAY_ORDER",
    "DEFAULT_BODY_KEY",
    "ORBITAL_ELEMENTS",
    "PHYSICAL_DATA",
    "UnknownBodyError",
    "arrival_zoom",
    "get_body",
    "get_elements",
    "get_physical",
]
