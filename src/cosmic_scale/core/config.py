"""Configuration dataclasses for the navigation engine."""
from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timezone


@dataclass(frozen=True)
class PositionCfg:
    j2000_epoch: datetime = datetime(2000, 1, 1, 12, 0, 0, tzinfo=timezone.utc)
    au_in_meters: float = 149_597_870_700.0
    # Sun shown at 30M km instead of 150M km in the Earth-relative view
    distance_compression: float = 0.2
    orbit_path_segments: int = 128
    kepler_tolerance: float = 1e-8
    kepler_max_iterations: int = 30
    moon_distance: float = 384_400_000.0
    lunar_month_days: float = 27.321661
    moon_inclination: float = math.radians(5.1)


@dataclass(frozen=True)
class CameraCfg:
    min_zoom: float = 6.5
    max_zoom: float = 13.0
    initial_zoom: float = 7.5
    damping: float = 0.08
    auto_rotate_speed: float = 0.0003
    initial_polar: float = math.pi / 2.2
    polar_margin: float = 0.1
    default_zoom_animation_ms: float = 3000.0


@dataclass(frozen=True)
class NavigationCfg:
    base_duration_ms: float = 2000.0
    duration_per_log_unit_ms: float = 400.0
    min_duration_ms: float = 3500.0
    max_duration_ms: float = 7000.0
    apex_offset: float = 0.5
    max_apex_zoom: float = 12.5
    label_window: tuple[float, float] = (0.45, 0.55)
    start_body: str = "earth"


@dataclass(frozen=True)
class ClockCfg:
    speed_presets: tuple[float, ...] = (1.0, 7.0, 30.0)
    default_speed: float = 1.0


POSITION_CFG = PositionCfg()
CAMERA_CFG = CameraCfg()
NAVIGATION_CFG = NavigationCfg()
CLOCK_CFG = ClockCfg()


__all__ = [
    "CAMERA_CFG",
    "CLOCK_CFG",
    "NAVIGATION_CFG",
    "POSITION_CFG",
    "CameraCfg",
    "ClockCfg",
    "NavigationCfg",
    "PositionCfg",
]
