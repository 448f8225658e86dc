"""Camera and clock setup applied when the scale level changes.

The screen is faded to black around a level change, so the camera is
placed with :meth:`CameraController.set_position_immediate` instead of
animated. Some levels start a slow zoom-out that is already moving when
the scene is revealed.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from ..core.config import CAMERA_CFG, CameraCfg
from ..core.positions import PositionMode
from ..core.scale_level import ScaleLevel
from ..core.timekeeping import SimulatedClock
from ..data.bodies import BODIES, DEFAULT_BODY_KEY, arrival_zoom
from .camera import CameraController
from .log_scale import meters_to_log_distance

ORIGIN = (0.0, 0.0, 0.0)

# Scene metres per light year and the radius framed at each galactic level
GALACTIC_FRAMING: dict[ScaleLevel, tuple[float, float]] = {
    ScaleLevel.LOCAL_BUBBLE: (500.0, 1e11),
    ScaleLevel.ORION_ARM: (5_000.0, 1e12),
    ScaleLevel.MILKY_WAY: (50_000.0, 5e13),
}
GALACTIC_POLAR: dict[ScaleLevel, float] = {
    ScaleLevel.LOCAL_BUBBLE: math.pi / 4,
    ScaleLevel.ORION_ARM: math.pi / 3.5,
    ScaleLevel.MILKY_WAY: math.pi / 5,
}


@dataclass(frozen=True)
class TransitionPlan:
    """Camera placement for a level plus the position frame and controls it shows."""

    level: ScaleLevel
    log_distance: float
    polar: float
    center: tuple[float, float, float] = ORIGIN
    azimuth: Optional[float] = None
    zoom_limits: tuple[float, float] = (CAMERA_CFG.min_zoom, CAMERA_CFG.max_zoom)
    position_mode: PositionMode = PositionMode.EARTH_RELATIVE
    auto_rotate: Optional[bool] = None
    follow_zoom: Optional[float] = None
    reset_clock: bool = False
    time_controls_visible: bool = False
    dock_visible: bool = True


def plan_transition(
    level: ScaleLevel,
    last_focused_body: str = DEFAULT_BODY_KEY,
    cfg: CameraCfg = CAMERA_CFG,
) -> TransitionPlan:
    default_limits = (cfg.min_zoom, cfg.max_zoom)

    if level is ScaleLevel.SOLAR_SYSTEM:
        return TransitionPlan(
            level=level,
            log_distance=12.2,
            polar=math.pi / 2.5,
            azimuth=0.0,
            zoom_limits=default_limits,
            position_mode=PositionMode.ORRERY,
            time_controls_visible=True,
        )

    if level is ScaleLevel.STELLAR:
        return TransitionPlan(
            level=level,
            log_distance=11.3,
            polar=math.pi / 4,
            zoom_limits=default_limits,
            position_mode=PositionMode.ORRERY,
            auto_rotate=True,
            follow_zoom=11.9,
            dock_visible=False,
        )

    if level is ScaleLevel.PLANET:
        body = last_focused_body if last_focused_body in BODIES else DEFAULT_BODY_KEY
        return TransitionPlan(
            level=level,
            log_distance=arrival_zoom(body),
            polar=cfg.initial_polar,
            zoom_limits=default_limits,
            position_mode=PositionMode.EARTH_RELATIVE,
            reset_clock=True,
        )

    radius_ly, meters_per_ly = GALACTIC_FRAMING[level]
    framing = meters_to_log_distance(radius_ly * meters_per_ly) + 0.4
    return TransitionPlan(
        level=level,
        log_distance=framing - 0.6,
        polar=GALACTIC_POLAR[level],
        zoom_limits=(framing - 1.5, framing + 1.0),
        auto_rotate=True,
        follow_zoom=framing,
        dock_visible=False,
    )


def apply_transition(
    plan: TransitionPlan,
    camera: CameraController,
    clock: Optional[SimulatedClock] = None,
    now_ms: Optional[float] = None,
) -> None:
    """Apply the camera and clock part of ``plan``; scene visibility is left to the caller."""

    camera.set_zoom_limits(*plan.zoom_limits)
    camera.set_position_immediate(plan.log_distance, plan.polar, plan.center, plan.azimuth)
    if plan.auto_rotate is not None:
        camera.set_auto_rotate(plan.auto_rotate)
    if plan.follow_zoom is not None:
        camera.animate_zoom_to(plan.follow_zoom, now_ms=now_ms)
    if plan.reset_clock and clock is not None:
        clock.reset()


__all__ = ["GALACTIC_FRAMING", "TransitionPlan", "apply_transition", "plan_transition"]
