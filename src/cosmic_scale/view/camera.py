from __future__ import annotations

import math
import time
from dataclasses import dataclass, field
from typing import Callable, Optional, Sequence

import numpy as np

from ..core.config import CAMERA_CFG, CameraCfg
from .easing import clamp, ease_in_out_cubic, lerp
from .log_scale import clamp_zoom, log_distance_to_meters


def perf_counter_ms() -> float:
    return time.perf_counter() * 1000.0


def _vec3(value: Sequence[float] | np.ndarray) -> np.ndarray:
    return np.array(value, dtype=float).reshape(3)


@dataclass
class CameraState:
    log_distance: float
    target_log_distance: float
    azimuth: float
    target_azimuth: float
    polar: float
    target_polar: float
    center: np.ndarray = field(default_factory=lambda: np.zeros(3, dtype=float))
    target_center: np.ndarray = field(default_factory=lambda: np.zeros(3, dtype=float))


@dataclass
class Transition:
    """Snapshot for an eased camera move; overrides damping while active."""

    active: bool = False
    start_time: float = 0.0
    duration: float = 0.0
    start_log_distance: float = 0.0
    start_azimuth: float = 0.0
    start_polar: float = 0.0
    start_center: np.ndarray = field(default_factory=lambda: np.zeros(3, dtype=float))
    target_log_distance: float = 0.0
    target_azimuth: float = 0.0
    target_polar: float = 0.0
    target_center: np.ndarray = field(default_factory=lambda: np.zeros(3, dtype=float))


class CameraController:
    """Orbit camera with damped manual control and eased cinematic moves.

    Distance is kept as ``log10`` of metres. Every :meth:`update` either
    advances an active transition or moves each current value a fixed
    fraction toward its target; the fraction is per frame, so convergence
    speed follows the frame rate.
    """

    def __init__(
        self,
        cfg: CameraCfg = CAMERA_CFG,
        *,
        time_source: Callable[[], float] = perf_counter_ms,
    ) -> None:
        self._cfg = cfg
        self._time_source = time_source
        self._min_zoom = cfg.min_zoom
        self._max_zoom = cfg.max_zoom
        self._min_polar = cfg.polar_margin
        self._max_polar = math.pi - cfg.polar_margin
        zoom = clamp_zoom(cfg.initial_zoom, cfg.min_zoom, cfg.max_zoom)
        self._state = CameraState(
            log_distance=zoom,
            target_log_distance=zoom,
            azimuth=0.0,
            target_azimuth=0.0,
            polar=cfg.initial_polar,
            target_polar=cfg.initial_polar,
        )
        self._transition = Transition()
        self.auto_rotate_enabled = True

    @property
    def min_zoom(self) -> float:
        return self._min_zoom

    @property
    def max_zoom(self) -> float:
        return self._max_zoom

    @property
    def damping(self) -> float:
        return self._cfg.damping

    @property
    def log_distance(self) -> float:
        return self._state.log_distance

    @property
    def target_log_distance(self) -> float:
        return self._state.target_log_distance

    @property
    def distance_meters(self) -> float:
        return log_distance_to_meters(self._state.log_distance)

    @property
    def azimuth(self) -> float:
        return self._state.azimuth

    @property
    def target_azimuth(self) -> float:
        return self._state.target_azimuth

    @property
    def polar(self) -> float:
        return self._state.polar

    @property
    def target_polar(self) -> float:
        return self._state.target_polar

    @property
    def center(self) -> np.ndarray:
        return self._state.center.copy()

    @property
    def target_center(self) -> np.ndarray:
        return self._state.target_center.copy()

    @property
    def is_transitioning(self) -> bool:
        return self._transition.active

    @property
    def position(self) -> np.ndarray:
        """Eye position: the look-at centre plus the spherical offset (y up)."""

        state = self._state
        radius = log_distance_to_meters(state.log_distance)
        sin_polar = math.sin(state.polar)
        offset = np.array(
            [
                radius * sin_polar * math.sin(state.azimuth),
                radius * math.cos(state.polar),
                radius * sin_polar * math.cos(state.azimuth),
            ]
        )
        return state.center + offset

    def _clamp_zoom(self, value: float) -> float:
        return clamp_zoom(value, self._min_zoom, self._max_zoom)

    def _clamp_polar(self, value: float) -> float:
        return clamp(value, self._min_polar, self._max_polar)

    # Manual control

    def zoom(self, delta: float) -> None:
        self._state.target_log_distance = self._clamp_zoom(self._state.target_log_distance + delta)

    def rotate(self, delta_azimuth: float, delta_polar: float) -> None:
        self.auto_rotate_enabled = False
        self._state.target_azimuth += delta_azimuth
        self._state.target_polar = self._clamp_polar(self._state.target_polar + delta_polar)

    def set_auto_rotate(self, enabled: bool) -> None:
        self.auto_rotate_enabled = enabled

    def set_zoom_limits(self, min_zoom: float, max_zoom: float) -> None:
        """Change the zoom bounds; current and target distances are re-clamped."""

        self._min_zoom = min_zoom
        self._max_zoom = max_zoom
        self._state.log_distance = self._clamp_zoom(self._state.log_distance)
        self._state.target_log_distance = self._clamp_zoom(self._state.target_log_distance)

    # Programmatic placement

    def set_target(self, position: Sequence[float] | np.ndarray) -> None:
        self._state.target_center[:] = _vec3(position)

    def set_target_immediate(self, position: Sequence[float] | np.ndarray) -> None:
        point = _vec3(position)
        self._state.target_center[:] = point
        self._state.center[:] = point

    def set_zoom(self, log_distance: float) -> None:
        zoom = self._clamp_zoom(log_distance)
        self._state.log_distance = zoom
        self._state.target_log_distance = zoom

    def set_angle_immediate(self, azimuth: float, polar: float) -> None:
        polar = self._clamp_polar(polar)
        self._state.azimuth = azimuth
        self._state.target_azimuth = azimuth
        self._state.polar = polar
        self._state.target_polar = polar

    def set_position_immediate(
        self,
        log_distance: float,
        polar: float,
        center: Sequence[float] | np.ndarray,
        azimuth: Optional[float] = None,
    ) -> None:
        """Jump to a pose with no animation; cancels any running transition."""

        self._transition.active = False
        self.set_zoom(log_distance)
        self.set_angle_immediate(self._state.azimuth if azimuth is None else azimuth, polar)
        self.set_target_immediate(center)

    # Cinematic transitions

    def animate_to(
        self,
        log_distance: float,
        polar: float,
        azimuth: float,
        center: Sequence[float] | np.ndarray,
        duration_ms: float,
        now_ms: Optional[float] = None,
    ) -> None:
        state = self._state
        self._transition = Transition(
            active=True,
            start_time=self._time_source() if now_ms is None else now_ms,
            duration=duration_ms,
            start_log_distance=state.log_distance,
            start_azimuth=state.azimuth,
            start_polar=state.polar,
            start_center=state.center.copy(),
            target_log_distance=self._clamp_zoom(log_distance),
            target_azimuth=azimuth,
            target_polar=self._clamp_polar(polar),
            target_center=_vec3(center),
        )

    def animate_zoom_to(
        self,
        log_distance: float,
        duration_ms: Optional[float] = None,
        now_ms: Optional[float] = None,
    ) -> None:
        duration = self._cfg.default_zoom_animation_ms if duration_ms is None else duration_ms
        state = self._state
        self.animate_to(log_distance, state.polar, state.azimuth, state.center, duration, now_ms)

    # Per-frame update

    def update(self, now_ms: Optional[float] = None) -> None:
        if self._transition.active:
            now = self._time_source() if now_ms is None else now_ms
            self._advance_transition(now)
            return

        state = self._state
        if self.auto_rotate_enabled:
            state.target_azimuth += self._cfg.auto_rotate_speed
            state.azimuth += self._cfg.auto_rotate_speed

        damping = self._cfg.damping
        state.log_distance += (state.target_log_distance - state.log_distance) * damping
        state.azimuth += (state.target_azimuth - state.azimuth) * damping
        state.polar += (state.target_polar - state.polar) * damping
        state.center += (state.target_center - state.center) * damping

    def _advance_transition(self, now: float) -> None:
        tr = self._transition
        state = self._state
        if tr.duration <= 0.0:
            progress = 1.0
        else:
            progress = clamp((now - tr.start_time) / tr.duration, 0.0, 1.0)
        eased = ease_in_out_cubic(progress)

        state.log_distance = lerp(tr.start_log_distance, tr.target_log_distance, eased)
        state.azimuth = lerp(tr.start_azimuth, tr.target_azimuth, eased)
        state.polar = lerp(tr.start_polar, tr.target_polar, eased)
        state.center[:] = lerp(tr.start_center, tr.target_center, eased)

        # Targets follow so damping resumes from rest once the move ends
        state.target_log_distance = state.log_distance
        state.target_azimuth = state.azimuth
        state.target_polar = state.polar
        state.target_center[:] = state.center

        if progress >= 1.0:
            tr.active = False


__all__ = ["CameraController", "CameraState", "Transition", "perf_counter_ms"]
