"""Fly-to maneuvers between catalog bodies."""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Callable, Optional

import numpy as np

from ..core.config import NAVIGATION_CFG, NavigationCfg
from ..core.model import BodyConfig
from ..data.bodies import BODY_DISPLAY_ORDER, arrival_zoom, get_body
from .camera import CameraController, perf_counter_ms
from .easing import clamp, ease_in_cubic, ease_in_out_quart, ease_out_cubic, lerp

log = logging.getLogger(__name__)

PositionLookup = Callable[[str], np.ndarray]


@dataclass
class FlightPlan:
    source: str
    destination: str
    start_time: float
    duration: float
    apex_zoom: float
    start_target: np.ndarray
    end_target: np.ndarray
    start_zoom: float
    end_zoom: float
    label_shown: bool = False

    def progress_at(self, now_ms: float) -> float:
        if self.duration <= 0.0:
            return 1.0
        return clamp((now_ms - self.start_time) / self.duration, 0.0, 1.0)

    def zoom_at(self, progress: float) -> float:
        """Pull back to the apex over the first half, settle in over the second."""

        if progress < 0.5:
            return lerp(self.start_zoom, self.apex_zoom, ease_out_cubic(progress * 2.0))
        return lerp(self.apex_zoom, self.end_zoom, ease_in_cubic((progress - 0.5) * 2.0))

    def target_at(self, progress: float) -> np.ndarray:
        return lerp(self.start_target, self.end_target, ease_in_out_quart(progress))


def journey_params(
    distance_m: float, cfg: NavigationCfg = NAVIGATION_CFG
) -> tuple[float, float]:
    """Return ``(apex_zoom, duration_ms)`` for a hop of ``distance_m`` metres."""

    log_dist = math.log10(max(distance_m, 1.0))
    duration = clamp(
        cfg.base_duration_ms + log_dist * cfg.duration_per_log_unit_ms,
        cfg.min_duration_ms,
        cfg.max_duration_ms,
    )
    apex_zoom = min(cfg.max_apex_zoom, log_dist + cfg.apex_offset)
    return apex_zoom, duration


class NavigationController:
    """Drives the camera through one fly-to at a time.

    A flight cannot be cancelled or redirected; :meth:`fly_to` is ignored
    while one is running. The destination label switches once, near the
    temporal midpoint, so the title does not flicker mid-flight.
    """

    def __init__(
        self,
        camera: CameraController,
        position_of: PositionLookup,
        cfg: NavigationCfg = NAVIGATION_CFG,
        *,
        time_source: Callable[[], float] = perf_counter_ms,
        on_body_change: Optional[Callable[[str], None]] = None,
        on_label_change: Optional[Callable[[BodyConfig], None]] = None,
    ) -> None:
        self._camera = camera
        self._position_of = position_of
        self._cfg = cfg
        self._time_source = time_source
        self._current_body = cfg.start_body
        self._displayed_body = cfg.start_body
        self._flight: Optional[FlightPlan] = None
        self._progress = 0.0
        self.on_body_change = on_body_change
        self.on_label_change = on_label_change

    @property
    def current_body(self) -> str:
        return self._current_body

    @property
    def target_body(self) -> Optional[str]:
        return self._flight.destination if self._flight else None

    @property
    def displayed_body(self) -> str:
        return self._displayed_body

    @property
    def flight(self) -> Optional[FlightPlan]:
        return self._flight

    @property
    def progress(self) -> float:
        return self._progress

    def is_navigating(self) -> bool:
        return self._flight is not None

    def set_position_lookup(self, position_of: PositionLookup) -> None:
        self._position_of = position_of

    def calculate_journey_params(self, from_body: str, to_body: str) -> tuple[float, float]:
        start = self._position_of(from_body)
        end = self._position_of(to_body)
        return journey_params(float(np.linalg.norm(end - start)), self._cfg)

    def fly_to(self, body: str, now_ms: Optional[float] = None) -> bool:
        if self._flight is not None:
            log.debug("Ignoring fly-to %s: flight to %s in progress", body, self._flight.destination)
            return False
        if body == self._current_body:
            return False
        get_body(body)

        apex_zoom, duration = self.calculate_journey_params(self._current_body, body)
        self._flight = FlightPlan(
            source=self._current_body,
            destination=body,
            start_time=self._time_source() if now_ms is None else now_ms,
            duration=duration,
            apex_zoom=apex_zoom,
            start_target=np.array(self._position_of(self._current_body), dtype=float),
            end_target=np.array(self._position_of(body), dtype=float),
            start_zoom=self._camera.log_distance,
            end_zoom=arrival_zoom(body),
        )
        self._progress = 0.0
        log.info(
            "Flying %s -> %s (%.0f ms, apex %.2f)",
            self._current_body,
            body,
            duration,
            apex_zoom,
        )
        return True

    def update(self, now_ms: Optional[float] = None) -> None:
        flight = self._flight
        if flight is None:
            return

        now = self._time_source() if now_ms is None else now_ms
        progress = flight.progress_at(now)
        self._progress = progress

        self._camera.set_target_immediate(flight.target_at(progress))
        self._camera.set_zoom(flight.zoom_at(progress))

        window_start, window_end = self._cfg.label_window
        if not flight.label_shown and window_start <= progress <= window_end:
            self._show_label(flight)

        if progress >= 1.0:
            if not flight.label_shown:
                self._show_label(flight)
            self._flight = None
            self._current_body = flight.destination
            log.info("Arrived at %s", flight.destination)
            if self.on_body_change is not None:
                self.on_body_change(self._current_body)

    def refresh_label(self) -> None:
        """Point the label back at the current body."""

        self._displayed_body = self._current_body
        if self.on_label_change is not None:
            self.on_label_change(get_body(self._current_body))

    def _show_label(self, flight: FlightPlan) -> None:
        flight.label_shown = True
        self._displayed_body = flight.destination
        if self.on_label_change is not None:
            self.on_label_change(get_body(flight.destination))


def bodies_by_group() -> dict[str, list[str]]:
    groups: dict[str, list[str]] = {"inner": [], "outer": []}
    for key in BODY_DISPLAY_ORDER:
        groups.setdefault(get_body(key).group, []).append(key)
    return groups


__all__ = ["FlightPlan", "NavigationController", "bodies_by_group", "journey_params"]
