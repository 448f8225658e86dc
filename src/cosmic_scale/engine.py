"""Per-frame driver tying the clock, positions, camera and navigation together.

UI input arrives as small command objects handed to :func:`dispatch`; the
frame loop then updates everything in a fixed order and returns a
read-only :class:`FrameSnapshot` for the renderer.
"""
from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional, Union

import numpy as np

from .core.kepler import date_from_days, days_since_j2000
from .core.logging_utils import RunLogger
from .core.model import BodyConfig
from .core.positions import PositionMode, all_body_positions, body_position
from .core.scale_level import ScaleLevel, ScaleLevelState
from .core.timekeeping import FrameTimer, SimulatedClock, utc_now
from .data.bodies import DEFAULT_BODY_KEY
from .view.camera import CameraController, perf_counter_ms
from .view.navigation import NavigationController
from .view.transitions import TransitionPlan, apply_transition, plan_transition

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class FlyTo:
    body: str


@dataclass(frozen=True)
class ChangeScaleLevel:
    direction: str  # "up" or "down"


@dataclass(frozen=True)
class Zoom:
    delta: float


@dataclass(frozen=True)
class Rotate:
    delta_azimuth: float
    delta_polar: float


@dataclass(frozen=True)
class ToggleSatellites:
    enabled: bool


@dataclass(frozen=True)
class TimeToggle:
    pass


@dataclass(frozen=True)
class TimePlay:
    pass


@dataclass(frozen=True)
class TimePause:
    pass


@dataclass(frozen=True)
class TimeReset:
    pass


@dataclass(frozen=True)
class TimeStepForward:
    days: Optional[float] = None


@dataclass(frozen=True)
class TimeStepBackward:
    days: Optional[float] = None


@dataclass(frozen=True)
class TimeChangeSpeed:
    pass


@dataclass(frozen=True)
class TimeSetSpeed:
    days_per_second: float


Command = Union[
    FlyTo,
    ChangeScaleLevel,
    Zoom,
    Rotate,
    ToggleSatellites,
    TimeToggle,
    TimePlay,
    TimePause,
    TimeReset,
    TimeStepForward,
    TimeStepBackward,
    TimeChangeSpeed,
    TimeSetSpeed,
]


@dataclass(frozen=True)
class FrameSnapshot:
    t_ms: float
    log_distance: float
    azimuth: float
    polar: float
    center: tuple[float, float, float]
    camera_position: tuple[float, float, float]
    level: ScaleLevel
    date: datetime
    sim_days: float
    current_body: str
    displayed_body: str
    last_focused_body: str
    is_navigating: bool
    flight_progress: float
    clock_paused: bool
    clock_speed: float
    satellites_visible: bool
    time_controls_visible: bool
    dock_visible: bool
    positions: dict[str, tuple[float, float, float]]


def _as_tuple(vector: np.ndarray) -> tuple[float, float, float]:
    return (float(vector[0]), float(vector[1]), float(vector[2]))


class Engine:
    """Owns one instance of every stateful component and updates them in order."""

    def __init__(
        self,
        *,
        wall_clock: Callable[[], datetime] = utc_now,
        time_source: Callable[[], float] = perf_counter_ms,
        recorder: Optional[RunLogger] = None,
    ) -> None:
        self._wall_clock = wall_clock
        self._time_source = time_source
        self.clock = SimulatedClock(now=wall_clock)
        self.levels = ScaleLevelState(last_focused_body=DEFAULT_BODY_KEY)
        self._plan = plan_transition(self.levels.current, self.levels.last_focused_body)
        self.camera = CameraController(time_source=time_source)
        self.navigation = NavigationController(
            self.camera,
            self.position_of,
            time_source=time_source,
            on_body_change=self._on_body_change,
            on_label_change=self._on_label_change,
        )
        self.recorder = recorder
        self.satellites_enabled = True
        self._positions: dict[str, np.ndarray] = {}
        self._frame_timer = FrameTimer()
        self._start_ms = time_source()
        self._last_now_ms = self._start_ms

    def now_ms(self) -> float:
        return self._time_source()

    @property
    def plan(self) -> TransitionPlan:
        """Setup of the current scale level: position frame and visible controls."""

        return self._plan

    @property
    def position_mode(self) -> PositionMode:
        return self._plan.position_mode

    @property
    def satellites_visible(self) -> bool:
        return (
            self.satellites_enabled
            and self.levels.is_planet_mode()
            and self.navigation.current_body == "earth"
        )

    def position_days(self) -> float:
        """Simulated day count at heliocentric levels, wall-clock time otherwise."""

        if self.levels.uses_heliocentric_positions():
            return self.clock.days
        return days_since_j2000(self._wall_clock())

    def position_of(self, key: str) -> np.ndarray:
        cached = self._positions.get(key)
        if cached is not None:
            return cached.copy()
        return body_position(key, self.position_days(), self.position_mode)

    def _on_body_change(self, body: str) -> None:
        self.levels.set_last_focused_body(body)
        self.record_event("arrived", body=body)

    def _on_label_change(self, body: BodyConfig) -> None:
        self.record_event("label", body=body.key)

    def fly_to(self, body: str, now_ms: Optional[float] = None) -> bool:
        if not self._plan.dock_visible:
            log.debug("Ignoring fly-to %s at %s level", body, self.levels.current.value)
            return False
        return self.navigation.fly_to(body, now_ms)

    def change_scale_level(self, direction: str, now_ms: Optional[float] = None) -> bool:
        if self.navigation.is_navigating():
            log.debug("Ignoring scale change %s during flight", direction)
            return False
        if direction == "up":
            changed = self.levels.go_up()
        elif direction == "down":
            changed = self.levels.go_down()
        else:
            raise ValueError(f"Unknown scale direction: {direction!r}")
        if not changed:
            return False

        level = self.levels.current
        plan = plan_transition(level, self.levels.last_focused_body)
        if level is ScaleLevel.PLANET:
            target = body_position(
                self.levels.last_focused_body, self._wall_clock(), PositionMode.EARTH_RELATIVE
            )
            plan = dataclasses.replace(plan, center=_as_tuple(target))
        self._plan = plan
        apply_transition(plan, self.camera, self.clock, now_ms)
        self._positions = {}
        if level is ScaleLevel.PLANET:
            self.navigation.refresh_label()
        log.info("Scale level -> %s", level.value)
        return True

    def frame(self, delta_ms: float, now_ms: Optional[float] = None) -> FrameSnapshot:
        now = self._time_source() if now_ms is None else now_ms
        self._last_now_ms = now

        if self.levels.uses_heliocentric_positions():
            self.clock.update(delta_ms)

        days = self.position_days()
        self._positions = all_body_positions(days, self.position_mode)

        self.camera.update(now)
        self.navigation.update(now)

        snapshot = self.snapshot(now, days)
        if self.recorder is not None:
            self.recorder.log_frame(
                snapshot.t_ms,
                snapshot.flight_progress,
                snapshot.log_distance,
                snapshot.azimuth,
                snapshot.polar,
                snapshot.center,
                snapshot.sim_days,
            )
        return snapshot

    def tick(self) -> FrameSnapshot:
        """Run one frame using the measured wall-clock delta."""

        return self.frame(self._frame_timer.tick() * 1000.0)

    def snapshot(self, now_ms: Optional[float] = None, days: Optional[float] = None) -> FrameSnapshot:
        now = self._last_now_ms if now_ms is None else now_ms
        days = self.position_days() if days is None else days
        navigation = self.navigation
        return FrameSnapshot(
            t_ms=now - self._start_ms,
            log_distance=self.camera.log_distance,
            azimuth=self.camera.azimuth,
            polar=self.camera.polar,
            center=_as_tuple(self.camera.center),
            camera_position=_as_tuple(self.camera.position),
            level=self.levels.current,
            date=date_from_days(days),
            sim_days=days,
            current_body=navigation.current_body,
            displayed_body=navigation.displayed_body,
            last_focused_body=self.levels.last_focused_body,
            is_navigating=navigation.is_navigating(),
            flight_progress=navigation.progress,
            clock_paused=self.clock.is_paused,
            clock_speed=self.clock.speed,
            satellites_visible=self.satellites_visible,
            time_controls_visible=self._plan.time_controls_visible,
            dock_visible=self._plan.dock_visible,
            positions={key: _as_tuple(pos) for key, pos in self._positions.items()},
        )

    def record_event(
        self,
        kind: str,
        body: Optional[str] = None,
        details: Optional[dict] = None,
        now_ms: Optional[float] = None,
    ) -> None:
        if self.recorder is None:
            return
        now = self._last_now_ms if now_ms is None else now_ms
        self.recorder.log_event(
            now - self._start_ms,
            kind,
            body or self.navigation.current_body,
            self.levels.current.value,
            details,
        )


def dispatch(engine: Engine, command: Command, now_ms: Optional[float] = None) -> bool:
    """Apply ``command`` to ``engine``; returns whether it changed anything."""

    if now_ms is None:
        now_ms = engine.now_ms()
    clock = engine.clock
    handled = True

    if isinstance(command, FlyTo):
        handled = engine.fly_to(command.body, now_ms)
    elif isinstance(command, ChangeScaleLevel):
        handled = engine.change_scale_level(command.direction, now_ms)
    elif isinstance(command, Zoom):
        engine.camera.zoom(command.delta)
    elif isinstance(command, Rotate):
        engine.camera.rotate(command.delta_azimuth, command.delta_polar)
    elif isinstance(command, ToggleSatellites):
        engine.satellites_enabled = command.enabled
    elif isinstance(command, TimeToggle):
        clock.toggle()
    elif isinstance(command, TimePlay):
        clock.play()
    elif isinstance(command, TimePause):
        clock.pause()
    elif isinstance(command, TimeReset):
        clock.reset()
    elif isinstance(command, TimeStepForward):
        clock.step_forward(clock.speed if command.days is None else command.days)
    elif isinstance(command, TimeStepBackward):
        clock.step_backward(clock.speed if command.days is None else command.days)
    elif isinstance(command, TimeChangeSpeed):
        clock.cycle_speed()
    elif isinstance(command, TimeSetSpeed):
        clock.set_speed(command.days_per_second)
    else:
        raise TypeError(f"Unsupported command: {command!r}")

    if handled:
        engine.record_event(
            type(command).__name__, details=dataclasses.asdict(command) or None, now_ms=now_ms
        )
    return handled


__all__ = [
    "ChangeScaleLevel",
    "Command",
    "Engine",
    "FlyTo",
    "FrameSnapshot",
    "Rotate",
    "TimeChangeSpeed",
    "TimePause",
    "TimePlay",
    "TimeReset",
    "TimeSetSpeed",
    "TimeStepBackward",
    "TimeStepForward",
    "TimeToggle",
    "ToggleSatellites",
    "Zoom",
    "dispatch",
]
