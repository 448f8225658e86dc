"""Wall-clock frame timing and the simulated date."""
from __future__ import annotations

import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable

from .config import CLOCK_CFG, ClockCfg
from .kepler import date_from_days, days_since_j2000


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class FrameTimer:
    """High resolution timer based on :func:`time.perf_counter`."""

    last_time: float = field(default_factory=time.perf_counter)

    def tick(self) -> float:
        now = time.perf_counter()
        dt = now - self.last_time
        self.last_time = now
        return dt


class SimulatedClock:
    """Date that advances independently of the wall clock.

    Starts paused at the current wall-clock time. ``update`` only moves the
    date while playing; the day steps always apply. The state is a plain
    day count since J2000, so any speed or step is accepted; :attr:`date`
    saturates at the ends of the ``datetime`` range while :attr:`days` keeps
    counting.
    """

    def __init__(
        self,
        now: Callable[[], datetime] = utc_now,
        cfg: ClockCfg = CLOCK_CFG,
    ) -> None:
        self._now = now
        self._cfg = cfg
        self._days = days_since_j2000(now())
        self._paused = True
        self._speed = cfg.default_speed

    @property
    def is_paused(self) -> bool:
        return self._paused

    @property
    def days(self) -> float:
        return self._days

    @property
    def date(self) -> datetime:
        return date_from_days(self._days)

    @property
    def speed(self) -> float:
        return self._speed

    @property
    def speed_label(self) -> str:
        if self._speed == 1:
            return "1 day/s"
        if self._speed == 7:
            return "1 week/s"
        if self._speed == 30:
            return "1 month/s"
        return f"{self._speed:g} days/s"

    def set_speed(self, days_per_second: float) -> None:
        self._speed = days_per_second

    def cycle_speed(self) -> float:
        """Switch to the next preset speed and return it."""

        presets = self._cfg.speed_presets
        try:
            index = presets.index(self._speed)
        except ValueError:
            index = -1
        self._speed = presets[(index + 1) % len(presets)]
        return self._speed

    def play(self) -> None:
        self._paused = False

    def pause(self) -> None:
        self._paused = True

    def toggle(self) -> None:
        self._paused = not self._paused

    def reset(self) -> None:
        self._days = days_since_j2000(self._now())
        self._paused = True

    def update(self, delta_ms: float) -> None:
        if self._paused:
            return
        self._days += (delta_ms / 1000.0) * self._speed

    def step_forward(self, days: float = 1) -> None:
        self._days += days

    def step_backward(self, days: float = 1) -> None:
        self._days -= days


__all__ = ["FrameTimer", "SimulatedClock", "utc_now"]
