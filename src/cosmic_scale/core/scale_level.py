"""Discrete zoom tiers, from a single planet out to the whole galaxy."""
from __future__ import annotations

from enum import Enum


class ScaleLevel(Enum):
    PLANET = "planet"
    SOLAR_SYSTEM = "solar-system"
    STELLAR = "stellar"
    LOCAL_BUBBLE = "local-bubble"
    ORION_ARM = "orion-arm"
    MILKY_WAY = "milky-way"


LEVELS: tuple[ScaleLevel, ...] = tuple(ScaleLevel)


class ScaleLevelState:
    """Current tier plus the body to return to at the planet tier."""

    def __init__(self, last_focused_body: str = "earth") -> None:
        self._current = ScaleLevel.PLANET
        self._last_focused_body = last_focused_body

    @property
    def current(self) -> ScaleLevel:
        return self._current

    @property
    def index(self) -> int:
        return LEVELS.index(self._current)

    @property
    def last_focused_body(self) -> str:
        return self._last_focused_body

    def set_last_focused_body(self, body: str) -> None:
        self._last_focused_body = body

    def can_go_up(self) -> bool:
        return self.index < len(LEVELS) - 1

    def can_go_down(self) -> bool:
        return self.index > 0

    def go_up(self) -> bool:
        if not self.can_go_up():
            return False
        self._current = LEVELS[self.index + 1]
        return True

    def go_down(self) -> bool:
        if not self.can_go_down():
            return False
        self._current = LEVELS[self.index - 1]
        return True

    def is_planet_mode(self) -> bool:
        return self._current is ScaleLevel.PLANET

    def is_orrery_mode(self) -> bool:
        return self._current is ScaleLevel.SOLAR_SYSTEM

    def is_stellar_mode(self) -> bool:
        return self._current is ScaleLevel.STELLAR

    def is_local_bubble_mode(self) -> bool:
        return self._current is ScaleLevel.LOCAL_BUBBLE

    def is_orion_arm_mode(self) -> bool:
        return self._current is ScaleLevel.ORION_ARM

    def is_milky_way_mode(self) -> bool:
        return self._current is ScaleLevel.MILKY_WAY

    def uses_heliocentric_positions(self) -> bool:
        return self._current in (ScaleLevel.SOLAR_SYSTEM, ScaleLevel.STELLAR)


__all__ = ["LEVELS", "ScaleLevel", "ScaleLevelState"]
