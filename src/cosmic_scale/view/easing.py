"""Easing curves mapping progress in [0, 1] to eased progress in [0, 1]."""
from __future__ import annotations


def clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


def ease_in_out_cubic(t: float) -> float:
    return 4.0 * t * t * t if t < 0.5 else 1.0 - (-2.0 * t + 2.0) ** 3 / 2.0


def ease_in_out_quart(t: float) -> float:
    return 8.0 * t**4 if t < 0.5 else 1.0 - (-2.0 * t + 2.0) ** 4 / 2.0


def ease_out_cubic(t: float) -> float:
    return 1.0 - (1.0 - t) ** 3


def ease_in_cubic(t: float) -> float:
    return t * t * t


def lerp(a, b, t: float):
    """Linear interpolation; works for floats and numpy arrays alike."""

    return a + (b - a) * t


__all__ = [
    "clamp",
    "ease_in_cubic",
    "ease_in_out_cubic",
    "ease_in_out_quart",
    "ease_out_cubic",
    "lerp",
]
