"""Camera, fly-to navigation and scale-level transitions."""

from .camera import CameraController, perf_counter_ms
from .easing import (
    clamp,
    ease_in_cubic,
    ease_in_out_cubic,
    ease_in_out_quart,
    ease_out_cubic,
    lerp,
)
from .log_scale import (
    clamp_zoom,
    format_distance,
    log_distance_to_meters,
    meters_to_log_distance,
)
from .navigation import FlightPlan, NavigationController, bodies_by_group, journey_params
from .transitions import TransitionPlan, apply_transition, plan_transition

__all__ = [
    "CameraController",
    "FlightPlan",
    "NavigationController",
    "TransitionPlan",
    "apply_transition",
    "bodies_by_group",
    "clamp",
    "clamp_zoom",
    "ease_in_cubic",
    "ease_in_out_cubic",
    "ease_in_out_quart",
    "ease_out_cubic",
    "format_distance",
    "journey_params",
    "lerp",
    "log_distance_to_meters",
    "meters_to_log_distance",
    "perf_counter_ms",
    "plan_transition",
]
