import dataclasses
import math
import unittest
from datetime import datetime, timezone

import numpy as np

from cosmic_scale.core.config import CAMERA_CFG
from cosmic_scale.core.positions import PositionMode
from cosmic_scale.core.scale_level import LEVELS, ScaleLevel
from cosmic_scale.core.timekeeping import SimulatedClock
from cosmic_scale.view.camera import CameraController
from cosmic_scale.view.transitions import GALACTIC_FRAMING, apply_transition, plan_transition


class FakeTime:
    def __init__(self, now=0.0):
        self.now = now

    def __call__(self):
        return self.now


class TestPlanTransition(unittest.TestCase):

    def test_solar_system(self):
        plan = plan_transition(ScaleLevel.SOLAR_SYSTEM)
        self.assertEqual(plan.log_distance, 12.2)
        self.assertEqual(plan.azimuth, 0.0)
        self.assertIs(plan.position_mode, PositionMode.ORRERY)
        self.assertTrue(plan.time_controls_visible)
        self.assertIsNone(plan.follow_zoom)

    def test_stellar_keeps_drifting(self):
        plan = plan_transition(ScaleLevel.STELLAR)
        self.assertTrue(plan.auto_rotate)
        self.assertGreater(plan.follow_zoom, plan.log_distance)
        self.assertFalse(plan.dock_visible)

    def test_planet_uses_last_body(self):
        plan = plan_transition(ScaleLevel.PLANET, "jupiter")
        self.assertEqual(plan.log_distance, 8.6)
        self.assertTrue(plan.reset_clock)
        self.assertIs(plan.position_mode, PositionMode.EARTH_RELATIVE)

    def test_planet_falls_back_to_earth(self):
        plan = plan_transition(ScaleLevel.PLANET, "pluto")
        self.assertEqual(plan.log_distance, 7.5)

    def test_galactic_levels_frame_outward(self):
        framings = []
        for level in (ScaleLevel.LOCAL_BUBBLE, ScaleLevel.ORION_ARM, ScaleLevel.MILKY_WAY):
            plan = plan_transition(level)
            low, high = plan.zoom_limits
            self.assertLessEqual(low, plan.log_distance)
            self.assertLessEqual(plan.follow_zoom, high)
            self.assertLess(plan.log_distance, plan.follow_zoom)
            framings.append(plan.follow_zoom)
        self.assertEqual(framings, sorted(framings))

    def test_local_bubble_framing(self):
        radius, scale = GALACTIC_FRAMING[ScaleLevel.LOCAL_BUBBLE]
        plan = plan_transition(ScaleLevel.LOCAL_BUBBLE)
        self.assertAlmostEqual(plan.follow_zoom, math.log10(radius * scale) + 0.4)

    def test_every_level_has_a_plan(self):
        for level in LEVELS:
            self.assertIs(plan_transition(level).level, level)


class TestApplyTransition(unittest.TestCase):

    def setUp(self):
        self.time = FakeTime(500.0)
        self.camera = CameraController(time_source=self.time)

    def test_solar_system_is_placed_immediately(self):
        apply_transition(plan_transition(ScaleLevel.SOLAR_SYSTEM), self.camera)
        self.assertFalse(self.camera.is_transitioning)
        self.assertEqual(self.camera.log_distance, 12.2)
        self.assertEqual(self.camera.azimuth, 0.0)
        self.assertAlmostEqual(self.camera.polar, math.pi / 2.5)

    def test_follow_zoom_animates(self):
        plan = plan_transition(ScaleLevel.MILKY_WAY)
        apply_transition(plan, self.camera)
        self.assertEqual(self.camera.log_distance, plan.log_distance)
        self.assertTrue(self.camera.is_transitioning)
        self.assertTrue(self.camera.auto_rotate_enabled)
        self.time.now += CAMERA_CFG.default_zoom_animation_ms
        self.camera.update()
        self.assertAlmostEqual(self.camera.log_distance, plan.follow_zoom)

    def test_zoom_limits_restored_on_return(self):
        apply_transition(plan_transition(ScaleLevel.ORION_ARM), self.camera)
        apply_transition(plan_transition(ScaleLevel.PLANET, "earth"), self.camera)
        self.assertEqual(self.camera.min_zoom, CAMERA_CFG.min_zoom)
        self.assertEqual(self.camera.max_zoom, CAMERA_CFG.max_zoom)
        self.assertEqual(self.camera.log_distance, 7.5)

    def test_planet_resets_clock(self):
        start = datetime(2024, 1, 1, tzinfo=timezone.utc)
        clock = SimulatedClock(now=lambda: start)
        clock.step_forward(40)
        clock.play()
        apply_transition(plan_transition(ScaleLevel.PLANET), self.camera, clock)
        self.assertEqual(clock.date, start)
        self.assertTrue(clock.is_paused)

    def test_center_applied(self):
        plan = plan_transition(ScaleLevel.PLANET)
        plan = dataclasses.replace(plan, center=(1.0, 2.0, 3.0))
        apply_transition(plan, self.camera)
        np.testing.assert_array_equal(self.camera.center, [1.0, 2.0, 3.0])


if __name__ == "__main__":
    unittest.main()
