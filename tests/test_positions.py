import math
import unittest
from datetime import datetime, timedelta, timezone

import numpy as np

from cosmic_scale.core.config import POSITION_CFG
from cosmic_scale.core.kepler import mean_anomaly_at
from cosmic_scale.core.positions import (
    PositionMode,
    all_body_positions,
    body_position,
    earth_relative_position,
    heliocentric_position,
    moon_offset,
    orbit_path,
    orrery_compress,
    orrery_position,
    orrery_scale,
    position_from_mean_anomaly,
)
from cosmic_scale.data.bodies import BODY_DISPLAY_ORDER, ORBITAL_ELEMENTS, UnknownBodyError

DATE = datetime(2024, 6, 1, tzinfo=timezone.utc)
AU = POSITION_CFG.au_in_meters


class TestHeliocentric(unittest.TestCase):

    def test_deterministic(self):
        mars = ORBITAL_ELEMENTS["mars"]
        np.testing.assert_array_equal(
            heliocentric_position(mars, DATE), heliocentric_position(mars, DATE)
        )

    def test_distance_within_apsides(self):
        for key, elements in ORBITAL_ELEMENTS.items():
            r = np.linalg.norm(heliocentric_position(elements, DATE))
            self.assertGreaterEqual(r, elements.a * (1 - elements.e) * (1 - 1e-9), key)
            self.assertLessEqual(r, elements.a * (1 + elements.e) * (1 + 1e-9), key)

    def test_earth_stays_in_ecliptic(self):
        earth = heliocentric_position(ORBITAL_ELEMENTS["earth"], DATE)
        self.assertAlmostEqual(earth[2], 0.0, delta=1.0)


class TestEarthRelative(unittest.TestCase):

    def test_compression_preserves_direction(self):
        jupiter = ORBITAL_ELEMENTS["jupiter"]
        raw = heliocentric_position(jupiter, DATE) - heliocentric_position(
            ORBITAL_ELEMENTS["earth"], DATE
        )
        compressed = earth_relative_position(jupiter, DATE)
        np.testing.assert_allclose(compressed, raw * POSITION_CFG.distance_compression)

    def test_distance_ratios_are_kept(self):
        venus = body_position("venus", DATE)
        saturn = body_position("saturn", DATE)
        raw_venus = heliocentric_position(ORBITAL_ELEMENTS["venus"], DATE) - heliocentric_position(
            ORBITAL_ELEMENTS["earth"], DATE
        )
        raw_saturn = heliocentric_position(
            ORBITAL_ELEMENTS["saturn"], DATE
        ) - heliocentric_position(ORBITAL_ELEMENTS["earth"], DATE)
        self.assertAlmostEqual(
            np.linalg.norm(saturn) / np.linalg.norm(venus),
            np.linalg.norm(raw_saturn) / np.linalg.norm(raw_venus),
        )

    def test_earth_at_origin_and_sun_opposite(self):
        np.testing.assert_array_equal(body_position("earth", DATE), np.zeros(3))
        earth = heliocentric_position(ORBITAL_ELEMENTS["earth"], DATE)
        np.testing.assert_allclose(
            body_position("sun", DATE), -earth * POSITION_CFG.distance_compression
        )

    def test_moon_is_earth_plus_offset(self):
        moon = body_position("moon", DATE)
        self.assertAlmostEqual(np.linalg.norm(moon), POSITION_CFG.moon_distance, delta=1.0)


class TestOrrery(unittest.TestCase):

    def test_scale_is_monotonic_and_compressive(self):
        distances = [0.39, 1.0, 5.2, 30.0]
        scaled = [orrery_scale(d) for d in distances]
        self.assertEqual(scaled, sorted(scaled))
        for d, s in zip(distances[1:], scaled[1:]):
            self.assertLessEqual(s, d)
        # outer/inner ratio shrinks
        self.assertLess(scaled[-1] / scaled[0], distances[-1] / distances[0])

    def test_zero_vector_unchanged(self):
        np.testing.assert_array_equal(orrery_compress(np.zeros(3)), np.zeros(3))

    def test_compress_keeps_direction(self):
        vec = np.array([4.0, 0.0, 3.0]) * AU
        out = orrery_compress(vec)
        np.testing.assert_allclose(out / np.linalg.norm(out), vec / np.linalg.norm(vec))
        self.assertAlmostEqual(np.linalg.norm(out) / AU, math.sqrt(5.0), places=9)

    def test_sun_at_origin(self):
        np.testing.assert_array_equal(body_position("sun", DATE, PositionMode.ORRERY), np.zeros(3))

    def test_planets_keep_their_order(self):
        keys = ["mercury", "venus", "earth", "mars", "jupiter", "saturn", "uranus", "neptune"]
        radii = [np.linalg.norm(body_position(k, DATE, PositionMode.ORRERY)) for k in keys]
        self.assertEqual(radii, sorted(radii))


class TestOrbitPath(unittest.TestCase):

    def test_shape_and_closed(self):
        path = orbit_path(ORBITAL_ELEMENTS["mars"], segments=16)
        self.assertEqual(path.shape, (17, 3))
        np.testing.assert_allclose(path[0], path[-1], atol=1e-9)

    def test_default_segment_count(self):
        path = orbit_path(ORBITAL_ELEMENTS["venus"])
        self.assertEqual(path.shape, (POSITION_CFG.orbit_path_segments + 1, 3))

    def test_body_lies_on_its_path(self):
        mars = ORBITAL_ELEMENTS["mars"]
        m = mean_anomaly_at(mars, DATE)
        expected = orrery_compress(position_from_mean_anomaly(mars, m))
        np.testing.assert_allclose(orrery_position(mars, DATE), expected)

        # a path sampled at exactly this anomaly hits the body
        segments = 64
        step = 2.0 * math.pi / segments
        index = round((m % (2.0 * math.pi)) / step) % segments
        sample = orrery_compress(position_from_mean_anomaly(mars, index * step))
        np.testing.assert_allclose(orbit_path(mars, segments)[index], sample)


class TestMoon(unittest.TestCase):

    def test_offset_radius_and_period(self):
        offset = moon_offset(DATE)
        self.assertAlmostEqual(np.linalg.norm(offset), POSITION_CFG.moon_distance, delta=1.0)
        later = moon_offset(DATE + timedelta(days=POSITION_CFG.lunar_month_days))
        np.testing.assert_allclose(later, offset, atol=1e3)


class TestAllBodies(unittest.TestCase):

    def test_covers_catalog(self):
        positions = all_body_positions(DATE)
        self.assertEqual(list(positions), BODY_DISPLAY_ORDER)

    def test_subset(self):
        positions = all_body_positions(DATE, PositionMode.ORRERY, keys=["mars"])
        self.assertEqual(list(positions), ["mars"])

    def test_unknown_body(self):
        with self.assertRaises(UnknownBodyError):
            body_position("pluto", DATE)
        with self.assertRaises(KeyError):
            body_position("pluto", DATE, PositionMode.ORRERY)

    def test_day_count_matches_date(self):
        days = (DATE - POSITION_CFG.j2000_epoch) / timedelta(days=1)
        for mode in PositionMode:
            np.testing.assert_allclose(
                body_position("moon", days, mode), body_position("moon", DATE, mode), rtol=1e-12
            )

    def test_far_future_day_count_is_finite(self):
        for mode in PositionMode:
            positions = all_body_positions(5e6, mode)
            self.assertTrue(np.all(np.isfinite(list(positions.values()))))


if __name__ == "__main__":
    unittest.main()
