import math
import unittest
from datetime import datetime, timedelta, timezone

import numpy as np

from cosmic_scale.core.config import POSITION_CFG
from cosmic_scale.core.kepler import (
    date_from_days,
    days_since_j2000,
    eccentric_from_true,
    mean_anomaly_at,
    solve_kepler,
    true_anomaly,
)
from cosmic_scale.data.bodies import ORBITAL_ELEMENTS


class TestSolveKepler(unittest.TestCase):

    def test_residual_small_over_grid(self):
        for e in (0.0, 0.0167, 0.2, 0.5, 0.8, 0.9, 0.95, 0.98):
            for m in np.linspace(0.0, 2.0 * math.pi, 37, endpoint=False):
                E = solve_kepler(m, e)
                residual = E - e * math.sin(E) - m
                # E may come back shifted by a full turn for M near 2*pi
                residual = math.remainder(residual, 2.0 * math.pi)
                self.assertLess(abs(residual), 1e-6, f"e={e} M={m}")

    def test_circular_orbit_is_identity(self):
        for m in (0.1, 1.0, 3.0, 5.5):
            self.assertAlmostEqual(solve_kepler(m, 0.0), m, places=10)

    def test_negative_mean_anomaly_is_wrapped(self):
        e = 0.3
        E_neg = solve_kepler(-1.0, e)
        E_pos = solve_kepler(2.0 * math.pi - 1.0, e)
        self.assertAlmostEqual(E_neg, E_pos, places=9)

    def test_large_mean_anomaly_is_wrapped(self):
        e = 0.1
        self.assertAlmostEqual(solve_kepler(0.5 + 6 * math.pi, e), solve_kepler(0.5, e), places=9)

    def test_iteration_budget_returns_estimate(self):
        E = solve_kepler(1.0, 0.5, max_iterations=0)
        self.assertAlmostEqual(E, 1.0 + 0.5 * math.sin(1.0))


class TestAnomalies(unittest.TestCase):

    def test_true_anomaly_round_trip(self):
        for e in (0.0, 0.1, 0.6):
            for E in (0.2, 1.5, 3.0, 4.5, 6.0):
                nu = true_anomaly(E, e)
                self.assertAlmostEqual(eccentric_from_true(nu, e), E, places=9)

    def test_true_anomaly_at_apsides(self):
        self.assertAlmostEqual(true_anomaly(0.0, 0.5), 0.0)
        self.assertAlmostEqual(abs(true_anomaly(math.pi, 0.5)), math.pi)


class TestEpoch(unittest.TestCase):

    def test_epoch_is_day_zero(self):
        self.assertEqual(days_since_j2000(POSITION_CFG.j2000_epoch), 0.0)

    def test_naive_dates_are_utc(self):
        aware = datetime(2024, 3, 1, 6, 0, tzinfo=timezone.utc)
        naive = datetime(2024, 3, 1, 6, 0)
        self.assertEqual(days_since_j2000(aware), days_since_j2000(naive))

    def test_mean_anomaly_advances_with_mean_motion(self):
        earth = ORBITAL_ELEMENTS["earth"]
        later = POSITION_CFG.j2000_epoch + timedelta(days=10)
        self.assertAlmostEqual(mean_anomaly_at(earth, later), earth.m0 + 10 * earth.n)

    def test_day_counts_pass_through(self):
        earth = ORBITAL_ELEMENTS["earth"]
        self.assertEqual(days_since_j2000(1234.5), 1234.5)
        self.assertEqual(mean_anomaly_at(earth, 10.0), earth.m0 + 10 * earth.n)

    def test_date_from_days(self):
        date = datetime(2024, 3, 1, 6, 0, tzinfo=timezone.utc)
        self.assertEqual(date_from_days(days_since_j2000(date)), date)
        self.assertEqual(date_from_days(0.0), POSITION_CFG.j2000_epoch)

    def test_date_from_days_saturates(self):
        self.assertEqual(date_from_days(1e9), datetime.max.replace(tzinfo=timezone.utc))
        self.assertEqual(date_from_days(-1e9), datetime.min.replace(tzinfo=timezone.utc))
        self.assertEqual(date_from_days(float("inf")).year, 9999)


if __name__ == "__main__":
    unittest.main()
