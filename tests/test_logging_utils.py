import csv
import json
import tempfile
import unittest
from pathlib import Path

from cosmic_scale.core.logging_utils import RunLogger, allocate_run_dir


class TestRunLogger(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)

    def tearDown(self):
        self._tmp.cleanup()

    def test_creates_run_files_and_marker(self):
        with RunLogger(self.root, run_id="alpha") as logger:
            self.assertEqual(logger.run_dir, self.root / "alpha")
        self.assertTrue((self.root / "alpha" / "timeseries.csv").exists())
        self.assertTrue((self.root / "alpha" / "events.csv").exists())
        self.assertEqual((self.root / "last_run.txt").read_text(encoding="utf-8"), "alpha")

    def test_run_ids_do_not_collide(self):
        first = RunLogger(self.root, run_id="beta")
        second = RunLogger(self.root, run_id="beta")
        first.close()
        second.close()
        self.assertEqual(second.run_id, "beta_1")
        self.assertEqual((self.root / "last_run.txt").read_text(encoding="utf-8"), "beta_1")

    def test_timestamped_ids_get_numbered_suffixes(self):
        first = allocate_run_dir(self.root)
        (self.root / f"{first.name}_01").mkdir()
        second = allocate_run_dir(self.root)
        self.assertTrue(first.name.endswith("_run"))
        if second.name.startswith(first.name):
            self.assertEqual(second.name, f"{first.name}_02")
        self.assertTrue(second.is_dir())

    def test_rows_are_buffered_until_close(self):
        logger = RunLogger(self.root, run_id="gamma", timeseries_flush_threshold=10)
        logger.log_frame(1.0, 0.5, 7.5, 0.0, 1.4, (0.0, 0.0, 0.0), 8918.5)
        with logger.timeseries_path.open() as fh:
            self.assertEqual(len(fh.readlines()), 1)
        logger.close()
        logger.close()
        with logger.timeseries_path.open(newline="") as fh:
            rows = list(csv.DictReader(fh))
        self.assertEqual(len(rows), 1)
        self.assertEqual(rows[0]["log_distance"], "7.5")
        self.assertEqual(rows[0]["sim_days"], "8918.5")

    def test_event_values_survive_csv(self):
        with RunLogger(self.root, run_id="delta") as logger:
            logger.log_event(12.5, "FlyTo", "mars", "planet", {"body": "mars", "x": 1})
            logger.log_event(13, "TimeToggle", "earth", "solar-system")
            logger.log_event(14, "ToggleSatellites", "earth", "planet", True)
        with logger.events_path.open(newline="") as fh:
            rows = list(csv.DictReader(fh))
        self.assertEqual(json.loads(rows[0]["details"]), {"body": "mars", "x": 1})
        self.assertEqual(rows[0]["t"], "12.5")
        self.assertEqual(rows[1]["details"], "")
        self.assertEqual(rows[2]["details"], "True")

    def test_meta(self):
        with RunLogger(self.root, run_id="eps") as logger:
            logger.write_meta({"bodies": ["mars"], "created": Path("x")})
        meta = json.loads(logger.meta_path.read_text(encoding="utf-8"))
        self.assertEqual(meta["bodies"], ["mars"])
        self.assertEqual(meta["created"], "x")


if __name__ == "__main__":
    unittest.main()
