import math
import unittest

from ptgrading.core.entities import GeoFix
from ptgrading.core.service.geometry import EARTH_RADIUS_METERS
from ptgrading.core.service.running_grader import RunningGrader, format_pace
from ptgrading.utilities.validators.config_validator import RunningConfig

START_LAT = 38.0
START_LON = -77.0


def fix_north(meters, seconds):
    """Fix ``meters`` due north of the start, ``seconds`` after it."""
    return GeoFix(
        latitude=START_LAT + math.degrees(meters / EARTH_RADIUS_METERS),
        longitude=START_LON,
        timestamp_ms=int(seconds * 1000),
    )


class TestRunningGrader(unittest.TestCase):
    def setUp(self):
        """Set up a started run."""
        self.config = RunningConfig()
        self.grader = RunningGrader(self.config)
        self.grader.start_run()

    def test_small_moves_are_ignored(self):
        self.grader.update_fix(fix_north(0, 0))
        snapshot = self.grader.update_fix(fix_north(3, 10))

        self.assertEqual(snapshot.distance_meters, 0.0)
        self.assertEqual(snapshot.pace_formatted, "00:00")

    def test_distance_and_pace(self):
        self.grader.update_fix(fix_north(0, 0))
        snapshot = self.grader.update_fix(fix_north(50, 10))

        self.assertAlmostEqual(snapshot.distance_meters, 50.0, places=4)
        self.assertRegex(snapshot.pace_formatted, r"^\d{2}:\d{2}$")
        # 10 s over 50 m is 5.36 min/mile.
        self.assertEqual(snapshot.pace_formatted, "05:21")

    def test_fast_move_is_penalized_but_kept(self):
        self.grader.update_fix(fix_north(0, 0))
        snapshot = self.grader.update_fix(fix_north(50, 10))

        self.assertAlmostEqual(snapshot.distance_meters, 50.0, places=4)
        self.assertEqual(snapshot.form_score, 100 - self.config.SPEED_PENALTY)

    def test_speed_penalty_is_capped(self):
        grader = RunningGrader(RunningConfig(TARGET_DISTANCE_METERS=50000.0))
        grader.start_run()
        for i in range(30):
            grader.update_fix(fix_north(i * 1000, i))

        self.assertAlmostEqual(grader.get_distance(), 29000.0, places=2)
        self.assertEqual(grader.get_form_score(), 100 - self.config.SPEED_PENALTY_CAP)

    def test_plausible_pace_keeps_score(self):
        for i in range(5):
            self.grader.update_fix(fix_north(i * 30, i * 10))
        self.assertEqual(self.grader.get_form_score(), 100)
        self.assertAlmostEqual(self.grader.get_distance(), 120.0, places=4)

    def test_identical_fixes_do_not_divide_by_zero(self):
        self.grader.update_fix(fix_north(0, 0))
        snapshot = self.grader.update_fix(fix_north(0, 0))

        self.assertEqual(snapshot.distance_meters, 0.0)
        self.assertEqual(snapshot.pace_formatted, "00:00")
        self.assertEqual(self.grader.get_pace_minutes_per_mile(), 0.0)

    def test_same_timestamp_large_move_is_accepted(self):
        self.grader.update_fix(fix_north(0, 0))
        self.grader.update_fix(fix_north(20, 0))
        self.assertAlmostEqual(self.grader.get_distance(), 20.0, places=4)
        self.assertEqual(self.grader.get_pace_formatted(), "00:00")

    def test_jitter_accumulates_against_anchor(self):
        self.grader.update_fix(fix_north(0, 0))
        self.grader.update_fix(fix_north(3, 10))
        self.grader.update_fix(fix_north(6, 20))

        self.assertAlmostEqual(self.grader.get_distance(), 6.0, places=4)
        self.assertEqual(self.grader.get_elapsed_seconds(), 20.0)

    def test_fixes_ignored_when_not_running(self):
        grader = RunningGrader()
        grader.update_fix(fix_north(0, 0))
        grader.update_fix(fix_north(100, 60))
        self.assertEqual(grader.get_distance(), 0.0)

    def test_stop_run_summary(self):
        for i in range(4):
            self.grader.update_fix(fix_north(i * 100, i * 30))

        summary = self.grader.stop_run()

        self.assertFalse(self.grader.is_running)
        self.assertAlmostEqual(summary.distance_meters, 300.0, places=3)
        self.assertEqual(summary.elapsed_seconds, 90.0)
        self.assertEqual(summary.accepted_fixes, 4)
        self.assertEqual(len(summary.path), 4)
        self.assertAlmostEqual(summary.estimated_calories, 21.0, places=3)

        # Fixes after stopping do not count.
        self.grader.update_fix(fix_north(500, 200))
        self.assertAlmostEqual(self.grader.get_distance(), 300.0, places=3)

    def test_reset(self):
        self.grader.update_fix(fix_north(0, 0))
        self.grader.update_fix(fix_north(50, 10))

        self.grader.reset()

        self.assertEqual(self.grader.get_distance(), 0.0)
        self.assertEqual(self.grader.get_form_score(), 100)
        self.assertEqual(self.grader.get_pace_formatted(), "00:00")
        self.assertFalse(self.grader.is_running)
        self.assertEqual(self.grader.path, [])

    def test_progress(self):
        self.grader.update_fix(fix_north(0, 0))
        snapshot = self.grader.update_fix(fix_north(400, 100))

        self.assertAlmostEqual(snapshot.progress, 400 / self.config.TARGET_DISTANCE_METERS, places=6)
        self.assertFalse(snapshot.completed)
        self.assertTrue(self.grader.is_running)

    def test_run_completes_at_target_distance(self):
        snapshots = [self.grader.update_fix(fix_north(i * 400, i * 100)) for i in range(11)]

        self.assertFalse(snapshots[8].completed)
        self.assertTrue(snapshots[9].completed)
        self.assertEqual(snapshots[9].progress, 1.0)
        self.assertFalse(self.grader.is_running)
        self.assertTrue(self.grader.is_complete)
        # The fix after completion is not counted.
        self.assertAlmostEqual(self.grader.get_distance(), 3600.0, places=2)
        self.assertEqual(self.grader.get_elapsed_seconds(), 900.0)

        summary = self.grader.stop_run()
        self.assertTrue(summary.completed)
        self.assertEqual(summary.elapsed_seconds, 900.0)

    def test_completed_run_cannot_restart(self):
        for i in range(10):
            self.grader.update_fix(fix_north(i * 400, i * 100))

        self.grader.start_run()
        self.assertFalse(self.grader.is_running)

        self.grader.reset()
        self.grader.start_run()
        self.assertTrue(self.grader.is_running)
        self.assertEqual(self.grader.get_progress(), 0.0)

    def test_snapshot_aliases(self):
        data = self.grader.snapshot().model_dump(by_alias=True)
        self.assertEqual(set(data), {"distanceMeters", "paceFormatted", "formScore", "progress", "completed"})


class TestFormatPace(unittest.TestCase):
    def test_format(self):
        self.assertEqual(format_pace(5.5), "05:30")
        self.assertEqual(format_pace(12.0), "12:00")

    def test_unusable_values(self):
        for value in (0.0, -1.0, float("nan"), float("inf")):
            self.assertEqual(format_pace(value), "00:00")


if __name__ == "__main__":
    unittest.main()
