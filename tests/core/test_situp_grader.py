import unittest

from ptgrading.core.entities import Phase, PoseFrame
from ptgrading.core.service.situp_grader import INCOMPLETE_FAULT, KNEES_FAULT, SitupGrader
from ptgrading.utilities.validators.config_validator import PoseConfig, SitupConfig

HIP = (0.6, 0.72)
LYING = (0.3, 0.7)
PARTIAL = (0.45, 0.55)
SITTING = (0.55, 0.45)
BENT_LEGS = ((0.75, 0.55), (0.9, 0.72))
STRAIGHT_LEGS = ((0.75, 0.72), (0.9, 0.72))


def situp_frame(shoulder, legs=None, timestamp=None):
    """Side-on sit-up frame; both sides share the same coordinates."""
    keypoints = {}
    for side in ("left", "right"):
        keypoints[f"{side}_shoulder"] = (*shoulder, 0.9)
        keypoints[f"{side}_hip"] = (*HIP, 0.9)
        if legs is not None:
            knee, ankle = legs
            keypoints[f"{side}_knee"] = (*knee, 0.9)
            keypoints[f"{side}_ankle"] = (*ankle, 0.9)
    return PoseFrame.from_keypoints(keypoints, timestamp=timestamp)


class TestSitupGrader(unittest.TestCase):
    def setUp(self):
        """Set up a grader with default thresholds."""
        self.grader = SitupGrader(SitupConfig(), PoseConfig())

    def run_sequence(self, shoulders, legs=None):
        return [
            self.grader.process_pose(situp_frame(shoulder, legs, timestamp=t * 3.0))
            for t, shoulder in enumerate(shoulders)
        ]

    def test_torso_angle(self):
        self.assertGreater(self.grader.torso_angle(situp_frame(LYING)), 65)
        self.assertLess(self.grader.torso_angle(situp_frame(SITTING)), 30)

    def test_rep_counted_on_return_to_down(self):
        results = self.run_sequence([LYING, SITTING, LYING], legs=BENT_LEGS)

        self.assertEqual([r.phase for r in results], [Phase.DOWN, Phase.UP, Phase.DOWN])
        self.assertEqual([r.rep_increment for r in results], [0, 0, 1])
        self.assertTrue(all(r.form_fault is None for r in results))
        self.assertEqual(self.grader.current_form_score(), 100)

    def test_leg_landmarks_are_optional(self):
        results = self.run_sequence([LYING, SITTING, LYING])
        self.assertEqual(sum(r.rep_increment for r in results), 1)
        self.assertEqual(self.grader.current_form_score(), 100)

    def test_straight_legs_penalized(self):
        results = self.run_sequence([LYING, SITTING, LYING], legs=STRAIGHT_LEGS)
        self.assertEqual(results[-1].rep_increment, 1)
        self.assertEqual(results[-1].form_fault, KNEES_FAULT)
        self.assertEqual(results[-1].form_score, 95)

    def test_incomplete_situp_penalized(self):
        results = self.run_sequence([LYING, PARTIAL, LYING])

        self.assertEqual(sum(r.rep_increment for r in results), 0)
        self.assertEqual(results[-1].form_fault, INCOMPLETE_FAULT)
        self.assertEqual(self.grader.current_form_score(), 95)

    def test_starting_seated_does_not_count(self):
        results = self.run_sequence([SITTING, LYING])
        self.assertEqual(sum(r.rep_increment for r in results), 0)
        self.assertEqual(self.grader.current_phase(), Phase.DOWN)

    def test_multiple_reps(self):
        self.run_sequence([LYING, PARTIAL, SITTING, PARTIAL, LYING, SITTING, LYING])
        self.assertEqual(self.grader.rep_count, 2)
        self.assertEqual(self.grader.current_form_score(), 100)

    def test_coincident_shoulder_and_hip_skipped(self):
        results = self.run_sequence([LYING, HIP, LYING])

        self.assertEqual([r.rep_increment for r in results], [0, 0, 0])
        self.assertEqual([r.phase for r in results], [Phase.DOWN] * 3)
        self.assertIsNone(self.grader.torso_angle(situp_frame(HIP)))

    def test_non_finite_shoulder_skipped(self):
        nan_shoulder = (float("nan"), float("nan"))
        results = self.run_sequence([LYING, nan_shoulder, LYING, nan_shoulder, LYING])

        self.assertEqual(sum(r.rep_increment for r in results), 0)
        self.assertEqual(self.grader.rep_count, 0)
        self.assertEqual(self.grader.current_phase(), Phase.DOWN)
        self.assertEqual(self.grader.current_form_score(), 100)

    def test_corrupt_frame_mid_rep_does_not_block_real_rep(self):
        results = self.run_sequence([LYING, SITTING, HIP, LYING])
        self.assertEqual([r.rep_increment for r in results], [0, 0, 0, 1])

    def test_reset(self):
        self.run_sequence([LYING, PARTIAL])
        self.grader.reset()
        self.assertFalse(self.grader.attempt_started)
        self.assertEqual(self.grader.current_phase(), Phase.UNKNOWN)


if __name__ == "__main__":
    unittest.main()
