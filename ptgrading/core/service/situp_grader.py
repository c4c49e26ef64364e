from typing import Callable, Optional

from ptgrading.core.entities import ExerciseType, Phase, PoseFrame, paired
from ptgrading.core.service.base_grader import BaseExerciseGrader
from ptgrading.core.service.geometry import angle_degrees, segment_angle_from_vertical
from ptgrading.utilities.monitoring import MonitoringFactory
from ptgrading.utilities.validators.config_validator import PoseConfig, SitupConfig

logger = MonitoringFactory.get_logger("service.situp")

INCOMPLETE_FAULT = "Incomplete sit-up: come all the way up"
KNEES_FAULT = "Keep your knees bent"


class SitupGrader(BaseExerciseGrader):
    """
    Sit-up grader driven by the torso angle.

    The torso angle is the deviation of the hip-shoulder line from
    vertical: close to 90 when lying flat, close to 0 when sitting up.
    Frames where the angle cannot be measured leave the phase untouched.
    A rep is counted when the athlete lies back down after sitting up.
    """

    exercise_type = ExerciseType.SITUP
    required_landmarks = paired("shoulder") + paired("hip")
    leg_landmarks = paired("knee") + paired("ankle")

    def __init__(
        self,
        config: Optional[SitupConfig] = None,
        pose_config: Optional[PoseConfig] = None,
        clock: Optional[Callable[[], float]] = None,
    ):
        self.config = config or SitupConfig()
        super().__init__(pose_config, clock)
        self._reset_state()

    def _reset_state(self) -> None:
        self.attempt_started = False

    def torso_angle(self, frame: PoseFrame) -> Optional[float]:
        return segment_angle_from_vertical(frame.average("shoulder"), frame.average("hip"))

    def _target_phase(self, torso: float) -> Optional[Phase]:
        if torso >= self.config.DOWN_TORSO_ANGLE:
            return Phase.DOWN
        if torso <= self.config.UP_TORSO_ANGLE:
            return Phase.UP
        return None

    def _evaluate(self, frame: PoseFrame, now: float) -> bool:
        torso = self.torso_angle(frame)
        if torso is None:
            logger.debug("Shoulder and hip points unusable, frame skipped")
            return False
        target = self._target_phase(torso)

        if self.phase is Phase.DOWN:
            self._track_attempt(torso, target, now)

        if target is None or target is self.phase:
            return False

        completed = (
            self.phase is Phase.UP
            and target is Phase.DOWN
            and self.previous_phase is Phase.DOWN
        )
        self._transition(target)
        if target is Phase.UP:
            self.attempt_started = False
        if completed:
            self._check_knees(frame, now)
        return completed

    def _track_attempt(self, torso: float, target: Optional[Phase], now: float) -> None:
        """Flag a rise out of DOWN that falls back without reaching UP"""
        if torso < self.config.DOWN_TORSO_ANGLE - self.config.PARTIAL_REP_MARGIN:
            self.attempt_started = True
        elif target is Phase.DOWN and self.attempt_started:
            self.attempt_started = False
            self._penalize(self.config.ROM_PENALTY, INCOMPLETE_FAULT, now)

    def _check_knees(self, frame: PoseFrame, now: float) -> None:
        if not frame.is_visible(self.leg_landmarks, self.pose_config.VISIBILITY_THRESHOLD):
            return

        angles = [
            angle_degrees(
                frame.get(f"{side}_hip"),
                frame.get(f"{side}_knee"),
                frame.get(f"{side}_ankle"),
            )
            for side in ("left", "right")
        ]
        knee_angle = sum(angles) / len(angles)
        logger.debug(f"Knee angle at rep completion: {knee_angle:.1f} deg")
        if knee_angle > self.config.KNEE_MAX_ANGLE:
            self._penalize(self.config.KNEE_PENALTY, KNEES_FAULT, now)
