from typing import Callable, Optional

from ptgrading.core.entities import ExerciseType, Landmark, NOSE, Phase, PoseFrame, paired
from ptgrading.core.service.base_grader import BaseExerciseGrader
from ptgrading.core.service.geometry import angle_degrees
from ptgrading.utilities.monitoring import MonitoringFactory
from ptgrading.utilities.validators.config_validator import PoseConfig, PullupConfig

logger = MonitoringFactory.get_logger("service.pullup")

KIPPING_FAULT = "Excessive kipping detected: keep your legs still"
KIPPING_REP_REJECTED = "Rep not counted: excessive kipping"


class PullupGrader(BaseExerciseGrader):
    """
    Pull-up grader with kipping detection.

    Hanging with locked-out arms is DOWN, chin above the hands is UP and
    the rep is counted when the arms lock out again (UP -> DOWN). Hip and
    shoulder heights are captured whenever the athlete settles into the
    hang; on the way up the hip-to-shoulder gap is compared against that
    reference to catch the legs swinging up.
    """

    exercise_type = ExerciseType.PULLUP
    required_landmarks = (
        paired("shoulder") + paired("elbow") + paired("wrist") + paired("hip") + (NOSE,)
    )

    def __init__(
        self,
        config: Optional[PullupConfig] = None,
        pose_config: Optional[PoseConfig] = None,
        clock: Optional[Callable[[], float]] = None,
    ):
        self.config = config or PullupConfig()
        super().__init__(pose_config, clock)
        self._reset_state()

    def _reset_state(self) -> None:
        self.reference_hip_y: Optional[float] = None
        self.reference_shoulder_y: Optional[float] = None
        self.kipping_flagged = False

    def _capture_reference(self, shoulder: Landmark, hip: Landmark) -> None:
        self.reference_shoulder_y = shoulder.y
        self.reference_hip_y = hip.y

    @staticmethod
    def _elbow_angle(frame: PoseFrame) -> float:
        angles = [
            angle_degrees(
                frame.get(f"{side}_shoulder"),
                frame.get(f"{side}_elbow"),
                frame.get(f"{side}_wrist"),
            )
            for side in ("left", "right")
        ]
        return sum(angles) / len(angles)

    def arms_extended(self, frame: PoseFrame) -> bool:
        return self._elbow_angle(frame) >= self.config.ARMS_EXTENDED_ANGLE

    def chin_over_bar(self, frame: PoseFrame) -> bool:
        wrist = frame.average("wrist")
        return frame.get(NOSE).y < wrist.y - self.config.CHIN_MARGIN

    def _evaluate(self, frame: PoseFrame, now: float) -> bool:
        shoulder = frame.average("shoulder")
        hip = frame.average("hip")

        if self.phase is Phase.UNKNOWN:
            if self.arms_extended(frame):
                self._transition(Phase.DOWN)
                self._capture_reference(shoulder, hip)
            return False

        if self.phase is Phase.DOWN:
            if self.chin_over_bar(frame):
                self.kipping_flagged = self._check_kipping(shoulder, hip, now)
                self._transition(Phase.UP)
            return False

        if not self.arms_extended(frame):
            return False

        self._transition(Phase.DOWN)
        counted = self.config.COUNT_FAULTED_REPS or not self.kipping_flagged
        if not counted:
            self._raise_fault(KIPPING_REP_REJECTED, now)
            logger.info("Pull-up rejected because kipping was flagged on the way up")
        self.kipping_flagged = False
        self._capture_reference(shoulder, hip)
        return counted

    def _check_kipping(self, shoulder: Landmark, hip: Landmark, now: float) -> bool:
        if self.reference_hip_y is None or self.reference_shoulder_y is None:
            return False

        reference_gap = self.reference_hip_y - self.reference_shoulder_y
        displacement = reference_gap - (hip.y - shoulder.y)
        logger.debug(f"Hip displacement relative to shoulders: {displacement:.3f}")
        if displacement > self.config.KIPPING_TOLERANCE:
            self._penalize(self.config.KIPPING_PENALTY, KIPPING_FAULT, now)
            return True
        return False
