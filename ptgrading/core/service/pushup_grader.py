from typing import Callable, Optional

from ptgrading.core.entities import ExerciseType, Landmark, Phase, PoseFrame, paired
from ptgrading.core.service.base_grader import BaseExerciseGrader
from ptgrading.core.service.geometry import line_angle_from_vertical
from ptgrading.utilities.monitoring import MonitoringFactory
from ptgrading.utilities.validators.config_validator import PoseConfig, PushupConfig

logger = MonitoringFactory.get_logger("service.pushup")


class PushupGrader(BaseExerciseGrader):
    """
    Push-up grader driven by the height of the shoulders.

    The shoulders sink past DOWN_SHOULDER_Y on the way down and rise
    above UP_SHOULDER_Y on the way up; the gap between the two is the
    hysteresis band in which the phase is held. A rep is counted on
    DOWN -> UP, and body alignment is checked at that moment.
    """

    exercise_type = ExerciseType.PUSHUP
    required_landmarks = paired("shoulder") + paired("elbow") + paired("hip")

    def __init__(
        self,
        config: Optional[PushupConfig] = None,
        pose_config: Optional[PoseConfig] = None,
        clock: Optional[Callable[[], float]] = None,
    ):
        self.config = config or PushupConfig()
        super().__init__(pose_config, clock)

    def _target_phase(self, shoulder_y: float) -> Optional[Phase]:
        if shoulder_y > self.config.DOWN_SHOULDER_Y:
            return Phase.DOWN
        if shoulder_y < self.config.UP_SHOULDER_Y:
            return Phase.UP
        return None

    def _evaluate(self, frame: PoseFrame, now: float) -> bool:
        shoulder = frame.average("shoulder")
        hip = frame.average("hip")

        target = self._target_phase(shoulder.y)
        if target is None or target is self.phase:
            return False

        completed = self.phase is Phase.DOWN and target is Phase.UP
        self._transition(target)
        if completed:
            self._check_alignment(shoulder, hip, now)
        return completed

    def _check_alignment(self, shoulder: Landmark, hip: Landmark, now: float) -> None:
        deviation = line_angle_from_vertical(shoulder, hip)
        logger.debug(f"Hip-shoulder deviation at lockout: {deviation:.1f} deg")
        if deviation > self.config.ALIGNMENT_TOLERANCE:
            self._penalize(
                self.config.ALIGNMENT_PENALTY,
                f"Keep your body straight: hips sagging or piking ({deviation:.0f} deg)",
                now,
            )
