import time
from abc import abstractmethod
from typing import Callable, Optional, Tuple

from ptgrading.core.entities import (
    ExerciseSummary,
    ExerciseType,
    FaultMessage,
    GradingResult,
    Phase,
    PoseFrame,
)
from ptgrading.core.interface import ExerciseGraderInterface
from ptgrading.utilities.monitoring import MonitoringFactory
from ptgrading.utilities.validators.config_validator import PoseConfig

logger = MonitoringFactory.get_logger("service.grader")

REPOSITION_FAULT = "Reposition: make sure your full body is visible"
MAX_FORM_SCORE = 100


class BaseExerciseGrader(ExerciseGraderInterface):
    """
    Shared state machine scaffolding for pose-driven graders.

    Subclasses declare the landmarks they need and implement
    ``_evaluate``, which runs only once those landmarks passed the
    visibility gate and returns True when a repetition was completed.
    """

    exercise_type: ExerciseType
    required_landmarks: Tuple[str, ...] = ()

    def __init__(
        self,
        pose_config: Optional[PoseConfig] = None,
        clock: Optional[Callable[[], float]] = None,
    ):
        """
        Args:
            pose_config: Visibility threshold and fault display window
            clock: Monotonic time source used when frames carry no timestamp
        """
        self.pose_config = pose_config or PoseConfig()
        self._clock = clock or time.monotonic
        self._reset_base()

    def _reset_base(self) -> None:
        self.phase = Phase.UNKNOWN
        self.previous_phase = Phase.UNKNOWN
        self.rep_count = 0
        self.form_score = MAX_FORM_SCORE
        self.fault: Optional[FaultMessage] = None

    def process_pose(self, frame: PoseFrame) -> GradingResult:
        now = frame.timestamp if frame.timestamp is not None else self._clock()
        self._expire_fault(now)

        missing = frame.missing(self.required_landmarks, self.pose_config.VISIBILITY_THRESHOLD)
        if missing:
            logger.debug(f"{self.exercise_type.value}: landmarks not visible: {', '.join(missing)}")
            self._raise_fault(REPOSITION_FAULT, now)
            return self._result(0)

        rep_increment = 1 if self._evaluate(frame, now) else 0
        if rep_increment:
            self.rep_count += 1
            logger.info(
                f"{self.exercise_type.value}: rep {self.rep_count} completed, "
                f"form score {self.form_score}"
            )
        return self._result(rep_increment)

    @abstractmethod
    def _evaluate(self, frame: PoseFrame, now: float) -> bool:
        pass

    def _reset_state(self) -> None:
        """Hook for subclasses to clear their own state"""

    def reset(self) -> None:
        self._reset_base()
        self._reset_state()
        logger.info(f"{self.exercise_type.value}: grader reset")

    def current_form_score(self) -> int:
        return self.form_score

    def current_phase(self) -> Phase:
        return self.phase

    def active_fault(self) -> Optional[str]:
        return self.fault.message if self.fault else None

    def summary(self) -> ExerciseSummary:
        return ExerciseSummary(
            exercise_type=self.exercise_type,
            rep_count=self.rep_count,
            form_score=self.form_score,
            phase=self.phase,
        )

    def _transition(self, phase: Phase) -> None:
        logger.debug(f"{self.exercise_type.value}: {self.phase.value} -> {phase.value}")
        self.previous_phase = self.phase
        self.phase = phase

    def _raise_fault(self, message: str, now: float) -> None:
        self.fault = FaultMessage(message=message, raised_at=now)

    def _expire_fault(self, now: float) -> None:
        if self.fault and self.fault.is_expired(now, self.pose_config.FAULT_DISPLAY_SECONDS):
            self.fault = None

    def _penalize(self, points: int, message: str, now: float) -> None:
        """Deduct points permanently and surface the fault"""
        self.form_score = max(0, self.form_score - points)
        self._raise_fault(message, now)
        logger.info(f"{self.exercise_type.value}: {message} (-{points}, score {self.form_score})")

    def _result(self, rep_increment: int) -> GradingResult:
        return GradingResult(
            rep_increment=rep_increment,
            form_fault=self.active_fault(),
            form_score=self.form_score,
            phase=self.phase,
        )
