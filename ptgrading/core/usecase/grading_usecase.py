import time
from typing import Callable, Optional, Union

from ptgrading.core.entities import (
    ExerciseType,
    GeoFix,
    GradingResult,
    PoseFrame,
    RunningSnapshot,
    SessionResult,
)
from ptgrading.core.exceptions import SessionStateError
from ptgrading.core.interface import (
    ExerciseGraderInterface,
    RunningGraderInterface,
    ScoringInterface,
)
from ptgrading.core.service.grader_factory import GraderFactory
from ptgrading.core.service.scoring_service import ScoringService
from ptgrading.utilities.config import get_config
from ptgrading.utilities.monitoring import MonitoringFactory, MonitoringService
from ptgrading.utilities.validators.config_validator import AppConfig

logger = MonitoringFactory.get_logger("usecase.grading")


class GradingSessionUseCase:
    """
    One tracking session for a single exercise.
    Feeds samples to the grader, then folds its state into a SessionResult
    with APFT points when the session stops.
    """

    def __init__(
        self,
        exercise_type: Union[ExerciseType, str],
        grader: Optional[Union[ExerciseGraderInterface, RunningGraderInterface]] = None,
        scoring_service: Optional[ScoringInterface] = None,
        monitoring_service: Optional[MonitoringService] = None,
        config: Optional[AppConfig] = None,
        clock: Optional[Callable[[], float]] = None,
    ):
        """
        Initialize the grading session.

        Args:
            exercise_type: Exercise being graded
            grader: Grader to drive; built by GraderFactory if omitted
            scoring_service: Converts reps or run time into points
            monitoring_service: Destination for session metrics
            config: Application configuration, loaded from the environment if omitted
            clock: Time source for session start/stop when no time is passed in
        """
        self.exercise_type = GraderFactory.resolve_exercise_type(exercise_type)
        self.config = config or get_config()
        self._clock = clock or time.monotonic
        self.grader = grader or GraderFactory.create_grader(self.exercise_type, self.config, clock)
        self.scoring_service = scoring_service or ScoringService(self.config.RUNNING)
        self.monitoring_service = monitoring_service or MonitoringFactory.get_monitoring_service()
        self.started_at: Optional[float] = None
        self.is_active = False

    @property
    def is_running(self) -> bool:
        return self.exercise_type is ExerciseType.RUNNING

    def start(self, now: Optional[float] = None) -> None:
        if self.is_active:
            raise SessionStateError("Session already started")
        self.started_at = self._clock() if now is None else now
        self.is_active = True
        if self.is_running:
            self.grader.start_run()
        logger.info(f"{self.exercise_type.value} session started")

    def process_pose(self, frame: PoseFrame) -> GradingResult:
        self._require_active()
        if self.is_running:
            raise SessionStateError("Running sessions are graded from GPS fixes, not pose frames")
        return self.grader.process_pose(frame)

    def update_fix(self, fix: GeoFix) -> RunningSnapshot:
        self._require_active()
        if not self.is_running:
            raise SessionStateError(f"{self.exercise_type.value} sessions do not accept GPS fixes")
        return self.grader.update_fix(fix)

    def stop(self, now: Optional[float] = None) -> SessionResult:
        """
        End the session and aggregate the final result.

        Args:
            now: Stop time in the same units as the start time

        Returns:
            SessionResult with reps (or distance), duration, form score and APFT points
        """
        self._require_active()
        stopped_at = self._clock() if now is None else now
        duration = max(0.0, stopped_at - self.started_at)
        self.is_active = False

        if self.is_running:
            result = self._running_result(duration)
        else:
            result = self._exercise_result(duration)

        self._record_metrics(result)
        logger.info(f"{self.exercise_type.value} session finished: {result.score_display}")
        return result

    def reset(self) -> None:
        self.grader.reset()
        self.started_at = None
        self.is_active = False

    def _exercise_result(self, duration: float) -> SessionResult:
        summary = self.grader.summary()
        points = self.scoring_service.score_reps(self.exercise_type, summary.rep_count)
        return SessionResult(
            exercise_type=self.exercise_type,
            rep_count=summary.rep_count,
            duration_seconds=duration,
            form_score=summary.form_score,
            apft_score=points,
            score_display=ScoringService.format_score_display(summary.rep_count, points),
        )

    def _running_result(self, duration: float) -> SessionResult:
        summary = self.grader.stop_run()
        # GPS time is authoritative once fixes have arrived.
        run_time = summary.elapsed_seconds or duration
        points = self.scoring_service.score_run(run_time, summary.distance_meters)
        return SessionResult(
            exercise_type=self.exercise_type,
            duration_seconds=run_time,
            form_score=summary.form_score,
            apft_score=points,
            score_display=ScoringService.format_running_score_display(run_time, points),
            distance_meters=summary.distance_meters,
            pace_formatted=summary.pace_formatted,
        )

    def _record_metrics(self, result: SessionResult) -> None:
        if not self.config.MONITORING.ENABLE_METRICS:
            return
        labels = {"exercise": self.exercise_type.value}
        self.monitoring_service.record_metric("session.duration_seconds", result.duration_seconds, labels)
        self.monitoring_service.record_metric("session.form_score", result.form_score, labels)
        if result.distance_meters is not None:
            self.monitoring_service.record_metric("session.distance_meters", result.distance_meters, labels)
        else:
            self.monitoring_service.record_metric("session.reps", result.rep_count, labels)

    def _require_active(self) -> None:
        if not self.is_active:
            raise SessionStateError("Session has not been started")
