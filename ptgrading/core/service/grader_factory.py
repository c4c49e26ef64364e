from typing import Callable, Optional, Union

from ptgrading.core.entities import ExerciseType
from ptgrading.core.exceptions import UnsupportedExerciseError
from ptgrading.core.interface import ExerciseGraderInterface, RunningGraderInterface
from ptgrading.core.service.pullup_grader import PullupGrader
from ptgrading.core.service.pushup_grader import PushupGrader
from ptgrading.core.service.running_grader import RunningGrader
from ptgrading.core.service.situp_grader import SitupGrader
from ptgrading.utilities.config import get_config
from ptgrading.utilities.validators.config_validator import AppConfig


class GraderFactory:
    """
    Factory for creating grader instances.
    The exercise is resolved once at session start; callers then work
    against the shared grader interfaces.
    """

    @staticmethod
    def resolve_exercise_type(exercise_type: Union[ExerciseType, str]) -> ExerciseType:
        """
        Normalize an exercise name such as ``"Push-Up"`` or ``"pull_up"``.

        Raises:
            UnsupportedExerciseError: If the name matches no known exercise
        """
        if isinstance(exercise_type, ExerciseType):
            return exercise_type
        normalized = str(exercise_type).strip().lower().replace("-", "").replace("_", "")
        try:
            return ExerciseType(normalized)
        except ValueError:
            raise UnsupportedExerciseError(f"Unsupported exercise type: {exercise_type}") from None

    @staticmethod
    def create_grader(
        exercise_type: Union[ExerciseType, str],
        config: Optional[AppConfig] = None,
        clock: Optional[Callable[[], float]] = None,
    ) -> Union[ExerciseGraderInterface, RunningGraderInterface]:
        """
        Create a grader for an exercise.

        Args:
            exercise_type: Exercise to grade
            config: Application configuration, loaded from the environment if omitted
            clock: Time source for fault expiry on frames without timestamps

        Returns:
            A pose grader, or a RunningGrader for running

        Raises:
            UnsupportedExerciseError: If an unsupported exercise type is requested
        """
        exercise = GraderFactory.resolve_exercise_type(exercise_type)
        if config is None:
            config = get_config()

        if exercise is ExerciseType.PUSHUP:
            return PushupGrader(config.PUSHUP, config.POSE, clock)
        elif exercise is ExerciseType.PULLUP:
            return PullupGrader(config.PULLUP, config.POSE, clock)
        elif exercise is ExerciseType.SITUP:
            return SitupGrader(config.SITUP, config.POSE, clock)
        return RunningGrader(config.RUNNING)
