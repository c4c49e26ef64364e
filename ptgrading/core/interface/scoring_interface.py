from abc import ABC, abstractmethod
from typing import Optional

from ptgrading.core.entities import ExerciseType


class ScoringInterface(ABC):
    """
    Interface for converting raw performance into fitness test points.
    """

    @abstractmethod
    def score_reps(self, exercise_type: ExerciseType, reps: int) -> int:
        """
        Score a repetition count.

        Args:
            exercise_type: Push-up, sit-up or pull-up
            reps: Number of valid repetitions

        Returns:
            Points between 0 and 100
        """
        pass

    @abstractmethod
    def score_run(self, time_in_seconds: float, distance_meters: Optional[float] = None) -> int:
        """
        Score a two-mile run time.

        Args:
            time_in_seconds: Completion time in seconds
            distance_meters: Distance actually covered; None for a full two-mile run

        Returns:
            Points between 0 and 100
        """
        pass
