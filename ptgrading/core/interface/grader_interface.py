from abc import ABC, abstractmethod

from ptgrading.core.entities import (
    ExerciseSummary,
    GeoFix,
    GradingResult,
    Phase,
    PoseFrame,
    RunningSnapshot,
    RunSummary,
)


class ExerciseGraderInterface(ABC):
    """
    Interface for pose-driven repetition graders.
    Implementations consume one frame per call and must be fed sequentially.
    """

    @abstractmethod
    def process_pose(self, frame: PoseFrame) -> GradingResult:
        """
        Grade a single pose frame.

        Args:
            frame: Landmarks detected for one camera frame

        Returns:
            GradingResult with the rep increment, active fault, score and phase
        """
        pass

    @abstractmethod
    def reset(self) -> None:
        """
        Return the grader to its initial state.
        """
        pass

    @abstractmethod
    def current_form_score(self) -> int:
        """
        Returns:
            Current form score in [0, 100]
        """
        pass

    @abstractmethod
    def current_phase(self) -> Phase:
        """
        Returns:
            Phase the grader is currently in
        """
        pass

    @abstractmethod
    def summary(self) -> ExerciseSummary:
        """
        Returns:
            Rep count and form score accumulated so far
        """
        pass


class RunningGraderInterface(ABC):
    """
    Interface for GPS-driven run tracking.
    """

    @abstractmethod
    def start_run(self) -> None:
        """
        Begin accepting fixes.
        """
        pass

    @abstractmethod
    def update_fix(self, fix: GeoFix) -> RunningSnapshot:
        """
        Feed a new GPS fix.

        Args:
            fix: Position sample with timestamp

        Returns:
            RunningSnapshot with distance, pace and form score
        """
        pass

    @abstractmethod
    def stop_run(self) -> RunSummary:
        """
        Stop accepting fixes.

        Returns:
            RunSummary for the completed run
        """
        pass

    @abstractmethod
    def get_distance(self) -> float:
        pass

    @abstractmethod
    def get_pace_formatted(self) -> str:
        pass

    @abstractmethod
    def get_form_score(self) -> int:
        pass

    @abstractmethod
    def get_progress(self) -> float:
        """
        Returns:
            Fraction of the target distance covered, in [0, 1]
        """
        pass

    @abstractmethod
    def reset(self) -> None:
        pass
