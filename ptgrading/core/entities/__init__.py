from .base import EntityBase
from .monitoring import Metric
from .pose_entity import Landmark, PoseFrame, NOSE, paired
from .grading_entity import (
    Phase,
    ExerciseType,
    FaultMessage,
    GradingResult,
    ExerciseSummary,
)
from .running_entity import GeoFix, RunningSnapshot, RunSummary
from .session_entity import SessionResult

__all__ = [
    "EntityBase",
    "Metric",
    "Landmark",
    "PoseFrame",
    "NOSE",
    "paired",
    "Phase",
    "ExerciseType",
    "FaultMessage",
    "GradingResult",
    "ExerciseSummary",
    "GeoFix",
    "RunningSnapshot",
    "RunSummary",
    "SessionResult",
]
