from ptgrading.core.entities import (
    ExerciseType,
    GeoFix,
    GradingResult,
    Landmark,
    Phase,
    PoseFrame,
    RunningSnapshot,
    SessionResult,
)
from ptgrading.core.service import (
    GraderFactory,
    PullupGrader,
    PushupGrader,
    RunningGrader,
    ScoringService,
    SitupGrader,
)
from ptgrading.core.usecase import GradingSessionUseCase

__version__ = "0.1.0"

__all__ = [
    "ExerciseType",
    "GeoFix",
    "GradingResult",
    "Landmark",
    "Phase",
    "PoseFrame",
    "RunningSnapshot",
    "SessionResult",
    "GraderFactory",
    "PullupGrader",
    "PushupGrader",
    "RunningGrader",
    "ScoringService",
    "SitupGrader",
    "GradingSessionUseCase",
]
