from .grader_interface import ExerciseGraderInterface, RunningGraderInterface
from .scoring_interface import ScoringInterface
from .monitoring_interface import MetricsExporter

__all__ = [
    "ExerciseGraderInterface",
    "RunningGraderInterface",
    "ScoringInterface",
    "MetricsExporter",
]
