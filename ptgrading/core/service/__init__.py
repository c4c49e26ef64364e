from .geometry import (
    angle_degrees,
    haversine_distance_meters,
    line_angle_from_vertical,
    planar_distance,
    segment_angle_from_vertical,
)
from .base_grader import BaseExerciseGrader
from .pushup_grader import PushupGrader
from .pullup_grader import PullupGrader
from .situp_grader import SitupGrader
from .running_grader import RunningGrader, format_pace
from .scoring_service import ScoringService
from .grader_factory import GraderFactory

__all__ = [
    "angle_degrees",
    "haversine_distance_meters",
    "line_angle_from_vertical",
    "planar_distance",
    "segment_angle_from_vertical",
    "BaseExerciseGrader",
    "PushupGrader",
    "PullupGrader",
    "SitupGrader",
    "RunningGrader",
    "format_pace",
    "ScoringService",
    "GraderFactory",
]
