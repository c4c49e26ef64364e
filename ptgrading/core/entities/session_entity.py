from dataclasses import dataclass
from typing import Optional

from .base import EntityBase
from .grading_entity import ExerciseType


@dataclass
class SessionResult(EntityBase):
    """Aggregated outcome of one tracking session."""
    exercise_type: ExerciseType = ExerciseType.PUSHUP
    rep_count: int = 0
    duration_seconds: float = 0.0
    form_score: int = 100
    apft_score: int = 0
    score_display: str = ""
    distance_meters: Optional[float] = None
    pace_formatted: Optional[str] = None
