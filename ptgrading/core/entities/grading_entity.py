from dataclasses import dataclass
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Phase(str, Enum):
    UNKNOWN = "unknown"
    UP = "up"
    DOWN = "down"


class ExerciseType(str, Enum):
    PUSHUP = "pushup"
    PULLUP = "pullup"
    SITUP = "situp"
    RUNNING = "running"


@dataclass(frozen=True)
class FaultMessage:
    """A form fault together with the time it was raised, in seconds."""
    message: str
    raised_at: float

    def is_expired(self, now: float, window: float) -> bool:
        return now - self.raised_at >= window


class GradingResult(BaseModel):
    """Outcome of grading a single pose frame."""
    model_config = ConfigDict(frozen=True)

    rep_increment: int = Field(default=0, ge=0, le=1, serialization_alias="repIncrement")
    form_fault: Optional[str] = Field(default=None, serialization_alias="formFault")
    form_score: int = Field(default=100, ge=0, le=100, serialization_alias="formScore")
    phase: Phase = Field(default=Phase.UNKNOWN, serialization_alias="phase")

    @property
    def has_form_fault(self) -> bool:
        return self.form_fault is not None


class ExerciseSummary(BaseModel):
    exercise_type: ExerciseType = Field(..., serialization_alias="exerciseType")
    rep_count: int = Field(default=0, ge=0, serialization_alias="repCount")
    form_score: int = Field(default=100, ge=0, le=100, serialization_alias="formScore")
    phase: Phase = Field(default=Phase.UNKNOWN, serialization_alias="phase")
