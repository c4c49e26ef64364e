from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class GeoFix(BaseModel):
    """A single GPS position sample."""
    model_config = ConfigDict(frozen=True)

    latitude: float = Field(..., ge=-90.0, le=90.0, serialization_alias="latitude")
    longitude: float = Field(..., ge=-180.0, le=180.0, serialization_alias="longitude")
    timestamp_ms: int = Field(..., serialization_alias="timestampMs")
    accuracy_meters: Optional[float] = Field(default=None, ge=0.0, serialization_alias="accuracyMeters")


class RunningSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True)

    distance_meters: float = Field(default=0.0, ge=0.0, serialization_alias="distanceMeters")
    pace_formatted: str = Field(default="00:00", serialization_alias="paceFormatted")
    form_score: int = Field(default=100, ge=0, le=100, serialization_alias="formScore")
    progress: float = Field(default=0.0, ge=0.0, le=1.0, serialization_alias="progress")
    completed: bool = Field(default=False, serialization_alias="completed")


class RunSummary(BaseModel):
    """Final figures for a completed run."""
    distance_meters: float = Field(default=0.0, ge=0.0, serialization_alias="distanceMeters")
    elapsed_seconds: float = Field(default=0.0, ge=0.0, serialization_alias="elapsedSeconds")
    pace_formatted: str = Field(default="00:00", serialization_alias="paceFormatted")
    form_score: int = Field(default=100, ge=0, le=100, serialization_alias="formScore")
    accepted_fixes: int = Field(default=0, ge=0, serialization_alias="acceptedFixes")
    estimated_calories: float = Field(default=0.0, ge=0.0, serialization_alias="estimatedCalories")
    completed: bool = Field(default=False, serialization_alias="completed")
    path: List[GeoFix] = Field(default_factory=list, serialization_alias="path")
