from pydantic import BaseModel, Field, AliasChoices
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

NOSE = "nose"
SIDES = ("left", "right")


def paired(part: str) -> Tuple[str, str]:
    """Left/right landmark names for a body part, e.g. ``shoulder``."""
    return tuple(f"{side}_{part}" for side in SIDES)


class Landmark(BaseModel):
    x: float = Field(..., serialization_alias="x")
    y: float = Field(..., serialization_alias="y")
    z: Optional[float] = Field(default=None, serialization_alias="z")
    visibility: float = Field(
        default=1.0,
        ge=0.0,
        le=1.0,
        serialization_alias="visibility",
        validation_alias=AliasChoices("visibility", "confidence"),
    )

    def as_tuple(self) -> Tuple[float, float, float]:
        return (self.x, self.y, self.visibility)

    def is_visible(self, threshold: float) -> bool:
        return self.visibility >= threshold


class PoseFrame(BaseModel):
    """All landmarks detected for a single camera frame."""

    landmarks: Dict[str, Landmark] = Field(default_factory=dict)
    timestamp: Optional[float] = Field(
        default=None,
        description="Capture time in seconds; graders fall back to their clock when absent",
    )

    @classmethod
    def from_keypoints(
        cls,
        keypoints: Mapping[str, Sequence[float]],
        timestamp: Optional[float] = None,
    ) -> "PoseFrame":
        """
        Build a frame from raw detector output.

        Args:
            keypoints: Mapping of {name: (x, y, visibility)}
            timestamp: Optional capture time in seconds

        Returns:
            PoseFrame
        """
        landmarks = {}
        for name, (x, y, visibility) in keypoints.items():
            landmarks[name] = Landmark(x=float(x), y=float(y), visibility=float(visibility))
        return cls(landmarks=landmarks, timestamp=timestamp)

    def get(self, name: str) -> Optional[Landmark]:
        return self.landmarks.get(name)

    def missing(self, names: Iterable[str], threshold: float) -> List[str]:
        """Names that are absent or below the visibility threshold."""
        return [
            name for name in names
            if name not in self.landmarks or not self.landmarks[name].is_visible(threshold)
        ]

    def is_visible(self, names: Iterable[str], threshold: float) -> bool:
        return not self.missing(names, threshold)

    def average(self, part: str) -> Optional[Landmark]:
        """Midpoint of the left and right landmark of a body part.

        Returns None if either side is missing. The visibility of the
        result is the weaker of the two sides.
        """
        left, right = (self.landmarks.get(name) for name in paired(part))
        if left is None or right is None:
            return None
        return Landmark(
            x=(left.x + right.x) / 2,
            y=(left.y + right.y) / 2,
            visibility=min(left.visibility, right.visibility),
        )
