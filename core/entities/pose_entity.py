from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .exercise import ExerciseType, JointState, Thresholds

# A keypoint is drawn and measured only above this confidence
MIN_KEYPOINT_SCORE = 0.3


class Keypoint(BaseModel):
    """A named 2-D body landmark in pixel coordinates with its confidence."""
    model_config = ConfigDict(frozen=True)

    name: str
    x: float
    y: float
    score: float

    @property
    def is_usable(self) -> bool:
        return self.score > MIN_KEYPOINT_SCORE

    def as_point(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def as_pixel(self) -> Tuple[int, int]:
        return (int(round(self.x)), int(round(self.y)))


class Pose(BaseModel):
    """All keypoints of one detected body for a single frame."""
    model_config = ConfigDict(frozen=True)

    keypoints: List[Keypoint] = Field(default_factory=list)
    score: Optional[float] = None

    @field_validator("keypoints")
    def validate_unique_names(cls, v):
        names = [kp.name for kp in v]
        if len(names) != len(set(names)):
            raise ValueError("Keypoint names must be unique within a pose")
        return v

    def keypoint_map(self) -> Dict[str, Keypoint]:
        return {kp.name: kp for kp in self.keypoints}

    def get(self, name: str) -> Optional[Keypoint]:
        for kp in self.keypoints:
            if kp.name == name:
                return kp
        return None

    def with_keypoints(self, keypoints: List[Keypoint]) -> "Pose":
        return Pose(keypoints=keypoints, score=self.score)


class AngleReading(BaseModel):
    """Angle measured at a vertex joint on the current frame."""
    model_config = ConfigDict(frozen=True)

    joint: str
    angle: float
    thresholds: Thresholds


class FrameResult(BaseModel):
    """What one applied pipeline tick reports back to its caller."""
    exercise: Optional[ExerciseType] = None
    rep_count: int = 0
    angles: List[AngleReading] = Field(default_factory=list)
    joint_states: Dict[str, JointState] = Field(default_factory=dict)
