from .exercise import (
    AngleTriple,
    JointState,
    Thresholds,
    ExerciseProfile,
    ExerciseType,
    EXERCISE_PROFILES,
    resolve_exercise,
    get_profile,
    available_exercises,
)
from .pose_entity import (
    MIN_KEYPOINT_SCORE,
    Keypoint,
    Pose,
    AngleReading,
    FrameResult,
)
from .monitoring import Metric

__all__ = [
    "AngleTriple",
    "JointState",
    "Thresholds",
    "ExerciseProfile",
    "ExerciseType",
    "EXERCISE_PROFILES",
    "resolve_exercise",
    "get_profile",
    "available_exercises",
    "MIN_KEYPOINT_SCORE",
    "Keypoint",
    "Pose",
    "AngleReading",
    "FrameResult",
    "Metric",
]
