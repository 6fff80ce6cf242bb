"""
Core Layer
- Purpose: Pose-stream analysis, repetition counting and overlay rendering
- Key Directories:
    - entities
    - exceptions
    - interface
    - service
    - usecase
"""

from .entities import *
from .exceptions import *

__all__ = [
    "JointState",
    "Thresholds",
    "ExerciseProfile",
    "ExerciseType",
    "get_profile",
    "available_exercises",
    "Keypoint",
    "Pose",
    "AngleReading",
    "FrameResult",
    "Metric",
    "InferenceError",
    "EstimatorUnavailableError",
    "EstimationFailedError",
    "MalformedKeypointError",
]
