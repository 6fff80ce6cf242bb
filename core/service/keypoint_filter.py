import math
from typing import Optional

from core.entities.exercise import ExerciseProfile
from core.entities.pose_entity import Keypoint, Pose
from core.exceptions import MalformedKeypointError

from posetrainer.utils.logging_config import setup_logger

logger = setup_logger("service.keypoint-filter", "core.log")


def validate_keypoint(keypoint: Keypoint) -> Keypoint:
    """
    Check that a keypoint can be measured and drawn.

    Raises:
        MalformedKeypointError: non-finite coordinate or score outside [0, 1]
    """
    if not (math.isfinite(keypoint.x) and math.isfinite(keypoint.y)):
        raise MalformedKeypointError(keypoint.name, f"non-finite coordinate ({keypoint.x}, {keypoint.y})")
    if not 0.0 <= keypoint.score <= 1.0:
        raise MalformedKeypointError(keypoint.name, f"score {keypoint.score} outside [0, 1]")
    return keypoint


def filter_keypoints(pose: Pose, profile: Optional[ExerciseProfile]) -> Pose:
    """
    Reduce a pose to the keypoints the active exercise needs.

    Args:
        pose: Pose as returned by the estimator
        profile: Active exercise profile, or None when no exercise is selected

    Returns:
        A new pose. Malformed keypoints are always dropped. Without a profile
        every other keypoint is kept; with one, only keypoints named by its
        angle triples and scoring above the confidence floor remain.
    """
    kept = []
    for keypoint in pose.keypoints:
        try:
            validate_keypoint(keypoint)
        except MalformedKeypointError as e:
            logger.debug(f"Dropping keypoint: {e}")
            continue
        kept.append(keypoint)

    if profile is None:
        return pose.with_keypoints(kept)

    required = profile.required_keypoints
    return pose.with_keypoints([kp for kp in kept if kp.name in required and kp.is_usable])
