import math
from typing import List, Tuple

import numpy as np

from core.entities.exercise import ExerciseProfile
from core.entities.pose_entity import AngleReading, Pose

# Returned when an angle cannot be measured (coincident or non-finite points)
ANGLE_UNAVAILABLE = float("nan")


def is_angle_available(angle: float) -> bool:
    return angle is not None and math.isfinite(angle)


def angle_at(a: Tuple[float, float], b: Tuple[float, float], c: Tuple[float, float]) -> float:
    """
    Angle at vertex b formed by points a, b, c, in degrees within [0, 180].

    Returns ANGLE_UNAVAILABLE when any point is non-finite or when a and b,
    or b and c, coincide.
    """
    a = np.asarray(a, dtype=float)
    b = np.asarray(b, dtype=float)
    c = np.asarray(c, dtype=float)
    if not (np.all(np.isfinite(a)) and np.all(np.isfinite(b)) and np.all(np.isfinite(c))):
        return ANGLE_UNAVAILABLE

    # Vectors AB and BC
    ab = b - a
    bc = c - b

    magnitude = np.linalg.norm(ab) * np.linalg.norm(bc)
    if magnitude == 0.0 or not np.isfinite(magnitude):
        return ANGLE_UNAVAILABLE

    # Avoid domain errors due to floating point precision
    cos_turn = np.clip(np.dot(ab, bc) / magnitude, -1.0, 1.0)

    # acos gives the turn from AB to BC; the angle at the vertex is its supplement
    turn = np.arccos(cos_turn) * (180.0 / np.pi)
    return float(180.0 - turn)


def joint_angles(pose: Pose, profile: ExerciseProfile) -> List[AngleReading]:
    """
    Measure every angle triple of the profile that is fully present in the pose.

    Triples with a missing keypoint or an unavailable angle are skipped.
    """
    keypoints = pose.keypoint_map()
    readings = []
    for a, b, c in profile.angle_triples:
        if a not in keypoints or b not in keypoints or c not in keypoints:
            continue
        angle = angle_at(keypoints[a].as_point(), keypoints[b].as_point(), keypoints[c].as_point())
        if not is_angle_available(angle):
            continue
        readings.append(AngleReading(joint=b, angle=angle, thresholds=profile.thresholds))
    return readings
