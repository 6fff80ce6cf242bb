import math
import os
import tempfile

import pytest

# Loggers are created at import time, so the log directory must be set before collection
os.environ.setdefault("POSETRAINER_LOG_DIR", os.path.join(tempfile.gettempdir(), "posetrainer-test-logs"))

from core.entities.pose_entity import Keypoint, Pose

MOVENET_NAMES = [
    "nose", "left_eye", "right_eye", "left_ear", "right_ear",
    "left_shoulder", "right_shoulder", "left_elbow", "right_elbow",
    "left_wrist", "right_wrist", "left_hip", "right_hip",
    "left_knee", "right_knee", "left_ankle", "right_ankle",
]


def _arm(side: str, elbow_angle: float, origin_x: float, score: float):
    # Shoulder straight above the elbow; the wrist swings away from it by the elbow angle
    elbow = (origin_x, 200.0)
    theta = math.radians(elbow_angle)
    wrist = (elbow[0] + 100.0 * math.sin(theta), elbow[1] - 100.0 * math.cos(theta))
    return [
        Keypoint(name=f"{side}_shoulder", x=origin_x, y=100.0, score=score),
        Keypoint(name=f"{side}_elbow", x=elbow[0], y=elbow[1], score=score),
        Keypoint(name=f"{side}_wrist", x=wrist[0], y=wrist[1], score=score),
    ]


@pytest.fixture
def make_arm_pose():
    """
    Factory for poses with a measured elbow angle.

    ``make_arm_pose(left, right=None, score=0.9, extra=())`` builds the left
    arm at angle ``left`` and, when given, the right arm at ``right``.
    """
    def factory(left, right=None, score=0.9, extra=()):
        keypoints = _arm("left", left, 300.0, score)
        if right is not None:
            keypoints += _arm("right", right, 100.0, score)
        keypoints += list(extra)
        return Pose(keypoints=keypoints)
    return factory


@pytest.fixture
def full_pose():
    """A pose holding every MoveNet keypoint, all confident."""
    return Pose(keypoints=[
        Keypoint(name=name, x=10.0 * i + 5, y=12.0 * i + 7, score=0.9)
        for i, name in enumerate(MOVENET_NAMES)
    ])
