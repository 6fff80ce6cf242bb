from typing import Tuple

import numpy as np

from .constants import KEYPOINT_DICT
from core.entities.pose_entity import Keypoint, Pose


def keypoints_to_pose(keypoints_data: np.ndarray, image_shape: Tuple[int, ...]) -> Pose:
    """
    Convert MoveNet output to a pose in image pixel coordinates.

    MoveNet sees the frame letterboxed into a square, so its normalized
    (y, x) coordinates are relative to that square. The padding is removed
    here so keypoints line up with the original frame.

    Args:
        keypoints_data: (17, 3) array of normalized (y, x, score) rows
        image_shape: Shape of the original frame (height, width, channels)

    Returns:
        Pose with one keypoint per MoveNet landmark
    """
    height, width = image_shape[0], image_shape[1]
    side = max(height, width)
    pad_x = (side - width) / 2.0
    pad_y = (side - height) / 2.0

    keypoints = []
    for name, index in KEYPOINT_DICT.items():
        ky, kx, kp_conf = keypoints_data[index]
        keypoints.append(Keypoint(
            name=name,
            x=float(kx) * side - pad_x,
            y=float(ky) * side - pad_y,
            score=float(kp_conf),
        ))
    return Pose(keypoints=keypoints)
