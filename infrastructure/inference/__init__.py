from infrastructure.inference.constants import KEYPOINT_DICT
from infrastructure.inference.factory import InferenceServiceFactory
from infrastructure.inference.keypoints import keypoints_to_pose

__all__ = [
    "KEYPOINT_DICT",
    "InferenceServiceFactory",
    "keypoints_to_pose",
]
