from .geometry_service import ANGLE_UNAVAILABLE, angle_at, is_angle_available, joint_angles
from .keypoint_filter import filter_keypoints, validate_keypoint
from .rep_counter_service import RepetitionStateMachine
from .overlay_service import (
    SKELETON_EDGES,
    OverlayRenderer,
    angle_progress,
    format_angle,
    format_rgb,
    line_color,
    progress_color,
)

__all__ = [
    "ANGLE_UNAVAILABLE",
    "angle_at",
    "is_angle_available",
    "joint_angles",
    "filter_keypoints",
    "validate_keypoint",
    "RepetitionStateMachine",
    "SKELETON_EDGES",
    "OverlayRenderer",
    "angle_progress",
    "format_angle",
    "format_rgb",
    "line_color",
    "progress_color",
]
