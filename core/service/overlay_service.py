import math
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from core.entities.exercise import ExerciseProfile, Thresholds
from core.entities.pose_entity import AngleReading, Pose
from core.interface.surface_interface import Color, DrawingSurface
from core.service.geometry_service import is_angle_available, joint_angles

# MoveNet skeleton; an edge is colored by the angle at its second joint
SKELETON_EDGES: Tuple[Tuple[str, str], ...] = (
    ("nose", "left_eye"),
    ("nose", "right_eye"),
    ("left_eye", "left_ear"),
    ("right_eye", "right_ear"),
    ("left_shoulder", "left_elbow"),
    ("left_elbow", "left_wrist"),
    ("right_shoulder", "right_elbow"),
    ("right_elbow", "right_wrist"),
    ("left_shoulder", "right_shoulder"),
    ("left_shoulder", "left_hip"),
    ("right_shoulder", "right_hip"),
    ("left_hip", "left_knee"),
    ("right_hip", "right_knee"),
    ("left_knee", "left_ankle"),
    ("right_knee", "right_ankle"),
    ("left_hip", "right_hip"),
)

WHITE: Color = (255, 255, 255)
GREEN: Color = (0, 255, 0)

EDGE_THICKNESS = 4
KEYPOINT_RADIUS = 5
ANGLE_TEXT_OFFSET = (10, -10)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def progress_color(progress: float) -> Color:
    """
    Color for a rep progress value in [0, 1].

    Below halfway the edge stays white, from halfway it ramps its green
    channel up towards yellow, and a completed rep turns it green.
    """
    if progress < 0.5:
        return WHITE
    if progress < 1.0:
        normalized = (progress - 0.5) * 2
        return (255, _round_half_up(255 * normalized), 0)
    return GREEN


def angle_progress(angle: float, thresholds: Thresholds) -> float:
    return float(np.clip((thresholds.start - angle) / thresholds.span, 0.0, 1.0))


def line_color(angle: float, thresholds: Thresholds) -> Color:
    return progress_color(angle_progress(angle, thresholds))


def format_rgb(color: Color) -> str:
    r, g, b = color
    return f"rgb({r}, {g}, {b})"


def format_angle(angle: float) -> str:
    return f"{angle:.1f}°"


class OverlayRenderer:
    """
    Draws the skeleton, keypoints and angle labels of one pose on a surface.

    The renderer only reads the pose and angle readings it is given.
    """

    def __init__(self, edges: Sequence[Tuple[str, str]] = SKELETON_EDGES):
        self._edges = tuple(edges)

    def render(
        self,
        pose: Pose,
        frame: np.ndarray,
        surface: DrawingSurface,
        profile: Optional[ExerciseProfile],
        angles: Optional[List[AngleReading]] = None,
    ) -> None:
        surface.clear()
        surface.draw_frame(frame)

        if angles is None:
            angles = joint_angles(pose, profile) if profile else []
        angle_colors = self._angle_colors(angles)

        keypoints = pose.keypoint_map()
        self._draw_skeleton(keypoints, surface, angle_colors)
        self._draw_keypoints(pose, surface)
        if profile is not None and profile.display_angle:
            self._draw_angle_labels(keypoints, surface, angles)

    def _angle_colors(self, angles: List[AngleReading]) -> Dict[str, Color]:
        colors = {}
        for reading in angles:
            if is_angle_available(reading.angle):
                colors[reading.joint] = line_color(reading.angle, reading.thresholds)
        return colors

    def _draw_skeleton(self, keypoints, surface: DrawingSurface, angle_colors: Dict[str, Color]) -> None:
        for start, end in self._edges:
            a = keypoints.get(start)
            b = keypoints.get(end)
            if a is None or b is None or not (a.is_usable and b.is_usable):
                continue
            color = angle_colors.get(end, WHITE)
            surface.draw_line(a.as_pixel(), b.as_pixel(), color, EDGE_THICKNESS)

    def _draw_keypoints(self, pose: Pose, surface: DrawingSurface) -> None:
        for keypoint in pose.keypoints:
            if keypoint.is_usable:
                surface.draw_circle(keypoint.as_pixel(), KEYPOINT_RADIUS, WHITE)

    def _draw_angle_labels(self, keypoints, surface: DrawingSurface, angles: List[AngleReading]) -> None:
        dx, dy = ANGLE_TEXT_OFFSET
        for reading in angles:
            vertex = keypoints.get(reading.joint)
            if vertex is None or not is_angle_available(reading.angle):
                continue
            x, y = vertex.as_pixel()
            surface.draw_text(format_angle(reading.angle), (x + dx, y + dy), WHITE)
