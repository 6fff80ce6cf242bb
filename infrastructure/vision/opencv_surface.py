from typing import Tuple

import cv2
import numpy as np

from core.interface.surface_interface import Color, DrawingSurface, Point

DEGREE_SIGN = "°"


def _to_bgr(color: Color) -> Tuple[int, int, int]:
    r, g, b = color
    return (int(b), int(g), int(r))


class OpenCVSurface(DrawingSurface):
    """
    Drawing surface backed by a BGR numpy image, ready for ``cv2.imshow``.

    Frames handed to ``draw_frame`` are RGB, as produced by the frame
    source. The surface follows their dimensions so that keypoints in frame
    pixel coordinates land on the right spot.
    """

    def __init__(self, width: int, height: int, font_scale: float = 0.5):
        if width <= 0 or height <= 0:
            raise ValueError("Surface dimensions must be positive")
        self._width = width
        self._height = height
        self._font = cv2.FONT_HERSHEY_SIMPLEX
        self._font_scale = font_scale
        self._canvas = np.zeros((height, width, 3), dtype=np.uint8)

    @property
    def size(self) -> Tuple[int, int]:
        return (self._width, self._height)

    @property
    def image(self) -> np.ndarray:
        """The current BGR canvas."""
        return self._canvas

    def to_rgb(self) -> np.ndarray:
        return cv2.cvtColor(self._canvas, cv2.COLOR_BGR2RGB)

    def resize(self, width: int, height: int) -> None:
        """Match the surface to new video dimensions."""
        if (width, height) == self.size:
            return
        self._width = width
        self._height = height
        self._canvas = np.zeros((height, width, 3), dtype=np.uint8)

    def clear(self) -> None:
        self._canvas[:] = 0

    def draw_frame(self, frame: np.ndarray) -> None:
        if frame.ndim == 2:
            frame = cv2.cvtColor(frame, cv2.COLOR_GRAY2RGB)
        self.resize(frame.shape[1], frame.shape[0])
        self._canvas[:] = cv2.cvtColor(frame, cv2.COLOR_RGB2BGR)

    def draw_line(self, start: Point, end: Point, color: Color, thickness: int) -> None:
        cv2.line(self._canvas, start, end, _to_bgr(color), thickness, cv2.LINE_AA)

    def draw_circle(self, center: Point, radius: int, color: Color) -> None:
        cv2.circle(self._canvas, center, radius, _to_bgr(color), -1, cv2.LINE_AA)

    def draw_text(self, text: str, origin: Point, color: Color) -> None:
        bgr = _to_bgr(color)
        # Hershey fonts are ASCII only, so a trailing degree sign is drawn as a ring
        degree = text.endswith(DEGREE_SIGN)
        if degree:
            text = text[: -len(DEGREE_SIGN)]
        cv2.putText(self._canvas, text, origin, self._font, self._font_scale, bgr, 1, cv2.LINE_AA)
        if degree:
            (text_width, text_height), _ = cv2.getTextSize(text, self._font, self._font_scale, 1)
            ring_center = (origin[0] + text_width + 4, origin[1] - text_height + 2)
            cv2.circle(self._canvas, ring_center, 2, bgr, 1, cv2.LINE_AA)
