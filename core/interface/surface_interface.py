from abc import ABC, abstractmethod
from typing import Tuple
import numpy as np

Color = Tuple[int, int, int]
Point = Tuple[int, int]


class DrawingSurface(ABC):
    """Drawable overlay target. Colors are RGB tuples."""

    @property
    @abstractmethod
    def size(self) -> Tuple[int, int]:
        """(width, height) in pixels"""
        pass

    @abstractmethod
    def clear(self) -> None:
        pass

    @abstractmethod
    def draw_frame(self, frame: np.ndarray) -> None:
        """Paint an RGB video frame as the background."""
        pass

    @abstractmethod
    def draw_line(self, start: Point, end: Point, color: Color, thickness: int) -> None:
        pass

    @abstractmethod
    def draw_circle(self, center: Point, radius: int, color: Color) -> None:
        """Draw a filled circle."""
        pass

    @abstractmethod
    def draw_text(self, text: str, origin: Point, color: Color) -> None:
        pass
