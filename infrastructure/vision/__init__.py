"""
Vision module: OpenCV frame sources and drawing surfaces
"""

from .opencv_surface import OpenCVSurface
from .frame_source import OpenCVFrameSource

__all__ = ["OpenCVSurface", "OpenCVFrameSource"]
