from .inference_interface import PoseEstimatorInterface
from .surface_interface import DrawingSurface, Color, Point
from .frame_source_interface import FrameSourceInterface
from .observer_interface import PipelineObserver

__all__ = [
    "PoseEstimatorInterface",
    "DrawingSurface",
    "Color",
    "Point",
    "FrameSourceInterface",
    "PipelineObserver",
]
