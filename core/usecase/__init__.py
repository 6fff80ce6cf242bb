from .pipeline_usecase import FramePipeline

__all__ = [
    "FramePipeline",
]
