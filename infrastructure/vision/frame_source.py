from typing import Optional, Union

import cv2
import numpy as np

from core.interface.frame_source_interface import FrameSourceInterface
from posetrainer.utils.logging_config import setup_logger

logger = setup_logger("frame-source", "vision.log")


class OpenCVFrameSource(FrameSourceInterface):
    """Reads RGB frames from a camera index or a video file through cv2.VideoCapture."""

    def __init__(self, source: Union[int, str] = 0,
                 width: Optional[int] = None,
                 height: Optional[int] = None):
        self._source = source
        self._capture = cv2.VideoCapture(source)
        if width:
            self._capture.set(cv2.CAP_PROP_FRAME_WIDTH, width)
        if height:
            self._capture.set(cv2.CAP_PROP_FRAME_HEIGHT, height)
        if not self._capture.isOpened():
            logger.warning(f"Video source {source} could not be opened")

    @property
    def is_open(self) -> bool:
        return self._capture is not None and self._capture.isOpened()

    def read(self) -> Optional[np.ndarray]:
        if not self.is_open:
            return None
        ok, frame = self._capture.read()
        if not ok or frame is None:
            return None
        return cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)

    def release(self) -> None:
        if self._capture is not None:
            self._capture.release()
            self._capture = None
            logger.info(f"Released video source {self._source}")
