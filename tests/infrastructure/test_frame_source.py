from unittest.mock import MagicMock, patch

import numpy as np
import pytest

from infrastructure.vision.frame_source import OpenCVFrameSource


@pytest.fixture
def capture():
    capture = MagicMock()
    capture.isOpened.return_value = True
    return capture


class TestOpenCVFrameSource:
    def test_read_returns_rgb_frame(self, capture):
        bgr = np.zeros((4, 4, 3), dtype=np.uint8)
        bgr[..., 0] = 255  # blue channel
        capture.read.return_value = (True, bgr)

        with patch("infrastructure.vision.frame_source.cv2.VideoCapture", return_value=capture):
            source = OpenCVFrameSource(0, width=640, height=480)
            frame = source.read()

        assert frame[0, 0].tolist() == [0, 0, 255]

    def test_failed_read_returns_none(self, capture):
        capture.read.return_value = (False, None)

        with patch("infrastructure.vision.frame_source.cv2.VideoCapture", return_value=capture):
            source = OpenCVFrameSource(0)
            assert source.read() is None

    def test_release_closes_capture(self, capture):
        with patch("infrastructure.vision.frame_source.cv2.VideoCapture", return_value=capture):
            source = OpenCVFrameSource("clip.mp4")
            source.release()

        capture.release.assert_called_once()
        assert source.read() is None
        assert not source.is_open
