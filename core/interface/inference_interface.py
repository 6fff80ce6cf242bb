from abc import ABC, abstractmethod
from typing import List
import numpy as np

from core.entities.pose_entity import Pose


class PoseEstimatorInterface(ABC):
    @abstractmethod
    async def estimate(self, frame: np.ndarray) -> List[Pose]:
        """
        Estimate the poses visible in a frame.

        Args:
            frame: RGB image as a (height, width, 3) uint8 array

        Returns:
            Zero or more poses with keypoints in frame pixel coordinates

        Raises:
            EstimatorUnavailableError: the model cannot serve requests at all
            EstimationFailedError: this particular call failed
        """
        pass

    @abstractmethod
    def teardown(self) -> None:
        """
        Clean up resources used by the estimator.
        This method should be called when the session ends to release
        model memory and any backend handles.
        """
        pass
