from abc import ABC, abstractmethod
from typing import Optional
import numpy as np


class FrameSourceInterface(ABC):
    @abstractmethod
    def read(self) -> Optional[np.ndarray]:
        """Return the current RGB frame, or None while video is not ready."""
        pass

    @abstractmethod
    def release(self) -> None:
        pass
