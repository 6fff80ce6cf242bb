import asyncio
import gc
import os
import time
import tensorflow as tf
import tensorflow_hub as hub
import numpy as np
from typing import List, Optional

from .constants import MOVENET_INPUT_SIZE, MOVENET_LIGHTNING_URL
from .keypoints import keypoints_to_pose
from core.entities.pose_entity import Pose
from core.exceptions import EstimationFailedError, EstimatorUnavailableError
from core.interface import PoseEstimatorInterface
from posetrainer.utils.logging_config import setup_logger

# Setup logging
logger = setup_logger("movenet-inference", "inference.log")


class MoveNetPoseEstimator(PoseEstimatorInterface):
    """
    Pose estimator backed by the single-pose MoveNet model from TensorFlow Hub.
    Inference runs in the default executor so the event loop stays responsive.
    """

    def __init__(self,
                 model_url: Optional[str] = None,
                 input_size: int = MOVENET_INPUT_SIZE,
                 enable_gpu: bool = False) -> None:
        """
        Initialize the MoveNet estimator.

        Args:
            model_url: URL or local path of the TensorFlow Hub MoveNet model
            input_size: Square input resolution the model expects
            enable_gpu: Whether to enable GPU acceleration

        Raises:
            EstimatorUnavailableError: If the model cannot be loaded
        """
        self._configure_tensorflow(enable_gpu)

        self._model_url = model_url or MOVENET_LIGHTNING_URL
        self._input_size = input_size

        try:
            self._model = hub.load(self._model_url)
            self._movenet = self._model.signatures["serving_default"]
            logger.info(f"Initialized MoveNet estimator with model: {self._model_url}")
        except Exception as e:
            logger.error(f"Failed to initialize MoveNet estimator: {e}")
            raise EstimatorUnavailableError(f"Failed to load MoveNet model: {e}") from e

    def _configure_tensorflow(self, enable_gpu: bool) -> None:
        """
        Configure TensorFlow devices.
        
        Args:
            enable_gpu: Whether to enable GPU acceleration
        """
        try:
            physical_devices = tf.config.list_physical_devices('GPU')
            if not enable_gpu:
                if physical_devices:
                    tf.config.set_visible_devices([], 'GPU')
                return
            if physical_devices:
                logger.info(f"Found {len(physical_devices)} GPU(s)")
                # Grow memory on demand instead of pre-allocating all GPU memory
                for device in physical_devices:
                    tf.config.experimental.set_memory_growth(device, True)
                os.environ['TF_GPU_THREAD_MODE'] = 'gpu_private'
            else:
                logger.warning("No GPU found. Using CPU.")
        except RuntimeError as e:
            # Devices can only be configured before TensorFlow initializes them
            logger.warning(f"Error configuring GPU: {e}. Keeping current device setup.")

    def _preprocess(self, frame: np.ndarray) -> tf.Tensor:
        img = tf.image.resize_with_pad(tf.expand_dims(frame, axis=0), self._input_size, self._input_size)
        return tf.cast(img, dtype=tf.int32)

    def infer(self, frame: np.ndarray) -> List[Pose]:
        """
        Run inference on a single RGB frame.

        Returns:
            A list holding the single detected pose

        Raises:
            EstimatorUnavailableError: If the estimator was torn down
            EstimationFailedError: If the model call fails
        """
        if self._movenet is None:
            raise EstimatorUnavailableError("MoveNet estimator has been torn down")
        try:
            start_time = time.time()
            results = self._movenet(self._preprocess(frame))
            keypoints_data = results["output_0"].numpy()[0, 0, :, :3]
            pose = keypoints_to_pose(keypoints_data, frame.shape)
            logger.debug(f"Inference completed in {time.time() - start_time:.4f}s")
            return [pose]
        except Exception as e:
            logger.error(f"Error during inference: {e}")
            raise EstimationFailedError(str(e)) from e

    async def estimate(self, frame: np.ndarray) -> List[Pose]:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self.infer, frame)

    def teardown(self) -> None:
        """
        Release the model.
        """
        self._movenet = None
        self._model = None
        if tf.config.list_physical_devices('GPU'):
            tf.keras.backend.clear_session()
        gc.collect()
        logger.info("MoveNetPoseEstimator successfully torn down")
