from typing import Dict, Any, Optional

from core.interface import PoseEstimatorInterface


class InferenceServiceFactory:
    """
    Factory for creating pose estimator instances.
    """

    @staticmethod
    def create_estimator(
        service_type: str, config: Optional[Dict[str, Any]] = None
    ) -> PoseEstimatorInterface:
        """
        Create a pose estimator based on type.

        Args:
            service_type: Type of estimator to create
            config: Optional configuration parameters

        Returns:
            An instance of a PoseEstimatorInterface implementation

        Raises:
            ValueError: If an unsupported estimator type is requested
            EstimatorUnavailableError: If the estimator's model cannot be loaded
        """
        if config is None:
            config = {}

        if service_type.lower() in ["movenet", "posenet"]:
            # TensorFlow is only imported when a MoveNet estimator is requested
            from infrastructure.inference.movenet_inference import MoveNetPoseEstimator

            return MoveNetPoseEstimator(
                model_url=config.get("model_url"),
                input_size=config.get("input_size", 192),
                enable_gpu=config.get("enable_gpu", False),
            )
        else:
            raise ValueError(f"Unsupported inference service type: {service_type}")
