from .inference import InferenceError, EstimatorUnavailableError, EstimationFailedError
from .pose import MalformedKeypointError

__all__ = [
    "InferenceError",
    "EstimatorUnavailableError",
    "EstimationFailedError",
    "MalformedKeypointError",
]
