class InferenceError(Exception):
    """Base exception for pose estimation"""
    pass

class EstimatorUnavailableError(InferenceError):
    """The pose model or its backend could not be initialized"""
    pass

class EstimationFailedError(InferenceError):
    """A single estimation call failed"""
    pass
