class MalformedKeypointError(ValueError):
    """Keypoint with a non-finite coordinate or a score outside [0, 1]"""

    def __init__(self, keypoint_name: str, reason: str):
        self.keypoint_name = keypoint_name
        self.reason = reason
        super().__init__(f"Malformed keypoint '{keypoint_name}': {reason}")
