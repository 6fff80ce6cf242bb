"""
Workout pose trainer.

Overlays a live skeleton on video, measures joint angles and counts
exercise repetitions with per-joint threshold hysteresis.
"""

from posetrainer.utils.warning_suppressor import suppress_warnings

# Suppress TensorFlow warnings before any model import
suppress_warnings()

__version__ = "0.1.0"
