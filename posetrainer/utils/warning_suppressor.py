import os
import warnings


def suppress_warnings():
    """Suppresses TensorFlow and library warnings to clean up the log output."""
    os.environ.setdefault('TF_CPP_MIN_LOG_LEVEL', '3')  # Suppress TensorFlow logs
    warnings.filterwarnings('ignore', category=DeprecationWarning, module='tensorflow.*')
    warnings.filterwarnings('ignore', category=UserWarning, module='tensorflow_hub.*')
