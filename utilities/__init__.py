"""
Utilities Layer
- Provides cross-cutting functionality
- Manages configuration and validation
- Collects and exports runtime metrics
"""

from .validators.config_validator import AppConfig, MonitoringConfig, PipelineConfig, VisionConfig

__all__ = [
    'AppConfig',
    'MonitoringConfig',
    'PipelineConfig',
    'VisionConfig',
]
