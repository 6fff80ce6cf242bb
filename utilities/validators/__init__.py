"""
Config
- Manages application configuration
- Handles environment-specific settings
- Provides configuration loading and validation
"""

from utilities.validators.config_validator import AppConfig, MonitoringConfig, PipelineConfig, VisionConfig

__all__ = [
    'AppConfig',
    'MonitoringConfig',
    'PipelineConfig',
    'VisionConfig'
]
