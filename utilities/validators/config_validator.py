from typing import Optional
from pydantic import ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings

from core.entities.exercise import resolve_exercise
from infrastructure.inference.constants import MOVENET_INPUT_SIZE, MOVENET_LIGHTNING_URL


class VisionConfig(BaseSettings):
    """Pose model and camera configuration with defaults"""
    model_config = ConfigDict(
        extra="allow",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        env_prefix="",
        env_nested_delimiter="__"
    )
    MODEL_URL: str = Field(
        default=MOVENET_LIGHTNING_URL,
        description="URL to the MoveNet model"
    )
    INPUT_SIZE: int = Field(
        default=MOVENET_INPUT_SIZE,
        description="Square input size expected by the model"
    )
    ENABLE_GPU: bool = Field(
        default=False,
        description="Enable GPU acceleration"
    )
    CAMERA_INDEX: int = Field(
        default=0,
        description="Index of the camera to read frames from"
    )
    FRAME_WIDTH: int = Field(
        default=640,
        description="Requested frame width in pixels"
    )
    FRAME_HEIGHT: int = Field(
        default=480,
        description="Requested frame height in pixels"
    )

    @field_validator('INPUT_SIZE', 'FRAME_WIDTH', 'FRAME_HEIGHT')
    def validate_positive(cls, v):
        if v < 1:
            raise ValueError('Sizes must be positive')
        return v


class PipelineConfig(BaseSettings):
    """Detection loop configuration with defaults"""
    model_config = ConfigDict(
        extra="allow",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        env_prefix="",
        env_nested_delimiter="__"
    )
    TICK_INTERVAL_MS: int = Field(
        default=100,
        description="Nominal milliseconds between detection ticks"
    )
    DEFAULT_EXERCISE: Optional[str] = Field(
        default=None,
        description="Exercise selected at startup"
    )

    @field_validator('TICK_INTERVAL_MS')
    def validate_tick_interval(cls, v):
        if v < 1:
            raise ValueError('Tick interval must be at least 1 millisecond')
        return v

    @field_validator('DEFAULT_EXERCISE')
    def validate_default_exercise(cls, v):
        if v is None or v == "":
            return None
        exercise = resolve_exercise(v)
        if exercise is None:
            raise ValueError(f'Unknown exercise: {v}')
        return exercise.value

    @property
    def tick_interval(self) -> float:
        return self.TICK_INTERVAL_MS / 1000.0


class MonitoringConfig(BaseSettings):
    """Monitoring configuration with defaults"""
    model_config = ConfigDict(
        extra="allow",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        env_prefix="",
        env_nested_delimiter="__"
    )
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Logging level"
    )
    ENABLE_RESOURCE_MONITORING: bool = Field(
        default=False,
        description="Periodically log CPU and memory usage"
    )
    RESOURCE_INTERVAL: int = Field(
        default=30,
        description="Resource logging interval in seconds"
    )
    METRICS_DIR: str = Field(
        default="metrics",
        description="Directory for metrics files"
    )

    @field_validator('LOG_LEVEL')
    def validate_log_level(cls, v):
        level = v.upper()
        if level not in ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']:
            raise ValueError('LOG_LEVEL must be a standard logging level name')
        return level

    @field_validator('RESOURCE_INTERVAL')
    def validate_resource_interval(cls, v):
        if v < 1:
            raise ValueError('Resource interval must be at least 1 second')
        return v


class AppConfig(BaseSettings):
    """Application configuration with defaults and environment variable support"""
    model_config = ConfigDict(
        extra="allow",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        env_nested_delimiter="__"
    )
    APP_NAME: str = Field(
        default="posetrainer",
        description="Application name"
    )
    ENV: str = Field(
        default="development",
        description="Environment (development, testing, production)"
    )
    DEBUG: bool = Field(
        default=False,
        description="Debug mode"
    )

    # Component Configurations
    VISION: VisionConfig = Field(
        default_factory=VisionConfig,
        description="Vision configuration"
    )
    PIPELINE: PipelineConfig = Field(
        default_factory=PipelineConfig,
        description="Pipeline configuration"
    )
    MONITORING: MonitoringConfig = Field(
        default_factory=MonitoringConfig,
        description="Monitoring configuration"
    )

    @field_validator('ENV')
    def validate_env(cls, v):
        if v not in ['development', 'testing', 'production']:
            raise ValueError('ENV must be one of: development, testing, production')
        return v
