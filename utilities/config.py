import dotenv
from functools import lru_cache
from pathlib import Path

from .validators.config_validator import AppConfig, MonitoringConfig, PipelineConfig, VisionConfig

from posetrainer.utils.logging_config import setup_logger

logger = setup_logger("config", "config.log")

@lru_cache()
def get_config() -> AppConfig:
    """Get application configuration with environment variable overrides"""
    env_file = Path(".env")
    if dotenv.find_dotenv(filename=str(env_file), usecwd=True) != "":
        dotenv.load_dotenv(dotenv_path=env_file)
        logger.info("Configuration loaded from .env file")
    else:
        logger.info("Configuration loaded from environment variables")

    try:
        config = AppConfig()
    except Exception as e:
        logger.error(f"Error loading configuration: {e}")
        logger.warning("Using default configuration")
        return AppConfig.model_construct(
            VISION=VisionConfig.model_construct(),
            PIPELINE=PipelineConfig.model_construct(),
            MONITORING=MonitoringConfig.model_construct(),
        )

    logger.info(f"Environment: {config.ENV}")
    logger.info(f"Debug mode: {config.DEBUG}")
    logger.info(f"Tick interval: {config.PIPELINE.TICK_INTERVAL_MS} ms")

    return config
