import logging
import dotenv
from functools import lru_cache
from typing import Dict, Any

from pydantic import ValidationError

from .validators.config_validator import (
    AppConfig,
    MonitoringConfig,
    PoseConfig,
    PushupConfig,
    PullupConfig,
    SitupConfig,
    RunningConfig,
)
from .monitoring.factory import MonitoringFactory

logger = MonitoringFactory.get_logger("config")


def _default_config() -> AppConfig:
    """Built-in defaults, bypassing environment sources"""
    return AppConfig.model_construct(
        MONITORING=MonitoringConfig.model_construct(),
        POSE=PoseConfig.model_construct(),
        PUSHUP=PushupConfig.model_construct(),
        PULLUP=PullupConfig.model_construct(),
        SITUP=SitupConfig.model_construct(),
        RUNNING=RunningConfig.model_construct(),
    )


@lru_cache()
def get_config() -> AppConfig:
    """Get application configuration with environment variable overrides"""
    env_file = dotenv.find_dotenv(filename=".env", usecwd=True)
    if env_file:
        dotenv.load_dotenv(dotenv_path=env_file)
        logger.info(f"Configuration loaded from {env_file}")
    else:
        logger.info("Configuration loaded from environment variables")

    try:
        config = AppConfig()
    except ValidationError as e:
        logger.error(f"Error loading configuration: {e}")
        logger.warning("Using default configuration")
        return _default_config()

    logger.setLevel(getattr(logging, config.MONITORING.LOG_LEVEL))
    logger.info(f"Environment: {config.ENV}")
    logger.info(f"Visibility threshold: {config.POSE.VISIBILITY_THRESHOLD}")

    return config


def get_monitoring_settings() -> Dict[str, Any]:
    """Get monitoring-specific settings"""
    return get_config().MONITORING.model_dump()


def get_pose_settings() -> Dict[str, Any]:
    """Get settings shared by the pose graders"""
    return get_config().POSE.model_dump()


def get_pushup_settings() -> Dict[str, Any]:
    return get_config().PUSHUP.model_dump()


def get_pullup_settings() -> Dict[str, Any]:
    return get_config().PULLUP.model_dump()


def get_situp_settings() -> Dict[str, Any]:
    return get_config().SITUP.model_dump()


def get_running_settings() -> Dict[str, Any]:
    return get_config().RUNNING.model_dump()
