from .config_validator import (
    AppConfig,
    MonitoringConfig,
    PoseConfig,
    PushupConfig,
    PullupConfig,
    SitupConfig,
    RunningConfig,
)

__all__ = [
    "AppConfig",
    "MonitoringConfig",
    "PoseConfig",
    "PushupConfig",
    "PullupConfig",
    "SitupConfig",
    "RunningConfig",
]
