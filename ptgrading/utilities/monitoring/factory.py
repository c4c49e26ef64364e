import logging
from typing import Optional

from .logger import MonitoringService


class MonitoringFactory:
    _instance: Optional[MonitoringService] = None

    @classmethod
    def get_monitoring_service(
        cls,
        app_name: str = "ptgrading",
        log_dir: str = "logs",
        metrics_dir: str = "metrics",
    ) -> MonitoringService:
        if not cls._instance:
            cls._instance = MonitoringService(app_name, log_dir, metrics_dir)
        return cls._instance

    @classmethod
    def get_logger(cls, module_name: str) -> logging.Logger:
        monitoring_service = cls.get_monitoring_service()
        return monitoring_service.get_logger(module_name)

    @classmethod
    def reset(cls) -> None:
        """Drop the shared service so the next call builds a fresh one"""
        cls._instance = None
