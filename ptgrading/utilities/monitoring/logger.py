import os
import logging
from typing import Optional, Dict

from .logging import setup_logger
from .metrics import MetricsCollector, JSONFileExporter


class MonitoringService:
    def __init__(
        self,
        app_name: str,
        log_dir: str = "logs",
        metrics_dir: str = "metrics",
        log_level: int = logging.INFO
    ):
        self.app_name = app_name
        self.log_dir = log_dir
        self.metrics_dir = metrics_dir
        self.log_level = log_level
        self.loggers: Dict[str, logging.Logger] = {}
        self.metrics_collector = MetricsCollector()
        self.metrics_exporter = JSONFileExporter(metrics_dir)

    def get_logger(self, name: str) -> logging.Logger:
        """Get or create a logger for the specified name"""
        if name not in self.loggers:
            log_file = os.path.join(self.log_dir, f"{name}.log")
            self.loggers[name] = setup_logger(
                f"{self.app_name}.{name}",
                log_file,
                level=self.log_level
            )
        return self.loggers[name]

    def record_metric(
        self,
        name: str,
        value: float,
        labels: Optional[Dict[str, str]] = None
    ) -> None:
        """Record a metric value"""
        self.metrics_collector.record(name, value, labels)

    def export_metrics(self, clear: bool = True) -> Optional[str]:
        """Write collected metrics to disk and return the file path"""
        metrics = self.metrics_collector.get_metrics()
        if not metrics:
            return None
        output_file = self.metrics_exporter.export(metrics)
        if clear:
            self.metrics_collector.clear_metrics()
        return output_file
