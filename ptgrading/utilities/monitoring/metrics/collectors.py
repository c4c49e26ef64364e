from typing import Dict, List, Optional
import threading

from ptgrading.core.entities.monitoring import Metric


class MetricsCollector:
    """Thread-safe in-memory store of metric samples keyed by metric name."""

    def __init__(self):
        self._metrics: Dict[str, List[Metric]] = {}
        self._lock = threading.Lock()

    def record(
        self,
        name: str,
        value: float,
        labels: Optional[Dict[str, str]] = None
    ) -> None:
        """Record a metric value"""
        with self._lock:
            self._metrics.setdefault(name, []).append(
                Metric(name=name, value=float(value), labels=labels or {})
            )

    def get_metrics(self, name: Optional[str] = None) -> Dict[str, List[Metric]]:
        """Get recorded metrics"""
        with self._lock:
            if name:
                return {name: list(self._metrics.get(name, []))}
            return {key: list(values) for key, values in self._metrics.items()}

    def latest(self, name: str) -> Optional[Metric]:
        """Most recent sample for a metric, if any"""
        with self._lock:
            samples = self._metrics.get(name)
            return samples[-1] if samples else None

    def clear_metrics(self, name: Optional[str] = None) -> None:
        """Clear recorded metrics"""
        with self._lock:
            if name:
                self._metrics.pop(name, None)
            else:
                self._metrics.clear()
