from abc import ABC, abstractmethod
from typing import Dict, List

from ptgrading.core.entities.monitoring import Metric


class MetricsExporter(ABC):
    @abstractmethod
    def export(self, metrics: Dict[str, List[Metric]]) -> str:
        """
        Persist a batch of metrics.

        Args:
            metrics: Samples grouped by metric name

        Returns:
            Location the batch was written to
        """
        pass
