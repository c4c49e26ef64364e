from typing import Dict, List
import json
import os
from datetime import datetime, timezone

from ptgrading.core.entities.monitoring import Metric
from ptgrading.core.interface.monitoring_interface import MetricsExporter


class JSONFileExporter(MetricsExporter):
    def __init__(self, output_dir: str):
        self.output_dir = output_dir

    def export(self, metrics: Dict[str, List[Metric]]) -> str:
        os.makedirs(self.output_dir, exist_ok=True)
        timestamp = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S_%f")
        output_file = os.path.join(self.output_dir, f"metrics_{timestamp}.json")

        metrics_data = {
            name: [
                {
                    "value": m.value,
                    "timestamp": m.timestamp.isoformat(),
                    "labels": m.labels
                }
                for m in metric_list
            ]
            for name, metric_list in metrics.items()
        }

        with open(output_file, "w", encoding="utf-8") as f:
            json.dump(metrics_data, f, indent=2)

        return output_file
