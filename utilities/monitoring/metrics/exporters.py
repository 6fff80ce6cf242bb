from abc import ABC, abstractmethod
from typing import Dict, List
import json
import os
from datetime import datetime, timezone

from core.entities.monitoring import Metric

class MetricsExporter(ABC):
    @abstractmethod
    def export(self, metrics: Dict[str, List[Metric]]) -> str:
        """Export metrics and return where they were written"""
        pass

class JSONFileExporter(MetricsExporter):
    def __init__(self, output_dir: str):
        self.output_dir = output_dir
        os.makedirs(output_dir, exist_ok=True)
    
    def export(self, metrics: Dict[str, List[Metric]]) -> str:
        timestamp = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
        output_file = os.path.join(self.output_dir, f"metrics_{timestamp}.json")
        
        metrics_data = {
            name: [m.to_dict() for m in metric_list]
            for name, metric_list in metrics.items()
        }
        
        with open(output_file, 'w') as f:
            json.dump(metrics_data, f, indent=2)
        return output_file
