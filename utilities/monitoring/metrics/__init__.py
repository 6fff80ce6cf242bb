from .collectors import MetricsCollector
from .exporters import MetricsExporter, JSONFileExporter

__all__ = [
    'MetricsCollector',
    'MetricsExporter',
    'JSONFileExporter'
]
