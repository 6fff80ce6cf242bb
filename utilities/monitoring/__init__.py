"""
Monitoring
- Collects runtime metrics of the detection loop
- Exports collected metrics for offline inspection
"""

from .metrics import JSONFileExporter, MetricsCollector, MetricsExporter

__all__ = ["JSONFileExporter", "MetricsCollector", "MetricsExporter"]
