from typing import Dict, List, Optional
import threading

from core.entities.monitoring import Metric

class MetricsCollector:
    def __init__(self, max_samples: int = 10000):
        self._metrics: Dict[str, List[Metric]] = {}
        self._max_samples = max_samples
        self._lock = threading.Lock()
    
    def record(
        self,
        name: str,
        value: float,
        labels: Optional[Dict[str, str]] = None
    ) -> None:
        """Record a metric value, keeping at most max_samples per name"""
        with self._lock:
            samples = self._metrics.setdefault(name, [])
            samples.append(Metric(name=name, value=float(value), labels=labels or {}))
            if len(samples) > self._max_samples:
                del samples[0]
    
    def get_metrics(self, name: Optional[str] = None) -> Dict[str, List[Metric]]:
        """Get recorded metrics"""
        with self._lock:
            if name:
                return {name: list(self._metrics.get(name, []))}
            return {key: list(samples) for key, samples in self._metrics.items()}
    
    def summary(self, name: str) -> Dict[str, float]:
        """Count, mean and max of a metric; all zero when nothing was recorded"""
        with self._lock:
            values = [m.value for m in self._metrics.get(name, [])]
        if not values:
            return {"count": 0, "mean": 0.0, "max": 0.0}
        return {"count": len(values), "mean": sum(values) / len(values), "max": max(values)}
    
    def clear_metrics(self, name: Optional[str] = None) -> None:
        """Clear recorded metrics"""
        with self._lock:
            if name:
                self._metrics.pop(name, None)
            else:
                self._metrics.clear()
