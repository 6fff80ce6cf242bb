from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict

@dataclass
class Metric:
    """A single recorded sample, e.g. the latency of one pipeline tick."""
    name: str
    value: float
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    labels: Dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "value": self.value,
            "timestamp": self.timestamp.isoformat(),
            "labels": self.labels,
        }
