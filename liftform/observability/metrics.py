#!filepath: liftform/observability/metrics.py
from dataclasses import dataclass, field
from typing import Any, Dict

from liftform import logs


@dataclass
class MetricRecorder:
    """
    Scalar run metrics (row counts, errors, accuracies).

    Values are rounded for the log line only; snapshot() returns them as recorded.
    A name recorded twice keeps the last value and logs the overwrite.
    """

    enabled: bool = True
    precision: int = 6
    metrics: Dict[str, Any] = field(default_factory=dict)

    def record(self, name: str, value: Any):
        if not self.enabled:
            return

        if name in self.metrics:
            logs.debug(f"[Metric] {name} overwritten ({self.metrics[name]} -> {value})")
        self.metrics[name] = value

        shown = round(value, self.precision) if isinstance(value, float) else value
        logs.info(f"[Metric] {name} = {shown}")

    def snapshot(self) -> Dict[str, Any]:
        return dict(self.metrics)
