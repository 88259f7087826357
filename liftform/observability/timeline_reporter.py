#!filepath: liftform/observability/timeline_reporter.py
from typing import Dict, Optional

from liftform import logs


class TimelineReporter:
    """
    Run timeline: leaf timer -> accumulated seconds, share of the total,
    and lap count when a leaf ran more than once.
    """

    def __init__(
        self,
        timeline: Dict[str, float],
        run_id: str,
        counts: Optional[Dict[str, int]] = None,
    ):
        self.timeline = timeline
        self.run_id = run_id
        self.counts = counts or {}

    def print(self):
        total = sum(self.timeline.values())

        logs.info(f"[Timeline] ===== run {self.run_id} =====")
        for name, sec in self.timeline.items():
            share = sec / total if total > 0 else 0.0
            laps = self.counts.get(name, 1)
            suffix = f"  x{laps}" if laps > 1 else ""
            logs.info(f"[Timeline] {str(name):<28} {sec:>8.3f}s {share:>6.1%}{suffix}")

        logs.info(f"[Timeline] {'total':<28} {total:>8.3f}s")
