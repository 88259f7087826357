#!filepath: liftform/observability/timer.py
import time
from typing import Dict, List


class Timer:
    """
    Named wall-clock laps.

    - start(name) / end(name) -> seconds of that lap
    - the same name may be open more than once (nested / re-entrant)
    - totals[name] accumulates every closed lap, counts[name] the number of laps
    """

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self._open: Dict[str, List[float]] = {}
        self.totals: Dict[str, float] = {}
        self.counts: Dict[str, int] = {}

    def start(self, name: str):
        if not self.enabled:
            return
        self._open.setdefault(name, []).append(time.perf_counter())

    def end(self, name: str) -> float:
        if not self.enabled:
            return 0.0

        stack = self._open.get(name)
        if not stack:
            return 0.0

        elapsed = time.perf_counter() - stack.pop()
        if not stack:
            del self._open[name]

        self.totals[name] = self.totals.get(name, 0.0) + elapsed
        self.counts[name] = self.counts.get(name, 0) + 1
        return elapsed
