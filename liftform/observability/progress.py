#!filepath: liftform/observability/progress.py
from dataclasses import dataclass
from typing import Dict

from liftform import logs


@dataclass
class _TaskState:
    total: int
    unit: str
    done: int = 0
    next_pct: int = 0


class ProgressReporter:
    """
    Log-only progress counters (no tty bars, safe under pytest / CI).

    advance() logs at every `step_pct` percent of the total, so a
    long fold grid yields a bounded number of lines.
    """

    def __init__(self, enabled: bool = True, step_pct: int = 25):
        self.enabled = enabled
        self.step_pct = step_pct
        self._tasks: Dict[str, _TaskState] = {}

    def start(self, task: str, total: int, unit: str = ""):
        if not self.enabled:
            return
        self._tasks[task] = _TaskState(total=total, unit=unit, next_pct=self.step_pct)
        logs.info(f"[Progress] {task} started total={total} {unit}")

    def advance(self, task: str, n: int = 1):
        if not self.enabled or task not in self._tasks:
            return

        state = self._tasks[task]
        state.done += n
        pct = 100 * state.done // state.total if state.total else 100

        if pct >= state.next_pct:
            logs.info(f"[Progress] {task}: {state.done}/{state.total} {state.unit} ({pct}%)")
            while state.next_pct <= pct:
                state.next_pct += self.step_pct

    def done(self, task: str):
        if not self.enabled:
            return
        state = self._tasks.pop(task, None)
        count = f" {state.done}/{state.total} {state.unit}" if state else ""
        logs.info(f"[Progress] {task} done{count}")
