#!filepath: liftform/pipeline/step.py
from __future__ import annotations

from typing import Any

from liftform.observability.instrumentation import (
    Instrumentation,
    NoOpInstrumentation,
)


class PipelineStep:
    """
    Pipeline step base class

    Responsibilities:
      1. orchestration of one stage (calls its engine, updates the context)
      2. step-level wall-time scope (parent timer, not on the timeline)

    Rules:
      - engines own the pandas / sklearn work, steps only wire context fields
      - leaf timers live inside the step
      - behaviour never depends on whether inst is enabled
    """

    stage: str = ""

    def __init__(self, inst: Instrumentation | None = None):
        # inst is always usable (no-op semantics)
        self.inst: Instrumentation | NoOpInstrumentation = (
            inst if inst is not None else NoOpInstrumentation()
        )

    @property
    def step_name(self) -> str:
        """Class name is the step name."""
        return self.__class__.__name__

    def timed(self):
        """
        Step-level scope (record=False).
        """
        return self.inst.timer(self.step_name, record=False)

    def run(self, ctx: Any) -> Any:
        raise NotImplementedError
