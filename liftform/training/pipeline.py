# liftform/training/pipeline.py
from __future__ import annotations

from pathlib import Path
from typing import List

from liftform import logs
from liftform.config.app_config import AppConfig
from liftform.observability.instrumentation import Instrumentation
from liftform.pipeline.step import PipelineStep
from liftform.training.context import TrainingContext


class TrainingPipeline:
    """
    TrainingPipeline

    Semantics:
    - strictly linear: every step runs once, in order
    - any error aborts the run (logged, then re-raised)
    - every record of the run is mirrored to <output_dir>/run.log
    """

    def __init__(
            self,
            *,
            steps: List[PipelineStep],
            inst: Instrumentation,
            cfg: AppConfig,
    ):
        self.steps = steps
        self.inst = inst
        self.cfg = cfg

    def run(
            self,
            *,
            run_id: str,
            train_path: Path | str,
            score_path: Path | str,
            output_dir: Path | str,
    ) -> TrainingContext:
        ctx = TrainingContext(
            run_id=run_id,
            cfg=self.cfg,
            inst=self.inst,
            output_dir=Path(output_dir),
            train_path=Path(train_path),
            score_path=Path(score_path),
        )

        sink_id = logs.run_sink(ctx.output_dir)
        try:
            logs.info(f"[TrainingPipeline] START run_id={run_id} output_dir={ctx.output_dir}")

            for step in self.steps:
                try:
                    ctx = step.run(ctx)
                except Exception:
                    logs.exception(f"[TrainingPipeline] {step.step_name} failed run_id={run_id}")
                    raise

            self.inst.generate_timeline_report(run_id)
            logs.info(f"[TrainingPipeline] DONE run_id={run_id}")
        finally:
            logs.close_sink(sink_id)

        return ctx
