# liftform/training/steps/explore_step.py
from __future__ import annotations

from liftform.pipeline.step import PipelineStep
from liftform.training.context import TrainingContext
from liftform.training.engines.explore_engine import ExploreEngine


class ExploreStep(PipelineStep):
    """
    ExploreStep (diagnostics only, the tables are not modified)
    """

    stage = "explore"

    def run(self, ctx: TrainingContext) -> TrainingContext:
        ecfg = ctx.cfg.training.explore
        engine = ExploreEngine(
            label_column=ctx.cfg.data.label_column,
            correlation_threshold=ecfg.correlation_threshold,
            nzv_freq_ratio=ecfg.nzv_freq_ratio,
            nzv_unique_percent=ecfg.nzv_unique_percent,
        )

        with self.timed():
            with self.inst.timer("explore.correlation"):
                ctx.explore = engine.explore(ctx.train_df)

        return ctx
