# liftform/training/steps/split_step.py
from __future__ import annotations

from liftform.pipeline.step import PipelineStep
from liftform.training.context import TrainingContext
from liftform.training.engines.split_engine import SplitEngine


class SplitStep(PipelineStep):
    """
    SplitStep

    Contract:
    - consumes ctx.train_df / ctx.schema
    - produces ctx.split and the fit / validation X, y
    """

    stage = "split"

    def run(self, ctx: TrainingContext) -> TrainingContext:
        tcfg = ctx.cfg.training
        schema = ctx.schema
        engine = SplitEngine(fraction=tcfg.split_fraction, seed=tcfg.seed)

        with self.timed():
            y = ctx.train_df[schema.label_column]
            X = ctx.train_df.loc[:, list(schema.feature_columns)]

            split = engine.split(y)

        ctx.split = split
        ctx.fit_X = X.iloc[split.fit]
        ctx.fit_y = y.iloc[split.fit]
        ctx.valid_X = X.iloc[split.validation]
        ctx.valid_y = y.iloc[split.validation]

        self.inst.metrics.record("fit_rows", len(split.fit))
        self.inst.metrics.record("validation_rows", len(split.validation))
        return ctx
