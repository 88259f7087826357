# liftform/training/steps/model_train_step.py
from __future__ import annotations

from liftform import logs
from liftform.pipeline.step import PipelineStep
from liftform.training.context import TrainingContext
from liftform.training.engines.forest_train_engine import RandomForestTrainEngine


class ModelTrainStep(PipelineStep):
    """
    ModelTrainStep

    Contract:
    - consumes ctx.fit_X / ctx.fit_y
    - produces ctx.engine / ctx.model / ctx.importance / ctx.forest_summary
    """

    stage = "train"

    def run(self, ctx: TrainingContext) -> TrainingContext:
        tcfg = ctx.cfg.training
        engine = RandomForestTrainEngine(
            tcfg.forest,
            seed=tcfg.seed,
            categories=ctx.schema.categories,
        )

        with self.timed():
            with self.inst.timer("train.fit"):
                model = engine.fit(X=ctx.fit_X, y=ctx.fit_y)

        ctx.engine = engine
        ctx.model = model
        ctx.importance = engine.feature_importance(model)
        ctx.forest_summary = engine.summary(model, ctx.fit_y)

        summary = ctx.forest_summary
        if summary.oob_error is not None:
            logs.info(
                f"[ModelTrainStep] trees={summary.n_trees} "
                f"max_features={summary.max_features} oob_error={summary.oob_error:.4%}"
            )
            self.inst.metrics.record("oob_error", summary.oob_error)

        logs.info(f"[ModelTrainStep] top features={ctx.importance.head(5).round(4).to_dict()}")
        return ctx
