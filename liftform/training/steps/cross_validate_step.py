# liftform/training/steps/cross_validate_step.py
from __future__ import annotations

from liftform import logs
from liftform.pipeline.step import PipelineStep
from liftform.training.context import TrainingContext
from liftform.training.engines.cross_validate_engine import CrossValidateEngine


class CrossValidateStep(PipelineStep):
    """
    CrossValidateStep

    Contract:
    - consumes the full cleaned training table
    - produces ctx.cv (fold models are not kept)
    """

    stage = "cross_validate"

    def run(self, ctx: TrainingContext) -> TrainingContext:
        tcfg = ctx.cfg.training
        if not tcfg.cv.enabled:
            logs.info("[CrossValidateStep] disabled, skipped")
            return ctx

        schema = ctx.schema
        engine = CrossValidateEngine(tcfg.cv, seed=tcfg.seed, labels=schema.categories)

        with self.timed():
            with self.inst.timer("cross_validate.folds"):
                ctx.cv = engine.cross_validate(
                    ctx.train_df.loc[:, list(schema.feature_columns)],
                    ctx.train_df[schema.label_column],
                    progress=self.inst.progress,
                )

        ctx.metrics["cross_validation"] = ctx.cv.to_dict()
        self.inst.metrics.record("cv_oos_error", ctx.cv.oos_error)
        return ctx
