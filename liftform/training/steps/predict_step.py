# liftform/training/steps/predict_step.py
from __future__ import annotations

from liftform.pipeline.step import PipelineStep
from liftform.training.context import TrainingContext
from liftform.training.engines.predict_engine import PredictEngine


class PredictStep(PipelineStep):
    """
    PredictStep

    Contract:
    - consumes ctx.model / ctx.schema / ctx.score_df
    - produces ctx.prediction
    """

    stage = "predict"

    def run(self, ctx: TrainingContext) -> TrainingContext:
        engine = PredictEngine(
            schema=ctx.schema,
            strict=ctx.cfg.training.strict_coercion,
        )

        with self.timed():
            with self.inst.timer("predict.score"):
                ctx.prediction = engine.predict(ctx.engine, ctx.model, ctx.score_df)

        ctx.metrics["prediction"] = {
            "rows": len(ctx.prediction.predictions),
            "tally": {str(k): int(v) for k, v in ctx.prediction.tally.items()},
            "coercion": ctx.prediction.coercion.to_dict(),
        }
        return ctx
