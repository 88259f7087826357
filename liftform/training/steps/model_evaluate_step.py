# liftform/training/steps/model_evaluate_step.py
from __future__ import annotations

from liftform.pipeline.step import PipelineStep
from liftform.training.context import TrainingContext
from liftform.training.engines.model_evaluate_engine import ModelEvaluateEngine


class ModelEvaluateStep(PipelineStep):
    """
    Hold-out evaluation of the primary model.
    """

    stage = "evaluate"

    def run(self, ctx: TrainingContext) -> TrainingContext:
        engine = ModelEvaluateEngine(labels=ctx.schema.categories)

        with self.timed():
            with self.inst.timer("evaluate.predict"):
                y_pred = ctx.engine.predict(ctx.model, ctx.valid_X)
            ctx.evaluation = engine.evaluate(ctx.valid_y, y_pred)

        ctx.metrics["validation"] = ctx.evaluation.to_dict()
        self.inst.metrics.record("validation_accuracy", ctx.evaluation.accuracy)
        return ctx
