# liftform/training/steps/clean_step.py
from __future__ import annotations

from liftform import logs
from liftform.pipeline.step import PipelineStep
from liftform.training.context import TrainingContext
from liftform.training.engines.clean_engine import CleanEngine
from liftform.training.schema import ColumnSchema
from liftform.utils.errors import SchemaError


class CleanStep(PipelineStep):
    """
    CleanStep

    Contract:
    - plan from ctx.raw_train only, applied to both tables
    - produces ctx.plan / ctx.train_df / ctx.score_df / ctx.schema
    - after cleaning: training columns minus label == scoring columns minus id
    """

    stage = "clean"

    def run(self, ctx: TrainingContext) -> TrainingContext:
        data = ctx.cfg.data
        engine = CleanEngine(
            label_column=data.label_column,
            na_threshold=data.na_threshold,
            excluded_columns=data.excluded_columns,
            label_categories=data.label_categories,
        )

        with self.timed():
            with self.inst.timer("clean.apply"):
                train_df, score_df, plan = engine.clean_pair(ctx.raw_train, ctx.raw_score)

        train_cols = set(train_df.columns) - {data.label_column}
        score_cols = set(score_df.columns) - {data.id_column}
        if train_cols != score_cols:
            raise SchemaError(
                "Cleaned training/scoring columns differ: "
                f"{sorted(train_cols ^ score_cols)[:10]}"
            )

        ctx.plan = plan
        ctx.train_df = train_df
        ctx.score_df = score_df
        ctx.schema = ColumnSchema.from_training(
            train_df,
            label_column=data.label_column,
            id_column=data.id_column,
            categories=plan.categories,
        )

        logs.info(
            f"[CleanStep] columns {ctx.raw_train.shape[1]} -> {train_df.shape[1]} "
            f"(features={len(ctx.schema.feature_columns)})"
        )
        self.inst.metrics.record("feature_columns", len(ctx.schema.feature_columns))
        return ctx
