# liftform/training/steps/dataset_load_step.py
from __future__ import annotations

from liftform.pipeline.step import PipelineStep
from liftform.training.context import TrainingContext
from liftform.training.engines.dataset_load_engine import DatasetLoadEngine


class DatasetLoadStep(PipelineStep):
    """
    DatasetLoadStep

    Contract:
    - consumes ctx.train_path / ctx.score_path
    - produces ctx.raw_train / ctx.raw_score
    """

    stage = "load"

    def run(self, ctx: TrainingContext) -> TrainingContext:
        data = ctx.cfg.data
        engine = DatasetLoadEngine(
            label_column=data.label_column,
            id_column=data.id_column,
            na_values=data.na_values,
        )

        with self.timed():
            with self.inst.timer("load.read_csv"):
                ctx.raw_train, ctx.raw_score = engine.load(ctx.train_path, ctx.score_path)

        self.inst.metrics.record("train_rows", len(ctx.raw_train))
        self.inst.metrics.record("train_columns_raw", ctx.raw_train.shape[1])
        return ctx
