# liftform/training/steps/report_step.py
from __future__ import annotations

from datetime import datetime, timezone

from liftform import logs
from liftform.pipeline.step import PipelineStep
from liftform.training.context import TrainingContext
from liftform.training.engines.report_engine import ReportEngine


class ReportStep(PipelineStep):
    """
    ReportStep

    Outputs (ctx.output_dir):
    - class_distribution.csv / .png
    - correlation.png
    - variable_importance.csv / .png
    - oob_class_error.csv
    - confusion_matrix.csv
    - cv_results.csv
    - predictions.csv / prediction_tally.csv
    - metrics.json
    """

    stage = "report"

    def run(self, ctx: TrainingContext) -> TrainingContext:
        rcfg = ctx.cfg.report
        engine = ReportEngine(ctx.output_dir)
        reports = ctx.reports

        with self.timed():
            if ctx.explore is not None:
                reports["class_distribution"] = engine.write_csv(
                    ctx.explore.class_distribution, "class_distribution.csv"
                )
                if rcfg.plots:
                    reports["class_distribution_plot"] = engine.plot_class_distribution(
                        ctx.explore.class_distribution
                    )
                    reports["correlation_plot"] = engine.plot_correlation(ctx.explore.correlation)

            if ctx.importance is not None:
                reports["variable_importance"] = engine.write_csv(
                    ctx.importance, "variable_importance.csv"
                )
                if rcfg.plots:
                    reports["variable_importance_plot"] = engine.plot_importance(
                        ctx.importance, top=rcfg.top_importance
                    )

            if ctx.forest_summary is not None and ctx.forest_summary.oob_confusion is not None:
                reports["oob_class_error"] = engine.write_csv(
                    ctx.forest_summary.oob_confusion, "oob_class_error.csv"
                )

            if ctx.evaluation is not None:
                reports["confusion_matrix"] = engine.write_csv(
                    ctx.evaluation.confusion, "confusion_matrix.csv"
                )

            if ctx.cv is not None:
                reports["cv_results"] = engine.write_csv(ctx.cv.table, "cv_results.csv", index=False)

            if ctx.prediction is not None:
                reports["predictions"] = engine.write_csv(
                    ctx.prediction.predictions, "predictions.csv", index=False
                )
                reports["prediction_tally"] = engine.write_csv(
                    ctx.prediction.tally, "prediction_tally.csv"
                )

            reports["metrics"] = engine.write_json(self._metrics_record(ctx), "metrics.json")

        for name, path in reports.items():
            logs.info(f"[ReportStep] saved {name}: {path}")
        return ctx

    @staticmethod
    def _metrics_record(ctx: TrainingContext) -> dict:
        record = {
            "run_id": ctx.run_id,
            "created_at": datetime.now(timezone.utc).isoformat(),
            "inputs": {
                "train_path": str(ctx.train_path),
                "score_path": str(ctx.score_path),
            },
            "config": ctx.cfg.model_dump(mode="json"),
            "metrics": dict(ctx.metrics),
            "recorded": ctx.inst.metrics.snapshot(),
        }

        if ctx.plan is not None:
            record["cleaning"] = {
                "na_columns": list(ctx.plan.na_columns),
                "excluded_columns": list(ctx.plan.excluded_columns),
                "categories": list(ctx.plan.categories),
                "feature_columns": len(ctx.schema.feature_columns),
            }

        if ctx.explore is not None:
            record["explore"] = {
                "class_distribution": {str(k): int(v) for k, v in ctx.explore.class_distribution.items()},
                "high_correlation_pairs": len(ctx.explore.high_correlation_pairs),
                "near_zero_variance": list(ctx.explore.near_zero_variance),
            }

        summary = ctx.forest_summary
        if summary is not None:
            record["model"] = {
                "n_trees": summary.n_trees,
                "max_features": summary.max_features,
                "oob_error": summary.oob_error,
            }

        if ctx.evaluation is not None:
            record["per_class"] = (
                ctx.evaluation.per_class.reset_index()
                .astype({"class": str})
                .to_dict(orient="records")
            )

        if ctx.cv is not None:
            record["cv_table"] = ctx.cv.table.to_dict(orient="records")

        return record
