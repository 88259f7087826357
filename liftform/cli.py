#!filepath: liftform/cli.py
from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

import typer
import yaml
from rich import print
from rich.table import Table

from liftform import __version__, init_logging
from liftform.config.app_config import AppConfig
from liftform.training.context import TrainingContext
from liftform.utils.path import PathManager
from liftform.utils.errors import DatasetReadError, ModelFitError, SchemaError
from liftform.workflows.form_classification import build_form_classification

app = typer.Typer(help="liftform: exercise-form random forest pipeline")


def _run_id() -> str:
    return datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S_utc")


def _frame_table(title: str, df) -> Table:
    table = Table(title=title)
    table.add_column(str(df.index.name or ""))
    for c in df.columns:
        table.add_column(str(c), justify="right")
    for idx, row in df.iterrows():
        table.add_row(str(idx), *[f"{v:.4f}" if isinstance(v, float) else str(v) for v in row])
    return table


def _print_summary(ctx: TrainingContext) -> None:
    print(f"[bold]Class distribution[/bold]: {ctx.explore.class_distribution.to_dict()}")

    summary = ctx.forest_summary
    if summary.oob_confusion is not None:
        print(
            f"[bold]Random forest[/bold]: trees={summary.n_trees} "
            f"max_features={summary.max_features} OOB error={summary.oob_error:.2%}"
        )
        print(_frame_table("OOB confusion / class error", summary.oob_confusion))

    print(_frame_table("Variable importance (top 10)", ctx.importance.head(10).to_frame()))

    ev = ctx.evaluation
    print(_frame_table("Confusion matrix (validation)", ev.confusion))
    print(
        f"accuracy={ev.accuracy:.2%}  error={ev.error_rate:.2%}  "
        f"95% CI=({ev.accuracy_ci[0]:.4f}, {ev.accuracy_ci[1]:.4f})  kappa={ev.kappa:.4f}"
    )

    if ctx.cv is not None:
        print(_frame_table("Cross-validation", ctx.cv.table.set_index("max_features")))
        print(f"out-of-sample error estimate={ctx.cv.oos_error:.2%}")

    pred = ctx.prediction
    print(_frame_table("Predictions", pred.predictions.set_index(pred.predictions.columns[0])))
    print(f"[bold]Prediction tally[/bold]: {pred.tally.to_dict()}")
    if pred.coercion.total:
        print(f"[yellow]{pred.coercion.total} scoring values were replaced by 0[/yellow]")


@app.command()
def version():
    print(f"v{__version__}")


@app.command("show-config")
def show_config(
    config: Optional[Path] = typer.Option(
        None, exists=True, dir_okay=False, help="YAML config override"
    ),
):
    """
    Print the effective configuration.
    """
    cfg = AppConfig.load(str(config) if config else None)
    print(yaml.safe_dump(cfg.model_dump(mode="json"), sort_keys=False))


@app.command()
def run(
    train_csv: Path = typer.Argument(..., help="labeled training CSV"),
    score_csv: Path = typer.Argument(..., help="unlabeled scoring CSV"),
    config: Optional[Path] = typer.Option(
        None, exists=True, dir_okay=False, help="YAML config override"
    ),
    output_dir: Optional[Path] = typer.Option(None, help="report root (default: report.output_dir)"),
    run_id: Optional[str] = typer.Option(None, help="run id (default: UTC timestamp)"),
):
    """
    Run load -> clean -> explore -> split -> train -> evaluate -> cross-validate -> predict.
    """
    cfg = AppConfig.load(str(config) if config else None)
    init_logging(cfg.log)

    run_id = run_id or _run_id()
    run_dir = PathManager.run_dir(run_id, output_dir or cfg.report.output_dir)

    print(f"[green]Running liftform run_id={run_id}[/green]")

    pipeline = build_form_classification(cfg)
    try:
        ctx = pipeline.run(
            run_id=run_id,
            train_path=train_csv,
            score_path=score_csv,
            output_dir=run_dir,
        )
    except (DatasetReadError, SchemaError, ModelFitError) as e:
        print(f"[red]{type(e).__name__}: {e}[/red]")
        raise typer.Exit(code=1)

    _print_summary(ctx)
    print(f"[blue]Reports written to {run_dir}[/blue]")


if __name__ == "__main__":
    app()

# python -m liftform.cli run pml-training.csv pml-testing.csv
