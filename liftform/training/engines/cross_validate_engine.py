# liftform/training/engines/cross_validate_engine.py
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

import numpy as np
import pandas as pd
from sklearn.ensemble import RandomForestClassifier
from sklearn.metrics import accuracy_score, cohen_kappa_score
from sklearn.model_selection import StratifiedKFold

from liftform import logs
from liftform.config.training_config import CrossValidationConfig
from liftform.pipeline.parallel.executor import ParallelExecutor
from liftform.pipeline.parallel.types import ParallelKind
from liftform.training.engines.forest_train_engine import (
    check_label_support,
    to_numeric_frame,
)
from liftform.utils.errors import ModelFitError


@dataclass(frozen=True)
class FoldTask:
    X: np.ndarray
    y: np.ndarray
    train_idx: np.ndarray
    valid_idx: np.ndarray
    fold: int
    max_features: int
    n_estimators: int
    seed: int
    labels: tuple


@dataclass(frozen=True)
class FoldScore:
    fold: int
    max_features: int
    accuracy: float
    kappa: float


@dataclass(frozen=True)
class CrossValidationResult:
    # one row per max_features candidate
    table: pd.DataFrame
    # one row per (max_features, fold)
    folds: pd.DataFrame
    best_max_features: int
    best_accuracy: float
    oos_error: float
    sample_size: int

    def to_dict(self) -> dict:
        return {
            "best_max_features": self.best_max_features,
            "best_accuracy": self.best_accuracy,
            "oos_error": self.oos_error,
            "sample_size": self.sample_size,
        }


def fit_fold(task: FoldTask) -> FoldScore:
    """
    Worker: fit one fold, score it. Module level so the process pool can pickle it.
    """
    model = RandomForestClassifier(
        n_estimators=task.n_estimators,
        max_features=task.max_features,
        random_state=task.seed,
        n_jobs=1,
    )
    try:
        model.fit(task.X[task.train_idx], task.y[task.train_idx])
    except ValueError as e:
        raise ModelFitError(
            f"Fold {task.fold} fit failed (max_features={task.max_features}): {e}"
        ) from e

    y_true = task.y[task.valid_idx]
    y_pred = model.predict(task.X[task.valid_idx])

    return FoldScore(
        fold=task.fold,
        max_features=task.max_features,
        accuracy=float(accuracy_score(y_true, y_pred)),
        kappa=float(cohen_kappa_score(y_true, y_pred, labels=list(task.labels))),
    )


class CrossValidateEngine:
    """
    CrossValidateEngine

    Evaluation only:
    - random row sample (seeded) of the full training table
    - stratified k-fold, a smaller forest per fold
    - one task per (max_features, fold), run on a scoped worker pool
    - best mean accuracy over the max_features grid -> out-of-sample error
    The fold models are discarded.
    """

    def __init__(self, cfg: CrossValidationConfig, *, seed: int, labels: Sequence[str]):
        self.cfg = cfg
        self.seed = seed
        self.labels = tuple(str(c) for c in labels)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def cross_validate(self, X: pd.DataFrame, y: pd.Series, progress=None) -> CrossValidationResult:
        X_s, y_s = self.sample(X, y)
        check_label_support(y_s, min_per_class=self.cfg.folds, what="cross-validation sample")

        X_arr = to_numeric_frame(X_s).to_numpy(dtype=float)
        y_arr = y_s.astype(str).to_numpy()

        grid = self.resolve_grid(X_arr.shape[1])
        tasks = self.build_tasks(X_arr, y_arr, grid)

        logs.info(
            f"[CrossValidateEngine] sample={len(y_arr)} folds={self.cfg.folds} "
            f"trees={self.cfg.n_estimators} max_features_grid={grid} tasks={len(tasks)}"
        )

        on_result = None
        if progress is not None:
            progress.start("cross_validate", len(tasks), "fits")

            def on_result(_score: FoldScore) -> None:
                progress.advance("cross_validate")

        scores: List[FoldScore] = ParallelExecutor.run(
            kind=ParallelKind.FOLD,
            items=tasks,
            handler=fit_fold,
            max_workers=self.cfg.workers,
            on_result=on_result,
        )

        if progress is not None:
            progress.done("cross_validate")

        return self.aggregate(scores, sample_size=len(y_arr))

    def sample(self, X: pd.DataFrame, y: pd.Series):
        n = len(y)
        size = min(self.cfg.sample_size, n)
        if size < self.cfg.sample_size:
            logs.warning(
                f"[CrossValidateEngine] sample_size={self.cfg.sample_size} > rows={n}, using all rows"
            )

        rng = np.random.RandomState(self.seed)
        positions = np.sort(rng.choice(n, size=size, replace=False))
        return X.iloc[positions], y.iloc[positions]

    def resolve_grid(self, n_features: int) -> List[int]:
        if self.cfg.max_features_grid:
            grid = self.cfg.max_features_grid
        else:
            grid = [2, (n_features + 2) // 2, n_features]
        return sorted({min(max(1, int(m)), n_features) for m in grid})

    def build_tasks(self, X: np.ndarray, y: np.ndarray, grid: Sequence[int]) -> List[FoldTask]:
        skf = StratifiedKFold(n_splits=self.cfg.folds, shuffle=True, random_state=self.seed)
        splits = list(skf.split(X, y))

        return [
            FoldTask(
                X=X,
                y=y,
                train_idx=train_idx,
                valid_idx=valid_idx,
                fold=fold,
                max_features=int(m),
                n_estimators=self.cfg.n_estimators,
                seed=self.seed,
                labels=self.labels,
            )
            for m in grid
            for fold, (train_idx, valid_idx) in enumerate(splits, start=1)
        ]

    @staticmethod
    def aggregate(scores: Sequence[FoldScore], *, sample_size: int) -> CrossValidationResult:
        folds = pd.DataFrame(
            [
                {
                    "max_features": s.max_features,
                    "fold": s.fold,
                    "accuracy": s.accuracy,
                    "kappa": s.kappa,
                }
                for s in scores
            ]
        )

        table = (
            folds.groupby("max_features")
            .agg(
                accuracy=("accuracy", "mean"),
                accuracy_sd=("accuracy", "std"),
                kappa=("kappa", "mean"),
            )
            .reset_index()
        )

        best = table.loc[table["accuracy"].idxmax()]
        best_accuracy = float(best["accuracy"])

        logs.info(
            f"[CrossValidateEngine] best max_features={int(best['max_features'])} "
            f"accuracy={best_accuracy:.4%} oos_error={1.0 - best_accuracy:.4%}"
        )
        return CrossValidationResult(
            table=table,
            folds=folds,
            best_max_features=int(best["max_features"]),
            best_accuracy=best_accuracy,
            oos_error=float(1.0 - best_accuracy),
            sample_size=sample_size,
        )
