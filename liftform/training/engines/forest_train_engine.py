# liftform/training/engines/forest_train_engine.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

import numpy as np
import pandas as pd
from sklearn.ensemble import RandomForestClassifier
from sklearn.metrics import confusion_matrix

from liftform import logs
from liftform.config.training_config import ForestConfig
from liftform.training.engines.model_train_engine import ModelTrainEngine
from liftform.utils.errors import ModelFitError


@dataclass(frozen=True)
class FittedForest:
    """
    Fitted primary model. Immutable after fit, owns no resources.
    """

    estimator: RandomForestClassifier
    feature_order: Tuple[str, ...]
    categories: Tuple[str, ...]


@dataclass(frozen=True)
class ForestSummary:
    n_trees: int
    max_features: Any
    oob_error: Optional[float]
    # OOB confusion (true x pred) + class_error column
    oob_confusion: Optional[pd.DataFrame]


def to_numeric_frame(X: pd.DataFrame) -> pd.DataFrame:
    """
    Make every column numeric, or raise ModelFitError naming the column.

    Missing and non-finite values become 0, the same rule the scoring
    conversion applies, so fit and predict see identical inputs.
    """
    out = X.copy()
    filled: Dict[str, int] = {}

    for c in out.columns:
        if pd.api.types.is_bool_dtype(out[c]):
            out[c] = out[c].astype("int64")
            continue
        if not pd.api.types.is_numeric_dtype(out[c]):
            try:
                out[c] = pd.to_numeric(out[c], errors="raise")
            except (ValueError, TypeError) as e:
                raise ModelFitError(f"Feature column '{c}' is not numeric: {e}") from e

        bad = ~np.isfinite(out[c].astype("float64"))
        if bad.any():
            filled[c] = int(bad.sum())
            out[c] = out[c].where(~bad, 0)

    if filled:
        logs.warning(
            f"[to_numeric_frame] {sum(filled.values())} missing or non-finite "
            f"feature values replaced by 0: {filled}"
        )
    return out


def check_label_support(y: pd.Series, *, min_per_class: int = 1, what: str = "fit") -> None:
    """
    Degenerate label distributions are fit errors.
    """
    if len(y) == 0:
        raise ModelFitError(f"Empty {what} set.")
    if y.isna().any():
        raise ModelFitError(f"Label has {int(y.isna().sum())} missing values in the {what} set.")

    counts = y.value_counts()
    counts = counts[counts > 0]
    if len(counts) < 2:
        raise ModelFitError(
            f"Need at least 2 label categories in the {what} set, got {counts.to_dict()}"
        )

    thin = counts[counts < min_per_class]
    if not thin.empty:
        raise ModelFitError(
            f"Label categories with fewer than {min_per_class} rows in the {what} set: {thin.to_dict()}"
        )


class RandomForestTrainEngine(ModelTrainEngine):
    """
    RandomForestTrainEngine

    Bootstrap-resampled trees with a random feature subset per split,
    majority vote. Hyperparameters are fixed configuration.
    """

    cfg: ForestConfig

    def __init__(self, cfg: ForestConfig, *, seed: int, categories: Tuple[str, ...] = ()):
        super().__init__(cfg)
        self.seed = seed
        self.categories = tuple(categories)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def fit(self, *, X: pd.DataFrame, y: pd.Series) -> FittedForest:
        check_label_support(y)
        X_num = to_numeric_frame(X)

        estimator = RandomForestClassifier(
            n_estimators=self.cfg.n_estimators,
            max_features=self.cfg.max_features,
            oob_score=self.cfg.oob_score,
            n_jobs=self.cfg.n_jobs,
            random_state=self.seed,
        )

        try:
            estimator.fit(X_num, y.astype(str).to_numpy())
        except ValueError as e:
            raise ModelFitError(f"RandomForest fit failed: {e}") from e

        categories = self.categories or tuple(str(c) for c in estimator.classes_)

        logs.info(
            f"[RandomForestTrainEngine] fitted trees={self.cfg.n_estimators} "
            f"rows={len(X_num)} features={X_num.shape[1]}"
        )
        return FittedForest(
            estimator=estimator,
            feature_order=tuple(X_num.columns),
            categories=categories,
        )

    def predict(self, model: FittedForest, X: pd.DataFrame) -> pd.Series:
        X_num = to_numeric_frame(X[list(model.feature_order)])
        pred = model.estimator.predict(X_num)
        return pd.Series(
            pd.Categorical(pred, categories=list(model.categories)),
            index=X.index,
            name="prediction",
        )

    def feature_importance(self, model: FittedForest) -> pd.Series:
        ranking = pd.Series(
            model.estimator.feature_importances_,
            index=list(model.feature_order),
            name="importance",
        )
        return ranking.sort_values(ascending=False)

    def summary(self, model: FittedForest, y: pd.Series) -> ForestSummary:
        """
        Fitted-model summary: tree count, OOB error, per-class OOB error.
        `y` are the labels the forest was fitted on.
        """
        est = model.estimator
        if not getattr(est, "oob_score", False) or not hasattr(est, "oob_decision_function_"):
            return ForestSummary(
                n_trees=len(est.estimators_),
                max_features=est.max_features,
                oob_error=None,
                oob_confusion=None,
            )

        decision = est.oob_decision_function_
        has_oob = ~np.isnan(decision).any(axis=1)
        oob_pred = est.classes_[decision[has_oob].argmax(axis=1)]
        y_true = y.astype(str).to_numpy()[has_oob]

        labels = [c for c in model.categories if c in set(est.classes_)]
        confusion = pd.DataFrame(
            confusion_matrix(y_true, oob_pred, labels=labels),
            index=pd.Index(labels, name="true"),
            columns=pd.Index(labels, name="pred"),
        )
        diag = np.diag(confusion.to_numpy())
        row_totals = confusion.sum(axis=1).to_numpy()
        with np.errstate(divide="ignore", invalid="ignore"):
            class_error = np.where(row_totals > 0, 1.0 - diag / row_totals, np.nan)
        confusion["class_error"] = class_error

        return ForestSummary(
            n_trees=len(est.estimators_),
            max_features=est.max_features,
            oob_error=float(1.0 - est.oob_score_),
            oob_confusion=confusion,
        )
