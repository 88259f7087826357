# liftform/training/engines/model_evaluate_engine.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple

import numpy as np
import pandas as pd
from scipy.stats import binomtest
from sklearn.metrics import (
    cohen_kappa_score,
    confusion_matrix,
    precision_recall_fscore_support,
)

from liftform import logs


@dataclass(frozen=True)
class EvaluationResult:
    confusion: pd.DataFrame
    accuracy: float
    error_rate: float
    accuracy_ci: Tuple[float, float]
    kappa: float
    per_class: pd.DataFrame
    n_rows: int

    def to_dict(self) -> dict:
        return {
            "accuracy": self.accuracy,
            "error_rate": self.error_rate,
            "accuracy_ci_low": self.accuracy_ci[0],
            "accuracy_ci_high": self.accuracy_ci[1],
            "kappa": self.kappa,
            "n_rows": self.n_rows,
        }


class ModelEvaluateEngine:
    """
    ModelEvaluateEngine

    Responsibility:
    - Score predictions against held-out labels
    - Return a pure result record (no side effects)
    """

    def __init__(self, *, labels: Sequence[str], confidence: float = 0.95):
        self.labels = [str(c) for c in labels]
        self.confidence = confidence

    def evaluate(self, y_true: pd.Series, y_pred: pd.Series) -> EvaluationResult:
        if len(y_true) == 0:
            raise ValueError("[ModelEvaluateEngine] empty validation set")
        if len(y_true) != len(y_pred):
            raise ValueError(
                f"y_true and y_pred length mismatch: {len(y_true)} != {len(y_pred)}"
            )

        yt = np.asarray(y_true.astype(str))
        yp = np.asarray(y_pred.astype(str))

        cm = confusion_matrix(yt, yp, labels=self.labels)
        confusion = pd.DataFrame(
            cm,
            index=pd.Index(self.labels, name="true"),
            columns=pd.Index(self.labels, name="pred"),
        )

        n = int(cm.sum())
        correct = int(np.trace(cm))
        accuracy = correct / n if n else 0.0

        ci = binomtest(correct, n).proportion_ci(
            confidence_level=self.confidence, method="exact"
        )

        p, r, f1, s = precision_recall_fscore_support(
            yt, yp, labels=self.labels, zero_division=0
        )
        per_class = pd.DataFrame(
            {"precision": p, "recall": r, "f1": f1, "support": s},
            index=pd.Index(self.labels, name="class"),
        )

        result = EvaluationResult(
            confusion=confusion,
            accuracy=float(accuracy),
            error_rate=float(1.0 - accuracy),
            accuracy_ci=(float(ci.low), float(ci.high)),
            kappa=float(cohen_kappa_score(yt, yp, labels=self.labels)),
            per_class=per_class,
            n_rows=n,
        )

        logs.info(
            f"[ModelEvaluateEngine] rows={n} accuracy={result.accuracy:.4%} "
            f"error={result.error_rate:.4%} "
            f"ci=({result.accuracy_ci[0]:.4f}, {result.accuracy_ci[1]:.4f}) "
            f"kappa={result.kappa:.4f}"
        )
        return result
