# liftform/training/engines/predict_engine.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict

import numpy as np
import pandas as pd

from liftform import logs
from liftform.training.engines.forest_train_engine import FittedForest
from liftform.training.schema import ColumnSchema
from liftform.utils.errors import SchemaError


@dataclass(frozen=True)
class CoercionReport:
    """
    Per-column counts of scoring values changed by the conversion table.

    - missing     : NA in the scoring table, replaced by 0
    - unparseable : not a number or not finite (inf), replaced by 0
    - truncated   : fractional value in an integer column, cut to int
    """

    missing: Dict[str, int] = field(default_factory=dict)
    unparseable: Dict[str, int] = field(default_factory=dict)
    truncated: Dict[str, int] = field(default_factory=dict)

    @property
    def total(self) -> int:
        return (
            sum(self.missing.values())
            + sum(self.unparseable.values())
            + sum(self.truncated.values())
        )

    def to_dict(self) -> dict:
        return {
            "missing": dict(self.missing),
            "unparseable": dict(self.unparseable),
            "truncated": dict(self.truncated),
            "total": self.total,
        }


@dataclass(frozen=True)
class PredictionResult:
    # columns: [id_column, label_column], scoring row order
    predictions: pd.DataFrame
    tally: pd.Series
    coercion: CoercionReport


class PredictEngine:
    """
    PredictEngine

    Contract:
    - scoring columns are selected / ordered by schema.feature_columns
      (administrative columns dropped, missing columns -> SchemaError)
    - values converted through schema.conversions; missing, unparseable
      or non-finite values become 0, fractional values in integer columns
      are truncated, and every change is counted (strict -> SchemaError)
    - one prediction per scoring row, paired with its id
    """

    def __init__(self, *, schema: ColumnSchema, strict: bool = False):
        self.schema = schema
        self.strict = strict

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def align(self, score_df: pd.DataFrame) -> tuple[pd.DataFrame, CoercionReport]:
        missing_cols = [c for c in self.schema.feature_columns if c not in score_df.columns]
        if missing_cols:
            raise SchemaError(
                f"Scoring table is missing {len(missing_cols)} fitted feature columns "
                f"(first 10): {missing_cols[:10]}"
            )

        extra = [
            c for c in score_df.columns
            if c not in self.schema.feature_columns and c != self.schema.id_column
        ]
        if extra:
            logs.info(f"[PredictEngine] dropping columns not used in training: {extra}")

        X = score_df.loc[:, list(self.schema.feature_columns)]
        return self.convert(X)

    def convert(self, X: pd.DataFrame) -> tuple[pd.DataFrame, CoercionReport]:
        out = pd.DataFrame(index=X.index)
        missing: Dict[str, int] = {}
        unparseable: Dict[str, int] = {}
        truncated: Dict[str, int] = {}

        for c in self.schema.feature_columns:
            raw = X[c]
            was_missing = raw.isna()
            values = pd.to_numeric(raw, errors="coerce").astype("float64")
            failed = ~np.isfinite(values) & ~was_missing
            values = values.where(~(was_missing | failed), 0.0)

            dtype = self.schema.conversions.get(c, "float64")
            if dtype == "int64":
                cut = values != np.trunc(values)
                if cut.any():
                    truncated[c] = int(cut.sum())
                values = np.trunc(values)

            if was_missing.any():
                missing[c] = int(was_missing.sum())
            if failed.any():
                unparseable[c] = int(failed.sum())

            out[c] = values.astype(dtype)

        report = CoercionReport(missing=missing, unparseable=unparseable, truncated=truncated)

        if report.total:
            msg = (
                f"[PredictEngine] {report.total} scoring values replaced by 0 or truncated "
                f"missing={missing} unparseable={unparseable} truncated={truncated}"
            )
            if self.strict:
                raise SchemaError(msg)
            logs.warning(msg)

        return out, report

    def predict(self, engine, model: FittedForest, score_df: pd.DataFrame) -> PredictionResult:
        """
        `engine` is the ModelTrainEngine that produced `model`.
        """
        if self.schema.id_column not in score_df.columns:
            raise SchemaError(f"Scoring table is missing id column '{self.schema.id_column}'.")
        if tuple(model.feature_order) != tuple(self.schema.feature_columns):
            raise SchemaError("Fitted model feature order differs from the training schema.")

        X, report = self.align(score_df)
        labels = engine.predict(model, X)

        predictions = pd.DataFrame(
            {
                self.schema.id_column: score_df[self.schema.id_column].to_numpy(),
                self.schema.label_column: labels.array,
            }
        )
        tally = labels.value_counts(sort=False)
        tally.index.name = self.schema.label_column
        tally.name = "count"

        logs.info(f"[PredictEngine] predicted rows={len(predictions)} tally={tally.to_dict()}")
        return PredictionResult(predictions=predictions, tally=tally, coercion=report)
