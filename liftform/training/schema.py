# liftform/training/schema.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Tuple

import pandas as pd


@dataclass(frozen=True)
class CleaningPlan:
    """
    CleaningPlan (FROZEN)

    Derived from the TRAINING table only and applied verbatim
    to every other table of the run.
    """

    na_columns: Tuple[str, ...]
    excluded_columns: Tuple[str, ...]
    categories: Tuple[str, ...]

    @property
    def drop_columns(self) -> Tuple[str, ...]:
        seen = dict.fromkeys(self.na_columns + self.excluded_columns)
        return tuple(seen)


@dataclass(frozen=True)
class ColumnSchema:
    """
    ColumnSchema (FROZEN)

    Ordered predictor columns of the fitted model plus the
    per-column numeric conversion used at scoring time.
    """

    feature_columns: Tuple[str, ...]
    label_column: str
    id_column: str
    categories: Tuple[str, ...]
    conversions: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_training(
        cls,
        df: pd.DataFrame,
        *,
        label_column: str,
        id_column: str,
        categories: Tuple[str, ...],
    ) -> "ColumnSchema":
        features = tuple(
            c for c in df.columns if c not in (label_column, id_column)
        )
        conversions = {
            c: "int64" if pd.api.types.is_integer_dtype(df[c]) else "float64"
            for c in features
        }
        return cls(
            feature_columns=features,
            label_column=label_column,
            id_column=id_column,
            categories=tuple(categories),
            conversions=conversions,
        )
