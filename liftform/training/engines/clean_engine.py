# liftform/training/engines/clean_engine.py
from __future__ import annotations

from typing import Optional, Sequence, Tuple

import pandas as pd

from liftform import logs
from liftform.training.schema import CleaningPlan
from liftform.utils.errors import SchemaError


class CleanEngine:
    """
    CleanEngine

    Responsibility:
    - plan(): decide the dropped columns from the TRAINING table
        - missing ratio > na_threshold
        - fixed identifier / timestamp list
      and freeze the label category order
    - apply(): narrow any table with that plan

    Contract:
    - apply() never recomputes missingness, so training and scoring
      tables lose exactly the same columns
    - the label (if present) becomes a Categorical with a fixed category order
    """

    def __init__(
        self,
        *,
        label_column: str,
        na_threshold: float,
        excluded_columns: Sequence[str],
        label_categories: Optional[Sequence[str]] = None,
    ):
        self.label_column = label_column
        self.na_threshold = na_threshold
        self.excluded_columns = list(excluded_columns)
        self.label_categories = list(label_categories) if label_categories else None

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def plan(self, train_df: pd.DataFrame) -> CleaningPlan:
        if self.label_column not in train_df.columns:
            raise SchemaError(f"Training table is missing label column '{self.label_column}'.")

        na_ratio = train_df.isna().mean()
        na_columns = tuple(
            c for c in train_df.columns
            if c != self.label_column and na_ratio[c] > self.na_threshold
        )
        excluded = tuple(c for c in self.excluded_columns if c in train_df.columns)

        plan = CleaningPlan(
            na_columns=na_columns,
            excluded_columns=excluded,
            categories=self._resolve_categories(train_df[self.label_column]),
        )

        logs.info(
            f"[CleanEngine] plan: na_columns={len(na_columns)} "
            f"excluded={list(excluded)} categories={list(plan.categories)}"
        )
        return plan

    def apply(self, df: pd.DataFrame, plan: CleaningPlan) -> pd.DataFrame:
        drop = [c for c in plan.drop_columns if c in df.columns]
        out = df.drop(columns=drop)

        if self.label_column in out.columns:
            out[self.label_column] = self._to_categorical(out[self.label_column], plan.categories)

        return out

    def clean_pair(
        self, train_df: pd.DataFrame, score_df: pd.DataFrame
    ) -> Tuple[pd.DataFrame, pd.DataFrame, CleaningPlan]:
        plan = self.plan(train_df)
        return self.apply(train_df, plan), self.apply(score_df, plan), plan

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _resolve_categories(self, labels: pd.Series) -> Tuple[str, ...]:
        observed = labels.dropna().astype(str).unique().tolist()

        if self.label_categories is None:
            return tuple(sorted(observed))

        unknown = sorted(set(observed) - set(self.label_categories))
        if unknown:
            raise SchemaError(
                f"Label '{self.label_column}' has values outside the configured "
                f"categories {self.label_categories}: {unknown}"
            )
        return tuple(self.label_categories)

    @staticmethod
    def _to_categorical(labels: pd.Series, categories: Tuple[str, ...]) -> pd.Series:
        values = labels.map(lambda v: v if pd.isna(v) else str(v))
        return pd.Series(
            pd.Categorical(values, categories=list(categories)),
            index=labels.index,
            name=labels.name,
        )
