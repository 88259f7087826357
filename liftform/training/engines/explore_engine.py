# liftform/training/engines/explore_engine.py
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

import numpy as np
import pandas as pd

from liftform import logs


@dataclass(frozen=True)
class ExploreResult:
    class_distribution: pd.Series
    correlation: pd.DataFrame
    high_correlation_pairs: List[Tuple[str, str, float]]
    near_zero_variance: List[str]


class ExploreEngine:
    """
    ExploreEngine

    Diagnostics on the cleaned training table. Never drops columns.
    """

    def __init__(
        self,
        *,
        label_column: str,
        correlation_threshold: float = 0.8,
        nzv_freq_ratio: float = 95 / 5,
        nzv_unique_percent: float = 10.0,
    ):
        self.label_column = label_column
        self.correlation_threshold = correlation_threshold
        self.nzv_freq_ratio = nzv_freq_ratio
        self.nzv_unique_percent = nzv_unique_percent

    def explore(self, train_df: pd.DataFrame) -> ExploreResult:
        dist = self.class_distribution(train_df[self.label_column])

        numeric = train_df.drop(columns=[self.label_column]).select_dtypes(include=[np.number])
        corr = numeric.corr()
        pairs = self.high_correlation_pairs(corr)
        nzv = self.near_zero_variance(numeric)

        logs.info(
            f"[ExploreEngine] classes={dist.to_dict()} "
            f"features={numeric.shape[1]} "
            f"|r|>{self.correlation_threshold}: {len(pairs)} pairs "
            f"nzv={nzv}"
        )
        return ExploreResult(
            class_distribution=dist,
            correlation=corr,
            high_correlation_pairs=pairs,
            near_zero_variance=nzv,
        )

    @staticmethod
    def class_distribution(labels: pd.Series) -> pd.Series:
        # categorical value_counts keeps declared categories (zero counts included)
        counts = labels.value_counts(sort=False, dropna=False)
        counts.index.name = labels.name
        counts.name = "count"
        return counts

    def high_correlation_pairs(self, corr: pd.DataFrame) -> List[Tuple[str, str, float]]:
        cols = list(corr.columns)
        values = corr.to_numpy()

        pairs: List[Tuple[str, str, float]] = []
        for i in range(len(cols)):
            for j in range(i + 1, len(cols)):
                r = values[i, j]
                if not np.isnan(r) and abs(r) > self.correlation_threshold:
                    pairs.append((cols[i], cols[j], float(r)))

        pairs.sort(key=lambda p: abs(p[2]), reverse=True)
        return pairs

    def near_zero_variance(self, numeric: pd.DataFrame) -> List[str]:
        """
        Frequency ratio of the two most common values above nzv_freq_ratio
        AND percent of distinct values below nzv_unique_percent,
        or a single distinct value.
        """
        out: List[str] = []
        n = len(numeric)
        if n == 0:
            return out

        for c in numeric.columns:
            counts = numeric[c].value_counts(dropna=True)
            if len(counts) <= 1:
                out.append(c)
                continue

            freq_ratio = counts.iloc[0] / counts.iloc[1]
            unique_percent = 100.0 * len(counts) / n
            if freq_ratio > self.nzv_freq_ratio and unique_percent < self.nzv_unique_percent:
                out.append(c)

        return out
