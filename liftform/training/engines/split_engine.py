# liftform/training/engines/split_engine.py
from __future__ import annotations

from dataclasses import dataclass

import numpy as np
import pandas as pd
from sklearn.model_selection import train_test_split

from liftform import logs
from liftform.utils.errors import ModelFitError


@dataclass(frozen=True)
class SplitIndices:
    """
    Positional row indices. fit and validation are disjoint,
    their union is every row of the split table.
    """

    fit: np.ndarray
    validation: np.ndarray


class SplitEngine:
    """
    SplitEngine

    Stratified fit / validation partition. Same seed -> same partition.
    """

    def __init__(self, *, fraction: float, seed: int):
        self.fraction = fraction
        self.seed = seed

    def split(self, labels: pd.Series) -> SplitIndices:
        if labels.isna().any():
            raise ModelFitError(f"Label has {int(labels.isna().sum())} missing values.")

        counts = labels.value_counts()
        counts = counts[counts > 0]
        if counts.empty:
            raise ModelFitError("Cannot split an empty table.")

        thin = counts[counts < 2]
        if not thin.empty:
            raise ModelFitError(
                f"Stratified split needs >= 2 rows per category, got {thin.to_dict()}"
            )

        positions = np.arange(len(labels))
        try:
            fit_idx, valid_idx = train_test_split(
                positions,
                train_size=self.fraction,
                random_state=self.seed,
                shuffle=True,
                stratify=labels.to_numpy(),
            )
        except ValueError as e:
            raise ModelFitError(f"Stratified split failed: {e}") from e

        fit_idx = np.sort(fit_idx)
        valid_idx = np.sort(valid_idx)

        logs.info(
            f"[SplitEngine] fraction={self.fraction} seed={self.seed} "
            f"fit={len(fit_idx)} validation={len(valid_idx)}"
        )
        return SplitIndices(fit=fit_idx, validation=valid_idx)
