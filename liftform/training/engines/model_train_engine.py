# liftform/training/engines/model_train_engine.py
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

import pandas as pd


class ModelTrainEngine(ABC):
    """
    Abstract ModelTrainEngine

    Narrow model seam:
    - fit(X, y)            -> fitted model
    - predict(model, X)    -> labels
    - feature_importance() -> ranking
    """

    def __init__(self, cfg):
        self.cfg = cfg

    @abstractmethod
    def fit(self, *, X: pd.DataFrame, y: pd.Series) -> Any:
        raise NotImplementedError

    @abstractmethod
    def predict(self, model: Any, X: pd.DataFrame) -> pd.Series:
        raise NotImplementedError

    @abstractmethod
    def feature_importance(self, model: Any) -> pd.Series:
        raise NotImplementedError
