# tests/training/conftest.py
from __future__ import annotations

import pandas as pd
import pytest

from liftform.config.training_config import ForestConfig
from liftform.training.engines.clean_engine import CleanEngine
from liftform.training.engines.forest_train_engine import RandomForestTrainEngine


@pytest.fixture
def cleaned(train_df) -> pd.DataFrame:
    engine = CleanEngine(
        label_column="classe",
        na_threshold=0.5,
        excluded_columns=[
            "X",
            "user_name",
            "raw_timestamp_part_1",
            "raw_timestamp_part_2",
            "cvtd_timestamp",
            "new_window",
            "num_window",
        ],
        label_categories=["A", "B", "C", "D", "E"],
    )
    return engine.apply(train_df, engine.plan(train_df))


@pytest.fixture
def Xy(cleaned):
    return cleaned.drop(columns=["classe"]), cleaned["classe"]


@pytest.fixture
def forest_engine() -> RandomForestTrainEngine:
    return RandomForestTrainEngine(
        ForestConfig(n_estimators=25, n_jobs=1),
        seed=123,
        categories=("A", "B", "C", "D", "E"),
    )
