# tests/conftest.py
from __future__ import annotations

from pathlib import Path

import numpy as np
import pandas as pd
import pytest
from loguru import logger

from liftform.config.app_config import AppConfig

CLASSES = ["A", "B", "C", "D", "E"]


@pytest.fixture(autouse=True)
def disable_file_logger():
    logger.remove()
    logger.add(lambda msg: None)
    yield


def make_observations(
    n_per_class: int = 40,
    *,
    seed: int = 0,
    label: bool = True,
    n_rows: int | None = None,
) -> pd.DataFrame:
    """
    Minimal stand-in for the weight lifting export:
    - 7 identifier / timestamp columns
    - separable numeric sensor columns (int + float)
    - two summary columns that are mostly missing
    - label `classe` (training) or id `problem_id` (scoring)
    """
    rng = np.random.RandomState(seed)

    if n_rows is None:
        labels = np.repeat(CLASSES, n_per_class)
        rng.shuffle(labels)
    else:
        labels = rng.choice(CLASSES, n_rows)
    n = len(labels)
    offset = np.array([CLASSES.index(c) for c in labels], dtype=float)

    kurtosis = np.full(n, np.nan, dtype=object)
    summary_rows = rng.rand(n) < 0.1
    kurtosis[summary_rows] = rng.normal(0, 1, summary_rows.sum()).round(3)
    kurtosis[np.flatnonzero(summary_rows)[:2]] = "#DIV/0!"

    max_roll = np.full(n, np.nan)
    max_roll[summary_rows] = rng.normal(50, 5, summary_rows.sum())

    df = pd.DataFrame(
        {
            "X": np.arange(1, n + 1),
            "user_name": rng.choice(["adelmo", "carlitos", "pedro"], n),
            "raw_timestamp_part_1": 1322489600 + np.arange(n),
            "raw_timestamp_part_2": rng.randint(0, 999999, n),
            "cvtd_timestamp": "28/11/2011 14:13",
            "new_window": np.where(summary_rows, "yes", "no"),
            "num_window": rng.randint(1, 864, n),
            "roll_belt": offset * 10.0 + rng.normal(0, 1.0, n),
            "pitch_belt": -offset * 5.0 + rng.normal(0, 1.0, n),
            "yaw_belt": rng.normal(0, 3.0, n),
            "total_accel_belt": (offset * 3).astype(int) + rng.randint(0, 2, n),
            "kurtosis_roll_belt": kurtosis,
            "max_roll_belt": max_roll,
            "gyros_arm_x": rng.normal(0, 1.0, n),
            "accel_forearm_z": offset * 20.0 + rng.normal(0, 2.0, n),
        }
    )

    if label:
        df["classe"] = labels
    else:
        df["problem_id"] = np.arange(1, n + 1)
    return df


@pytest.fixture
def train_df() -> pd.DataFrame:
    return make_observations(40, seed=1)


@pytest.fixture
def score_df() -> pd.DataFrame:
    return make_observations(seed=2, label=False, n_rows=20)


@pytest.fixture
def train_csv(tmp_path: Path, train_df: pd.DataFrame) -> Path:
    path = tmp_path / "pml-training.csv"
    train_df.to_csv(path, index=False)
    return path


@pytest.fixture
def score_csv(tmp_path: Path, score_df: pd.DataFrame) -> Path:
    path = tmp_path / "pml-testing.csv"
    score_df.to_csv(path, index=False)
    return path


@pytest.fixture
def small_config(tmp_path: Path) -> AppConfig:
    """
    Defaults shrunk for speed: small forests, small CV sample, in-process folds.
    """
    return AppConfig(
        log={"dir": str(tmp_path / "logs")},
        data={"label_categories": CLASSES},
        training={
            "seed": 123,
            "split_fraction": 0.7,
            "forest": {"n_estimators": 30, "n_jobs": 1},
            "cv": {
                "sample_size": 100,
                "folds": 3,
                "n_estimators": 10,
                "workers": 1,
            },
        },
        report={"output_dir": str(tmp_path / "runs"), "plots": True},
    )
