# liftform/config/training_config.py
from __future__ import annotations

from typing import List, Optional, Union

from pydantic import BaseModel, Field


class ForestConfig(BaseModel):
    """
    Primary random forest (fixed, not tuned).
    """

    n_estimators: int = Field(100, ge=1)
    max_features: Union[int, float, str] = "sqrt"
    oob_score: bool = True
    n_jobs: Optional[int] = -1


class CrossValidationConfig(BaseModel):
    """
    Evaluation-only k-fold run over a row sample.
    """

    enabled: bool = True
    sample_size: int = Field(5000, ge=1)
    folds: int = Field(5, ge=2)
    n_estimators: int = Field(50, ge=1)

    # None -> [2, (p + 2) // 2, p]
    max_features_grid: Optional[List[int]] = None

    # None -> cpu_count - 1 ; 1 -> in-process
    workers: Optional[int] = None


class ExploreConfig(BaseModel):
    correlation_threshold: float = Field(0.8, gt=0.0, le=1.0)
    nzv_freq_ratio: float = 95 / 5
    nzv_unique_percent: float = 10.0


class TrainingConfig(BaseModel):
    """
    TrainingConfig

    Every knob of one run. Threaded through the pipeline context,
    never read from module globals.
    """

    name: str = "pml"
    seed: int = 123
    split_fraction: float = Field(0.7, gt=0.0, lt=1.0)

    # raise instead of filling 0 when scoring values fail coercion
    strict_coercion: bool = False

    forest: ForestConfig = Field(default_factory=ForestConfig)
    cv: CrossValidationConfig = Field(default_factory=CrossValidationConfig)
    explore: ExploreConfig = Field(default_factory=ExploreConfig)
