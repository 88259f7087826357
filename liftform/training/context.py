# liftform/training/context.py
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import pandas as pd

from liftform.training.schema import CleaningPlan, ColumnSchema


@dataclass
class TrainingContext:
    """
    TrainingContext

    Semantics:
    - One context == one run
    - run_id / cfg / inputs are bound at creation
    - each step fills the fields it owns, later steps only read them
    """

    # -------------------------
    # Identity
    # -------------------------
    run_id: str

    # -------------------------
    # Static bindings
    # -------------------------
    cfg: Any
    inst: Any
    output_dir: Path
    train_path: Optional[Path] = None
    score_path: Optional[Path] = None

    # -------------------------
    # Load / clean
    # -------------------------
    raw_train: Optional[pd.DataFrame] = None
    raw_score: Optional[pd.DataFrame] = None
    plan: Optional[CleaningPlan] = None
    train_df: Optional[pd.DataFrame] = None
    score_df: Optional[pd.DataFrame] = None
    schema: Optional[ColumnSchema] = None
    explore: Any = None

    # -------------------------
    # Split
    # -------------------------
    split: Any = None
    fit_X: Optional[pd.DataFrame] = None
    fit_y: Optional[pd.Series] = None
    valid_X: Optional[pd.DataFrame] = None
    valid_y: Optional[pd.Series] = None

    # -------------------------
    # Model / evaluation
    # -------------------------
    engine: Any = None
    model: Any = None
    forest_summary: Any = None
    importance: Optional[pd.Series] = None
    evaluation: Any = None
    cv: Any = None
    prediction: Any = None

    metrics: Dict[str, Any] = field(default_factory=dict)
    reports: Dict[str, Path] = field(default_factory=dict)
