#!filepath: liftform/config/data_config.py
from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


class DataConfig(BaseModel):
    """
    DataConfig

    Column contract of the training / scoring tables.
    """

    label_column: str = "classe"
    id_column: str = "problem_id"

    # tokens read as missing (the raw export writes spreadsheet errors)
    na_values: List[str] = Field(default_factory=lambda: ["NA", "", "#DIV/0!"])

    # columns whose missing ratio is strictly above this are dropped
    na_threshold: float = Field(0.5, ge=0.0, le=1.0)

    # identifier / timestamp columns, never predictors
    excluded_columns: List[str] = Field(
        default_factory=lambda: [
            "X",
            "user_name",
            "raw_timestamp_part_1",
            "raw_timestamp_part_2",
            "cvtd_timestamp",
            "new_window",
            "num_window",
        ]
    )

    # fixed label ordering; None -> sorted distinct training labels
    label_categories: Optional[List[str]] = None
