# liftform/training/engines/dataset_load_engine.py
from __future__ import annotations

from pathlib import Path
from typing import Sequence, Tuple

import pandas as pd

from liftform import logs
from liftform.utils.errors import DatasetReadError, SchemaError


class DatasetLoadEngine:
    """
    DatasetLoadEngine

    Responsibility:
    - Read the training / scoring delimited text files
    - Check the raw column contract:
        - training carries the label, scoring does not
        - scoring carries the id column
        - both share the same columns apart from label / id
    """

    def __init__(
        self,
        *,
        label_column: str,
        id_column: str,
        na_values: Sequence[str],
    ):
        self.label_column = label_column
        self.id_column = id_column
        self.na_values = list(na_values)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def load(self, train_path: Path | str, score_path: Path | str) -> Tuple[pd.DataFrame, pd.DataFrame]:
        train_df = self.read_table(train_path)
        score_df = self.read_table(score_path)

        self.validate(train_df, score_df)

        logs.info(
            f"[DatasetLoadEngine] train rows={len(train_df)} cols={train_df.shape[1]} "
            f"score rows={len(score_df)} cols={score_df.shape[1]}"
        )
        return train_df, score_df

    def read_table(self, path: Path | str) -> pd.DataFrame:
        path = Path(path)
        if not path.is_file():
            raise DatasetReadError(f"Missing input file: {path}")

        try:
            df = pd.read_csv(
                path,
                na_values=self.na_values,
                keep_default_na=True,
                low_memory=False,
            )
        except (pd.errors.EmptyDataError, pd.errors.ParserError, UnicodeDecodeError) as e:
            raise DatasetReadError(f"Not a valid delimited text file: {path} ({e})") from e
        except OSError as e:
            raise DatasetReadError(f"Cannot read {path}: {e}") from e

        if df.shape[1] == 0:
            raise DatasetReadError(f"No header columns found in {path}")

        logs.debug(f"[DatasetLoadEngine] read {path} shape={df.shape}")
        return df

    def validate(self, train_df: pd.DataFrame, score_df: pd.DataFrame) -> None:
        if self.label_column not in train_df.columns:
            raise SchemaError(f"Training table is missing label column '{self.label_column}'.")
        if self.label_column in score_df.columns:
            raise SchemaError(f"Scoring table should NOT contain label column '{self.label_column}'.")
        if self.id_column not in score_df.columns:
            raise SchemaError(f"Scoring table is missing id column '{self.id_column}'.")

        train_cols = set(train_df.columns) - {self.label_column, self.id_column}
        score_cols = set(score_df.columns) - {self.id_column}
        if train_cols != score_cols:
            only_train = sorted(train_cols - score_cols)[:10]
            only_score = sorted(score_cols - train_cols)[:10]
            raise SchemaError(
                "Training/scoring columns mismatch. "
                f"only in training (first 10)={only_train}, "
                f"only in scoring (first 10)={only_score}"
            )
