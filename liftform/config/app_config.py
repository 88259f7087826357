#!filepath: liftform/config/app_config.py
from __future__ import annotations

import os

import yaml
from pydantic import BaseModel, Field

from .data_config import DataConfig
from .log_config import LogConfig
from .report_config import ReportConfig
from .training_config import TrainingConfig


def default_config_path() -> str:
    """
    Packaged defaults: liftform/config/base.yml
    """
    return os.path.join(os.path.dirname(os.path.abspath(__file__)), "base.yml")


class AppConfig(BaseModel):
    log: LogConfig = Field(default_factory=LogConfig)
    data: DataConfig = Field(default_factory=DataConfig)
    training: TrainingConfig = Field(default_factory=TrainingConfig)
    report: ReportConfig = Field(default_factory=ReportConfig)

    @classmethod
    def load(cls, path: str | None = None) -> "AppConfig":
        """
        Load a YAML config.
        - default: packaged base.yml
        - sections / keys missing from the file keep their defaults
        """
        if path is None:
            path = default_config_path()

        if not os.path.exists(path):
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}

        return cls(**raw)
