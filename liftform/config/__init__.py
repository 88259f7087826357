from .app_config import AppConfig
from .data_config import DataConfig
from .log_config import LogConfig
from .report_config import ReportConfig
from .training_config import (
    CrossValidationConfig,
    ExploreConfig,
    ForestConfig,
    TrainingConfig,
)

__all__ = [
    "AppConfig",
    "DataConfig",
    "LogConfig",
    "ReportConfig",
    "TrainingConfig",
    "ForestConfig",
    "CrossValidationConfig",
    "ExploreConfig",
]
