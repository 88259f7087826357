#!filepath: liftform/config/log_config.py
from typing import Literal

from pydantic import BaseModel


class LogConfig(BaseModel):
    """
    loguru file sink: <dir>/<YYYY-MM-DD>.log
    rotation / retention use loguru's own duration strings.
    """

    dir: str = "logs"
    rotation: str = "1 day"
    retention: str = "30 days"
    # echo WARNING and above to stderr
    console: bool = True
    level: Literal["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"] = "INFO"
