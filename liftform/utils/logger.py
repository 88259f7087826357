#!filepath: liftform/utils/logger.py
import os
import sys
from pathlib import Path

from loguru import logger

_FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level} | {message}"
_CONSOLE_FORMAT = "<level>{level}</level> | {message}"


class Logging:
    """
    Project logger (loguru)
    ---------------------------------------
    sinks:
    - <log_dir>/<YYYY-MM-DD>.log   rotated + retention window
    - stderr, WARNING and above    (console=True)
    - <run_dir>/run.log            one per pipeline run, see run_sink()
    ---------------------------------------
    """

    def __init__(
        self,
        log_dir: str = "logs",
        rotation: str = "1 day",
        retention: str = "30 days",
        log_level: str = "INFO",
        console: bool = True,
    ):
        self.reconfigure(
            log_dir=log_dir,
            rotation=rotation,
            retention=retention,
            log_level=log_level,
            console=console,
        )

    def reconfigure(
        self,
        *,
        log_dir: str,
        rotation: str,
        retention: str,
        log_level: str,
        console: bool = True,
    ) -> None:
        self.log_dir = log_dir
        self.rotation = rotation
        self.retention = retention
        self.level = log_level
        self.console = console

        os.makedirs(self.log_dir, exist_ok=True)
        self._configure()

    def _configure(self) -> None:
        """
        Replace every loguru sink with the project sinks.
        """
        logger.remove()

        logger.add(
            sink=f"{self.log_dir}/{{time:YYYY-MM-DD}}.log",
            rotation=self.rotation,
            retention=self.retention,
            level=self.level,
            format=_FILE_FORMAT,
            enqueue=True,  # 多进程安全 (CV workers)
            backtrace=True,
            diagnose=True,
        )
        if self.console:
            logger.add(sys.stderr, level="WARNING", format=_CONSOLE_FORMAT)

        logger.info(f"[Logging] configured dir={self.log_dir} level={self.level}")

    # ---------- 日志方法 ----------
    def debug(self, msg: str, *args, **kwargs):
        logger.debug(msg, *args, **kwargs)

    def info(self, msg: str, *args, **kwargs):
        logger.info(msg, *args, **kwargs)

    def warning(self, msg: str, *args, **kwargs):
        logger.warning(msg, *args, **kwargs)

    def error(self, msg: str, *args, **kwargs):
        logger.error(msg, *args, **kwargs)

    def exception(self, msg: str, *args, **kwargs):
        logger.exception(msg, *args, **kwargs)

    # ---------- run sink ----------
    def run_sink(self, run_dir: Path | str) -> int:
        """
        Mirror every record of one run into <run_dir>/run.log.
        Returns the loguru sink id for close_sink().
        """
        os.makedirs(run_dir, exist_ok=True)
        return logger.add(
            os.path.join(str(run_dir), "run.log"),
            level=self.level,
            format=_FILE_FORMAT,
            backtrace=True,
            diagnose=False,
        )

    def close_sink(self, sink_id: int) -> None:
        logger.remove(sink_id)


def init_logging(cfg) -> Logging:
    """
    Rebind the global `logs` sinks from a LogConfig.
    """
    logs.reconfigure(
        log_dir=cfg.dir,
        rotation=cfg.rotation,
        retention=cfg.retention,
        log_level=cfg.level,
        console=cfg.console,
    )
    return logs


# 默认全局 logs（可被 init_logging 替换）
logs = Logging()
