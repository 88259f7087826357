#!filepath: liftform/utils/path.py
from pathlib import Path
from typing import Optional

from liftform import logs


class PathManager:
    """
    Run directory layout:

    <root>/
     └── <output_dir>/          (report.output_dir, default "runs")
           └── <run_id>/
                 ├── metrics.json
                 ├── predictions.csv
                 └── ...

    root defaults to the current working directory;
    an absolute output_dir ignores root.
    """

    _root: Optional[Path] = None

    @classmethod
    def root(cls) -> Path:
        if cls._root is None:
            cls._root = Path.cwd()
        return cls._root

    @classmethod
    def set_root(cls, new_root: Path | str | None):
        if new_root is None:
            cls._root = None
        else:
            cls._root = Path(new_root).resolve()
        logs.debug(f"[PathManager] set_root = {cls._root}")

    @classmethod
    def runs_dir(cls, output_dir: Path | str = "runs") -> Path:
        return cls.root() / Path(output_dir)

    @classmethod
    def run_dir(cls, run_id: str, output_dir: Path | str = "runs") -> Path:
        return cls.runs_dir(output_dir) / run_id
