# liftform/training/engines/report_engine.py
from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt  # noqa: E402
import pandas as pd  # noqa: E402


class ReportEngine:
    """
    ReportEngine

    Responsibility:
    - Persist run reports (CSV / JSON / PNG) into one directory
    - Each writer returns the written path
    """

    def __init__(self, out_dir: Path):
        self.out_dir = Path(out_dir)

    def _path(self, name: str) -> Path:
        self.out_dir.mkdir(parents=True, exist_ok=True)
        return self.out_dir / name

    # ---------------- tables ----------------

    def write_csv(self, obj: pd.DataFrame | pd.Series, name: str, *, index: bool = True) -> Path:
        path = self._path(name)
        obj.to_csv(path, index=index)
        return path

    def write_json(self, data: dict[str, Any], name: str) -> Path:
        path = self._path(name)
        path.write_text(
            json.dumps(data, indent=2, ensure_ascii=False, default=str),
            encoding="utf-8",
        )
        return path

    # ---------------- figures ----------------

    def plot_class_distribution(self, counts: pd.Series) -> Path:
        path = self._path("class_distribution.png")

        plt.figure(figsize=(6, 4))
        plt.bar([str(i) for i in counts.index], counts.to_numpy())
        plt.title("Class distribution")
        plt.xlabel(str(counts.index.name or "class"))
        plt.ylabel("rows")
        plt.tight_layout()
        plt.savefig(path)
        plt.close()

        return path

    def plot_correlation(self, corr: pd.DataFrame) -> Path:
        path = self._path("correlation.png")
        size = max(6, min(20, 0.25 * len(corr.columns)))

        plt.figure(figsize=(size, size))
        plt.imshow(corr.to_numpy(), cmap="RdBu_r", vmin=-1.0, vmax=1.0)
        plt.colorbar(fraction=0.046, pad=0.04)
        plt.xticks(range(len(corr.columns)), corr.columns, rotation=90, fontsize=6)
        plt.yticks(range(len(corr.index)), corr.index, fontsize=6)
        plt.title("Feature correlation")
        plt.tight_layout()
        plt.savefig(path)
        plt.close()

        return path

    def plot_importance(self, ranking: pd.Series, top: int = 20) -> Path:
        path = self._path("variable_importance.png")
        head = ranking.head(top)[::-1]

        plt.figure(figsize=(8, max(3, 0.3 * len(head))))
        plt.barh([str(i) for i in head.index], head.to_numpy())
        plt.title(f"Variable importance (top {len(head)})")
        plt.xlabel("mean decrease in impurity")
        plt.tight_layout()
        plt.savefig(path)
        plt.close()

        return path
