# liftform/config/report_config.py
from pydantic import BaseModel, Field


class ReportConfig(BaseModel):
    # run reports go to <output_dir>/<run_id>/
    output_dir: str = "runs"
    plots: bool = True
    top_importance: int = Field(20, ge=1)
