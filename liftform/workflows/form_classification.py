# liftform/workflows/form_classification.py
from __future__ import annotations

from liftform.config.app_config import AppConfig
from liftform.observability.instrumentation import Instrumentation
from liftform.training.pipeline import TrainingPipeline
from liftform.training.steps.clean_step import CleanStep
from liftform.training.steps.cross_validate_step import CrossValidateStep
from liftform.training.steps.dataset_load_step import DatasetLoadStep
from liftform.training.steps.explore_step import ExploreStep
from liftform.training.steps.model_evaluate_step import ModelEvaluateStep
from liftform.training.steps.model_train_step import ModelTrainStep
from liftform.training.steps.predict_step import PredictStep
from liftform.training.steps.report_step import ReportStep
from liftform.training.steps.split_step import SplitStep


def build_form_classification(cfg: AppConfig | None = None, inst: Instrumentation | None = None) -> TrainingPipeline:
    """
    load -> clean -> explore -> split -> train -> evaluate
         -> cross-validate -> predict -> report
    """
    if cfg is None:
        cfg = AppConfig.load()
    if inst is None:
        inst = Instrumentation()

    return TrainingPipeline(
        steps=[
            DatasetLoadStep(inst),
            CleanStep(inst),
            ExploreStep(inst),
            SplitStep(inst),
            ModelTrainStep(inst),
            ModelEvaluateStep(inst),
            CrossValidateStep(inst),
            PredictStep(inst),
            ReportStep(inst),
        ],
        inst=inst,
        cfg=cfg,
    )
