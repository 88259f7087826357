from __future__ import annotations

import pandas as pd
import pytest

from liftform.training.engines.model_evaluate_engine import ModelEvaluateEngine

LABELS = ["A", "B", "C", "D", "E"]


def test_confusion_matrix_counts_every_row():
    y_true = pd.Series(list("AABBCCDDEE"))
    y_pred = pd.Series(list("AABCCCDDEA"))

    result = ModelEvaluateEngine(labels=LABELS).evaluate(y_true, y_pred)

    assert int(result.confusion.to_numpy().sum()) == len(y_true)
    assert result.confusion.sum(axis=1).tolist() == [2, 2, 2, 2, 2]
    assert list(result.confusion.index) == LABELS
    assert list(result.confusion.columns) == LABELS
    assert result.confusion.loc["B", "C"] == 1
    assert result.confusion.loc["E", "A"] == 1


def test_accuracy_and_error_rate():
    y_true = pd.Series(list("AABBCCDDEE"))
    y_pred = pd.Series(list("AABCCCDDEA"))

    result = ModelEvaluateEngine(labels=LABELS).evaluate(y_true, y_pred)

    assert result.accuracy == pytest.approx(0.8)
    assert result.error_rate == pytest.approx(0.2)
    assert result.accuracy_ci[0] < 0.8 < result.accuracy_ci[1]
    assert result.n_rows == 10


def test_perfect_prediction():
    y = pd.Series(pd.Categorical(list("ABCDEABCDE"), categories=LABELS))

    result = ModelEvaluateEngine(labels=LABELS).evaluate(y, y)

    assert result.accuracy == 1.0
    assert result.kappa == pytest.approx(1.0)
    assert result.per_class["recall"].tolist() == [1.0] * 5


def test_unpredicted_category_has_zero_column():
    y_true = pd.Series(list("AABB"))
    y_pred = pd.Series(list("AAAA"))

    result = ModelEvaluateEngine(labels=LABELS).evaluate(y_true, y_pred)

    assert result.confusion["B"].sum() == 0
    assert result.per_class.loc["B", "recall"] == 0.0


def test_length_mismatch_rejected():
    with pytest.raises(ValueError, match="mismatch"):
        ModelEvaluateEngine(labels=LABELS).evaluate(pd.Series(["A"]), pd.Series(["A", "B"]))


def test_empty_rejected():
    with pytest.raises(ValueError, match="empty"):
        ModelEvaluateEngine(labels=LABELS).evaluate(pd.Series([], dtype=str), pd.Series([], dtype=str))
