from __future__ import annotations

import numpy as np
import pandas as pd

from liftform.training.engines.explore_engine import ExploreEngine


def test_explore_cleaned_training_table(cleaned):
    result = ExploreEngine(label_column="classe").explore(cleaned)

    assert result.class_distribution.to_dict() == {c: 40 for c in "ABCDE"}
    assert "classe" not in result.correlation.columns
    assert result.correlation.shape[0] == result.correlation.shape[1]


def test_explore_never_drops_columns(cleaned):
    before = list(cleaned.columns)
    ExploreEngine(label_column="classe").explore(cleaned)

    assert list(cleaned.columns) == before


def test_class_distribution_keeps_empty_categories():
    labels = pd.Series(pd.Categorical(["A", "A", "B"], categories=list("ABC")), name="classe")

    counts = ExploreEngine.class_distribution(labels)

    assert counts.to_dict() == {"A": 2, "B": 1, "C": 0}
    assert counts.name == "count"


def test_high_correlation_pairs_sorted_by_strength():
    rng = np.random.RandomState(0)
    base = rng.normal(size=200)
    df = pd.DataFrame(
        {
            "a": base,
            "b": base * 2 + rng.normal(0, 0.01, 200),
            "c": -base + rng.normal(0, 0.5, 200),
            "d": rng.normal(size=200),
        }
    )

    pairs = ExploreEngine(label_column="classe").high_correlation_pairs(df.corr())

    assert [(p[0], p[1]) for p in pairs[:1]] == [("a", "b")]
    assert all(abs(r) > 0.8 for _, _, r in pairs)
    assert not any("d" in (x, y) for x, y, _ in pairs)


def test_near_zero_variance():
    n = 100
    df = pd.DataFrame(
        {
            "constant": np.ones(n),
            "mostly_zero": [0.0] * 98 + [1.0, 2.0],
            "spread": np.arange(n, dtype=float),
        }
    )

    nzv = ExploreEngine(label_column="classe").near_zero_variance(df)

    assert nzv == ["constant", "mostly_zero"]
