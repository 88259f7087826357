from __future__ import annotations

import numpy as np
import pandas as pd
import pytest

from liftform.training.engines.split_engine import SplitEngine
from liftform.utils.errors import ModelFitError


@pytest.fixture
def labels() -> pd.Series:
    rng = np.random.RandomState(7)
    values = rng.choice(["A", "B", "C", "D", "E"], size=503, p=[0.28, 0.19, 0.17, 0.16, 0.20])
    return pd.Series(pd.Categorical(values, categories=list("ABCDE")), name="classe")


def test_same_seed_same_partition(labels):
    a = SplitEngine(fraction=0.7, seed=123).split(labels)
    b = SplitEngine(fraction=0.7, seed=123).split(labels)

    np.testing.assert_array_equal(a.fit, b.fit)
    np.testing.assert_array_equal(a.validation, b.validation)


def test_different_seed_different_partition(labels):
    a = SplitEngine(fraction=0.7, seed=123).split(labels)
    b = SplitEngine(fraction=0.7, seed=321).split(labels)

    assert not np.array_equal(a.fit, b.fit)


def test_partition_is_disjoint_and_complete(labels):
    split = SplitEngine(fraction=0.7, seed=123).split(labels)

    assert set(split.fit).isdisjoint(split.validation)
    assert set(split.fit) | set(split.validation) == set(range(len(labels)))


def test_fit_fraction(labels):
    split = SplitEngine(fraction=0.7, seed=123).split(labels)

    assert abs(len(split.fit) - 0.7 * len(labels)) <= 1


@pytest.mark.parametrize("seed", [1, 123, 2024])
def test_category_proportions_preserved(labels, seed):
    split = SplitEngine(fraction=0.7, seed=seed).split(labels)

    full = labels.value_counts(normalize=True)
    fit = labels.iloc[split.fit].value_counts(normalize=True)

    # within one row's worth of the fit subset
    assert ((fit - full).abs() < 1.0 / len(split.fit)).all()


def test_singleton_category_cannot_be_stratified():
    labels = pd.Series(["A"] * 10 + ["B"] * 10 + ["C"])

    with pytest.raises(ModelFitError, match=">= 2"):
        SplitEngine(fraction=0.7, seed=123).split(labels)


def test_missing_labels_rejected():
    labels = pd.Series(["A", "B", None, "A", "B", "A"])

    with pytest.raises(ModelFitError, match="missing"):
        SplitEngine(fraction=0.7, seed=123).split(labels)
