#!filepath: tests/observability/test_metrics.py
from liftform.observability.metrics import MetricRecorder


def test_metric_record():
    m = MetricRecorder(enabled=True)
    m.record("oob_error", 0.01)

    assert m.metrics["oob_error"] == 0.01


def test_metric_disabled():
    m = MetricRecorder(enabled=False)
    m.record("x", 1)

    assert m.metrics == {}


def test_metric_overwrite_keeps_last():
    m = MetricRecorder()
    m.record("rows", 1)
    m.record("rows", 2)

    assert m.metrics["rows"] == 2


def test_snapshot_is_a_copy():
    m = MetricRecorder()
    m.record("accuracy", 0.123456789)

    snap = m.snapshot()
    snap["accuracy"] = 0.0

    assert m.metrics["accuracy"] == 0.123456789
