#!filepath: tests/observability/test_instrumentation.py
import time

from loguru import logger

from liftform.observability.instrumentation import Instrumentation, NoOpInstrumentation


def test_instrumentation_timer():
    inst = Instrumentation(enabled=True)

    with inst.timer("fit_forest"):
        time.sleep(0.01)

    assert inst.timeline["fit_forest"] > 0


def test_scope_timer_not_recorded():
    inst = Instrumentation(enabled=True)

    with inst.timer("ModelTrainStep", record=False):
        pass

    assert "ModelTrainStep" not in inst.timeline


def test_timer_records_on_exception():
    inst = Instrumentation(enabled=True)

    try:
        with inst.timer("boom"):
            raise ValueError("x")
    except ValueError:
        pass

    assert "boom" in inst.timeline


def test_instrumentation_progress():
    inst = Instrumentation(enabled=True)

    inst.progress.start("cross_validate", 10, "fits")
    inst.progress.advance("cross_validate", 5)
    inst.progress.done("cross_validate")

    assert inst.progress._tasks == {}


def test_generate_timeline_report():
    inst = Instrumentation(enabled=True)
    with inst.timer("phase_X"):
        time.sleep(0.005)

    captured = []
    sink_id = logger.add(lambda msg: captured.append(str(msg)))
    inst.generate_timeline_report("run-1")
    logger.remove(sink_id)

    output = "\n".join(captured)
    assert "phase_X" in output
    assert "run-1" in output


def test_noop_instrumentation():
    inst = NoOpInstrumentation()

    with inst.timer("anything"):
        pass
    inst.metrics.record("x", 1)
    inst.generate_timeline_report("run-1")

    assert inst.timeline == {}
    assert inst.metrics.metrics == {}


def test_leaf_timer_accumulates():
    inst = Instrumentation(enabled=True)

    for _ in range(2):
        with inst.timer("predict.score"):
            time.sleep(0.002)

    assert list(inst.timeline) == ["predict.score"]
    assert inst.timeline["predict.score"] >= 0.004
    assert inst._timer.counts["predict.score"] == 2
